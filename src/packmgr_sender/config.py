"""Delivery configuration: targets, package manager path and readiness check."""

import os
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Target
from .runtime.config import PACKMGR_PATH_AEM, PACKMGR_PATH_SLING


class PackmgrPath(str, Enum):
    """Known package manager service paths."""

    AEM = "AEM"
    SLING = "SLING"

    @property
    def path(self) -> str:
        if self is PackmgrPath.SLING:
            return PACKMGR_PATH_SLING
        return PACKMGR_PATH_AEM


def resolve_packmgr_path(value: Optional[Union[str, PackmgrPath]]) -> str:
    """Resolve a preset name or literal path to a concrete HTTP path.

    ``None`` and the empty string resolve to the AEM preset. Anything that is
    not a preset name is treated as a literal path.
    """
    if isinstance(value, PackmgrPath):
        return value.path
    if not value:
        return PackmgrPath.AEM.path

    try:
        return PackmgrPath(value).path
    except ValueError:
        pass

    return value if value.startswith("/") else f"/{value}"


class SenderConfig(BaseModel):
    """Configuration for one ``Sender``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    targets: List[Target] = Field(
        ..., min_length=1, description="Package manager endpoints, credentials embedded"
    )
    packmgr_path: str = Field(
        default=PACKMGR_PATH_AEM,
        description="'AEM', 'SLING' or a literal package manager path",
    )
    check_bundles: bool = Field(
        default=False,
        description="Wait until all bundles are started before submitting",
    )

    @field_validator("targets", mode="before")
    @classmethod
    def parse_targets(cls, value):
        if isinstance(value, (str, Target)):
            value = [value]
        return [Target.parse(t) if isinstance(t, str) else t for t in value]

    @field_validator("packmgr_path", mode="before")
    @classmethod
    def resolve_path(cls, value):
        return resolve_packmgr_path(value)

    @classmethod
    def from_env(cls, **overrides) -> "SenderConfig":
        """Build config from PACKMGR_* environment variables.

        Explicit keyword overrides that are not None take precedence.

        Environment:
            PACKMGR_TARGETS: Comma separated target URLs.
            PACKMGR_PATH: Preset name or literal path.
            PACKMGR_CHECK_BUNDLES: "1", "true" or "yes" to enable.
        """
        values = {
            "targets": [
                t.strip()
                for t in os.getenv("PACKMGR_TARGETS", "").split(",")
                if t.strip()
            ],
            "packmgr_path": os.getenv("PACKMGR_PATH"),
            "check_bundles": os.getenv("PACKMGR_CHECK_BUNDLES", "false").lower()
            in ("1", "true", "yes"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

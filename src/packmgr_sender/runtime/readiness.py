"""Readiness polling of a target's bundle subsystem."""

import asyncio
import logging
from enum import Enum
from typing import Optional

import httpx

from packmgr_sender.core.utils.http import (
    get_authenticated_httpx_client,
    transport_error_code,
)
from packmgr_sender.models import BundleStatusSnapshot, Target

from .config import (
    DEFAULT_STATUS_TIMEOUT,
    EXHAUSTED_MESSAGE,
    MAX_READINESS_ATTEMPTS,
    PARSE_FAILED_MESSAGE,
    READINESS_RETRY_INTERVAL,
    SYSTEM_CONSOLE_BUNDLES,
)
from .exceptions import (
    DeliveryError,
    NetworkError,
    ReadinessExhausted,
    StatusParseFailed,
    StatusQueryFailed,
)

logger = logging.getLogger(__name__)


class ReadinessState(Enum):
    """Readiness poller state machine."""

    CHECKING = "checking"
    RETRYING = "retrying"
    READY = "ready"
    EXHAUSTED = "exhausted"
    NETWORK_FAILED = "network_failed"
    PARSE_FAILED = "parse_failed"
    STATUS_FAILED = "status_failed"

    @property
    def terminal(self) -> bool:
        return self not in (ReadinessState.CHECKING, ReadinessState.RETRYING)


class ReadinessPoller:
    """Polls ``/system/console/bundles.json`` until the target is ready.

    The target counts as ready once no bundle is stopping or failed. Polling
    uses a fixed interval and gives up after ``max_attempts`` checks.

    State transitions:
        CHECKING -> READY | RETRYING | NETWORK_FAILED | STATUS_FAILED | PARSE_FAILED
        RETRYING -> CHECKING (after the interval) | EXHAUSTED (at max_attempts)
    """

    def __init__(
        self,
        target: Target,
        max_attempts: int = MAX_READINESS_ATTEMPTS,
        retry_interval: float = READINESS_RETRY_INTERVAL,
        timeout: float = DEFAULT_STATUS_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize poller for a single target.

        Args:
            target: Target to poll.
            max_attempts: Total number of status checks (default: 11).
            retry_interval: Seconds to wait between checks (default: 1.0).
            timeout: Status request timeout in seconds (default: 10).
            transport: Optional httpx transport, mostly for tests.
        """
        self.target = target
        self.max_attempts = max_attempts
        self.retry_interval = retry_interval
        self.timeout = timeout
        self.transport = transport

        self.state = ReadinessState.CHECKING
        self.attempt = 1
        self.error: Optional[DeliveryError] = None

    @property
    def status_url(self) -> str:
        return f"{self.target.public_url}{SYSTEM_CONSOLE_BUNDLES}"

    async def wait_until_ready(self) -> None:
        """Drive the state machine until a terminal state is reached.

        Raises:
            NetworkError: If the status query got no response.
            StatusQueryFailed: If the status query returned a non-200 status.
            StatusParseFailed: If the status body could not be parsed.
            ReadinessExhausted: If the target never became ready.
        """
        logger.debug(f"Checking if {self.target.host} is fully up and running...")

        async with get_authenticated_httpx_client(
            self.target, timeout=self.timeout, transport=self.transport
        ) as client:
            while not self.state.terminal:
                if self.state is ReadinessState.RETRYING:
                    await asyncio.sleep(self.retry_interval)
                    self.attempt += 1
                    self.state = ReadinessState.CHECKING
                await self._check(client)

        if self.error is not None:
            raise self.error

    async def _check(self, client: httpx.AsyncClient) -> None:
        """Run one status query and transition from CHECKING."""
        try:
            response = await client.get(self.status_url)
        except httpx.HTTPError as e:
            self._fail(ReadinessState.NETWORK_FAILED, NetworkError(transport_error_code(e)))
            return

        if response.status_code != 200:
            self._fail(
                ReadinessState.STATUS_FAILED, StatusQueryFailed(str(response.status_code))
            )
            return

        try:
            snapshot = BundleStatusSnapshot.from_json(response.json())
        except (ValueError, RecursionError):
            self._fail(ReadinessState.PARSE_FAILED, StatusParseFailed(PARSE_FAILED_MESSAGE))
            return

        logger.debug(f"{self.target.host} bundle status: {snapshot.counters}")

        if snapshot.ready:
            self.state = ReadinessState.READY
            return

        if self.attempt >= self.max_attempts:
            self._fail(ReadinessState.EXHAUSTED, ReadinessExhausted(EXHAUSTED_MESSAGE))
            return

        logger.info(
            f"not all services started, will wait with deployment "
            f"({self.attempt}/{self.max_attempts - 1})"
        )
        self.state = ReadinessState.RETRYING

    def _fail(self, state: ReadinessState, error: DeliveryError) -> None:
        logger.debug(f"{self.target.host} readiness check {state.value}: {error}")
        self.state = state
        self.error = error

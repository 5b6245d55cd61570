"""Authenticated multipart upload of a package to one package manager."""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

import httpx

from packmgr_sender.core.utils.http import (
    get_authenticated_httpx_client,
    transport_error_code,
)
from packmgr_sender.models import Target

from .config import DEFAULT_SUBMIT_TIMEOUT, PACKMGR_PATH_AEM
from .exceptions import NetworkError, PackageNotFoundError, PackageReadError
from .response_interpreter import ResponseInterpreter

logger = logging.getLogger(__name__)


class FormSubmitter:
    """Posts the package manager install form and interprets the answer.

    The form carries three fields: ``file`` (the package), ``force=true`` and
    ``install=true``. Each submission opens its own handle on the package.
    """

    def __init__(
        self,
        packmgr_path: str = PACKMGR_PATH_AEM,
        timeout: float = DEFAULT_SUBMIT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize submitter.

        Args:
            packmgr_path: Resolved package manager service path.
            timeout: Request timeout in seconds (default: 300).
            transport: Optional httpx transport, mostly for tests.
        """
        self.packmgr_path = packmgr_path
        self.timeout = timeout
        self.transport = transport

    def url_for(self, target: Target) -> str:
        return f"{target.base_url}{self.packmgr_path}"

    async def submit(
        self, package_path: Union[str, Path], target: Target
    ) -> ResponseInterpreter:
        """Upload the package to the target.

        Args:
            package_path: Path of the package zip to upload.
            target: Destination package manager.

        Returns:
            The interpreter holding the full response and a successful verdict.

        Raises:
            PackageNotFoundError: If the package file does not exist.
            PackageReadError: If the package file cannot be opened.
            NetworkError: If no response was received.
            SubmissionRejected: If the package manager reported a failure.
            UnrecognizedResponse: If the response held no status line.
        """
        package_path = Path(package_path)
        package = open_package(package_path)

        url = self.url_for(target)
        interpreter = ResponseInterpreter(target.host)
        logger.debug(f"Posting {package_path.name} to {target.host}{self.packmgr_path}")

        with package:
            async with get_authenticated_httpx_client(
                target, timeout=self.timeout, transport=self.transport
            ) as client:
                files = {"file": (package_path.name, package, "application/zip")}
                data = {"force": "true", "install": "true"}
                response_received = False
                try:
                    async with client.stream(
                        "POST", url, files=files, data=data
                    ) as response:
                        response_received = True
                        async for chunk in response.aiter_bytes():
                            interpreter.feed(chunk)
                except httpx.HTTPError as e:
                    code = transport_error_code(e)
                    if not response_received:
                        logger.debug(f"Submission to {target.host} failed: {code} ({e})")
                        raise NetworkError(code) from e
                    # Interpret whatever arrived before the stream broke.
                    logger.warning(f"Response from {target.host} was cut short: {code}")

        interpreter.finish()

        error = interpreter.error()
        if error is not None:
            raise error

        return interpreter


def open_package(package_path: Path) -> BinaryIO:
    """Open the package for reading.

    Raises:
        PackageNotFoundError: If the file does not exist.
        PackageReadError: For any other failure, e.g. ``EACCES`` or ``EISDIR``.
    """
    try:
        return package_path.open("rb")
    except FileNotFoundError as e:
        raise PackageNotFoundError(transport_error_code(e)) from e
    except OSError as e:
        raise PackageReadError(transport_error_code(e)) from e

"""HTTP utilities for package manager communication."""

import errno
from typing import Optional

import httpx

from packmgr_sender.core.utils.user_agent import get_user_agent
from packmgr_sender.models import Target


def get_authenticated_httpx_client(
    target: Target,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create httpx AsyncClient with the target's basic authentication.

    Includes an Authorization header if the target URL carries credentials.

    Args:
        target: Target whose credentials are used.
        timeout: Request timeout in seconds. Defaults to 30.0.
        transport: Optional transport override, mostly for tests.

    Returns:
        Configured httpx.AsyncClient with Authorization header

    Example:
        async with get_authenticated_httpx_client(target) as client:
            response = await client.get(url)
    """
    headers = {"User-Agent": get_user_agent()}
    auth = target.auth
    if auth:
        headers["Authorization"] = f"Basic {auth}"

    timeout_config = timeout if timeout is not None else 30.0
    return httpx.AsyncClient(
        timeout=timeout_config, headers=headers, transport=transport
    )


def transport_error_code(exc: BaseException) -> str:
    """Short code describing a transport failure.

    Walks the exception chain for an OS level error and returns its errno
    symbol (e.g. ``ECONNREFUSED``). Falls back to the exception class name.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError) and current.errno in errno.errorcode:
            return errno.errorcode[current.errno]
        current = current.__cause__ or current.__context__

    return type(exc).__name__

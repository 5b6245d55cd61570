"""User-Agent utilities for packmgr-sender HTTP clients."""

import platform
from importlib import metadata


def get_user_agent() -> str:
    """
    Generate User-Agent string for HTTP requests.

    Format: packmgr-sender/<version> (<OS> <release>; <arch>) Language/Python <python_version>
    Example: packmgr-sender/0.1.0 (Linux 6.8.0-49-generic; x86_64) Language/Python 3.11.4

    Returns:
        str: Formatted User-Agent string
    """
    try:
        version = metadata.version("packmgr-sender")
    except metadata.PackageNotFoundError:
        version = "unknown"

    system = platform.system()
    release = platform.release()
    machine = platform.machine()
    python_version = platform.python_version()

    return f"packmgr-sender/{version} ({system} {release}; {machine}) Language/Python {python_version}"

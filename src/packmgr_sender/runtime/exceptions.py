"""Custom exceptions for package delivery."""


class PackmgrSenderError(Exception):
    """Base exception for packmgr-sender errors."""

    pass


class InvalidTargetError(PackmgrSenderError, ValueError):
    """Raised when a target URL cannot be parsed into scheme, host and port."""

    pass


class DeliveryError(PackmgrSenderError):
    """Base exception for failures of a single target's delivery pipeline.

    The exception message is reported verbatim as the result's error message.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(DeliveryError):
    """Raised when no HTTP response could be obtained from the target."""

    pass


class StatusQueryFailed(DeliveryError):
    """Raised when the bundle status query answers with a non-200 status."""

    pass


class StatusParseFailed(DeliveryError):
    """Raised when the bundle status body is not the expected JSON document."""

    pass


class ReadinessExhausted(DeliveryError):
    """Raised when the target never reported ready within the retry budget."""

    pass


class SubmissionRejected(DeliveryError):
    """Raised when the package manager reported a failed installation."""

    pass


class UnrecognizedResponse(DeliveryError):
    """Raised when the package manager response held no status line."""

    pass


class PackageReadError(DeliveryError):
    """Raised when the package file cannot be opened for upload.

    The message is the errno symbol of the failure, e.g. ``EACCES``.
    """

    pass


class PackageNotFoundError(PackageReadError):
    """Raised when the package file to deliver does not exist."""

    pass

"""Error taxonomy shared by services, adapters and the HTTP layer."""


class PhotoShareError(Exception):
    """Base class for application errors."""


class UploadError(PhotoShareError):
    """A single upload call against the remote endpoint failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(UploadError):
    """The remote endpoint could not be reached or answered with garbage."""


class RemoteRejected(UploadError):
    """The remote endpoint answered but reported ``success: false``."""


class InvalidArgument(PhotoShareError):
    """A required field was missing or malformed."""


class NotFound(PhotoShareError):
    """A referenced album or photo does not exist."""


class Internal(PhotoShareError):
    """A multi-step operation failed unexpectedly."""

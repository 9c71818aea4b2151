"""Error taxonomy raised by services and turned into HTTP responses at the app boundary."""


class GalleryError(Exception):
    """Base error; carries a short client-safe message and the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(GalleryError):
    """A required field is missing or empty."""

    status_code = 400


class AuthenticationError(GalleryError):
    """No valid credential where one is required."""

    status_code = 401


class AuthorizationError(GalleryError):
    """Valid identity, insufficient rights for the target resource."""

    status_code = 403


class NotFoundError(GalleryError):
    """No matching item or user."""

    status_code = 404


class StorageError(GalleryError):
    """Reading or writing a persisted collection failed."""

    status_code = 500


class UploadError(GalleryError):
    """No file, disallowed type, or file too large."""

    status_code = 400

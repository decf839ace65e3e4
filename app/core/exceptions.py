"""
Error taxonomy for the catalog service.

Each error carries the message shown to the client and the HTTP status the
API layer answers with.
"""


class CatalogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(CatalogError):
    """A required field or the image is missing, or a value has the wrong type."""

    status_code = 400


class NotFound(CatalogError):
    """No row matches the requested id."""

    status_code = 404


class UploadRejected(CatalogError):
    """The uploaded file is not an image or exceeds the size limit."""

    status_code = 400


class StorageFailure(CatalogError):
    """A query or an image write failed. Details are logged, never returned."""

    status_code = 500


class ServiceUnavailable(StorageFailure):
    """The database could not be reached."""

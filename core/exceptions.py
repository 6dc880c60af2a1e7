"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; core.api renders them.
"""


class BlogError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None, details: list | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(BlogError):
    status_code = 400
    default_message = "Validation failed"


class Forbidden(BlogError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(BlogError):
    status_code = 404
    default_message = "Not found"


class Conflict(BlogError):
    """Write rejected by a uniqueness constraint. Safe to retry."""

    status_code = 409
    default_message = "Resource already exists"
    retryable = True


class StorageError(BlogError):
    """The database is unreachable or failed mid-request. Not retried."""

    status_code = 503
    default_message = "Storage unavailable"

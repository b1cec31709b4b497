"""
Custom exception classes for the application.

Each exception carries the HTTP status it maps to and knows how to render
itself as an ErrorResponse, so handlers and commands can raise them without
caring about the transport.
"""

from bookshelf.schemas.errors import (
    ErrorResponse,
    ErrorSource,
    ValidationDetail,
)


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        source: Request part the error refers to, if any.
        keys: Offending keys within the source.
        http_status: HTTP status code for REST API responses.
        reason: HTTP reason phrase used as the ``error`` field.
    """

    http_status: int = 500
    reason: str = "Internal Server Error"

    def __init__(
        self,
        message: str,
        source: ErrorSource | None = None,
        keys: list[str] | None = None,
    ):
        self.message = message
        self.source = source
        self.keys = keys or []
        super().__init__(message)

    def to_http_response(self) -> ErrorResponse:
        """
        Convert the exception into an HTTP error body.

        Returns:
            ErrorResponse with status, reason, message and validation detail.
        """
        validation = None
        if self.source is not None:
            validation = ValidationDetail(source=self.source, keys=self.keys)
        return ErrorResponse(
            error=self.reason,
            message=self.message,
            validation=validation,
            status_code=self.http_status,
        )


class ValidationError(AppException):
    """
    Data validation failed.

    Raised when input data fails validation checks before processing.

    HTTP Status: 400 Bad Request
    """

    http_status = 400
    reason = "Bad Request"


class InvalidReferenceError(ValidationError):
    """
    A referenced entity is missing or unusable.

    Raised when a book points at an author that does not exist or has no
    pen name.

    HTTP Status: 400 Bad Request
    """

    def __init__(self, message: str = "Author is invalid", key: str = "author"):
        super().__init__(message, source=ErrorSource.PAYLOAD, keys=[key])


class NotFoundError(AppException):
    """
    Resource not found.

    Raised when no row matches the requested id.

    HTTP Status: 404 Not Found
    """

    http_status = 404
    reason = "Not Found"

    def __init__(self, message: str = "Id does not exist"):
        super().__init__(message, source=ErrorSource.PARAMS, keys=["id"])


class DatabaseError(AppException):
    """
    Database operation failed.

    The message is replaced by a generic one in responses; the original
    cause is only logged.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
    reason = "Internal Server Error"
    public_message = "An internal server error occurred"

    def to_http_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.reason,
            message=self.public_message,
            status_code=self.http_status,
        )

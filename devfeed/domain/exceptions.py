# devfeed/domain/exceptions.py

"""
Domain exceptions for the application.

Every failure a use case can produce is a subclass of DomainException. Each
carries a stable ``internal_code`` and the HTTP status it maps to, so the
exception translator can build the error envelope without inspecting the
exception type.
"""

from typing import Any, List, Optional


class DomainException(Exception):
    """
    Base exception for every domain failure.

    Attributes:
        message: Human-readable message returned to the client
        internal_code: Stable error code (e.g. "USER_ALREADY_EXISTS")
        status_code: HTTP status the translator responds with
        validation_errors: Optional list of field-level messages
    """

    internal_code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, validation_errors: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.validation_errors = validation_errors
        super().__init__(self.message)


class ValidationException(DomainException):
    """Malformed input."""

    internal_code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"


class InvalidAuthorizationHeaderException(DomainException):
    """The Authorization header is missing or not a Bearer header."""

    internal_code = "INVALID_AUTHORIZATION_HEADER"
    status_code = 400
    default_message = "No valid authorization header provided"


class InvalidCredentialsException(DomainException):
    """Bad email/password pair. Deliberately the same for every cause."""

    internal_code = "INVALID_CREDENTIALS"
    status_code = 401
    default_message = "Invalid email or password"


class InvalidTokenException(DomainException):
    """Missing, malformed, tampered, expired or revoked bearer token."""

    internal_code = "INVALID_TOKEN"
    status_code = 401
    default_message = "Invalid token"


class MalformedTokenError(InvalidTokenException):
    """The token is not a decodable JWT."""


class BadSignatureError(InvalidTokenException):
    """The token signature does not verify under the active secret."""


class ExpiredTokenError(InvalidTokenException):
    """The token is past its ``exp`` claim."""


class UnauthorizedOperationException(DomainException):
    """Authenticated, but not allowed to touch this resource."""

    internal_code = "UNAUTHORIZED_OPERATION"
    status_code = 403
    default_message = "You are not allowed to perform this operation"


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    internal_code = "RESOURCE_NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None, resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(f"{message or self.default_message}{resource_info}")


class UserNotFoundException(ResourceNotFoundException):
    internal_code = "USER_NOT_FOUND"
    default_message = "User not found"


class ThemeNotFoundException(ResourceNotFoundException):
    internal_code = "THEME_NOT_FOUND"
    default_message = "Theme not found"


class ArticleNotFoundException(ResourceNotFoundException):
    internal_code = "ARTICLE_NOT_FOUND"
    default_message = "Article not found"


class CommentNotFoundException(ResourceNotFoundException):
    internal_code = "COMMENT_NOT_FOUND"
    default_message = "Comment not found"


class ResourceAlreadyExistsException(DomainException):
    """Uniqueness conflict."""

    internal_code = "RESOURCE_ALREADY_EXISTS"
    status_code = 409
    default_message = "Resource already exists"


class UserAlreadyExistsException(ResourceAlreadyExistsException):
    internal_code = "USER_ALREADY_EXISTS"
    default_message = "User already exists"


class ThemeAlreadyExistsException(ResourceAlreadyExistsException):
    internal_code = "THEME_ALREADY_EXISTS"
    default_message = "Theme already exists"


class ThemeInUseException(DomainException):
    """A theme that still classifies articles cannot be deleted."""

    internal_code = "THEME_IN_USE"
    status_code = 409
    default_message = "Theme still has articles"


class DatabaseOperationException(DomainException):
    """Database operation failed. The original error is logged, never returned."""

    internal_code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        self.detail = detail
        self.original_error = original_error
        super().__init__(self.default_message)

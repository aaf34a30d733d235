"""Custom exceptions for the authorization service."""

from typing import Any, Dict, Optional


class BaseAuthException(Exception):
    """Base exception for authentication/authorization errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(BaseAuthException):
    """Raised when no principal can be established for a request."""

    def __init__(self, message: str = "Authentication required", **kwargs):
        kwargs.setdefault("error_code", "AUTHENTICATION_FAILED")
        super().__init__(message, **kwargs)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid."""

    def __init__(self, message: str = "Invalid token", **kwargs):
        super().__init__(message, error_code="INVALID_TOKEN", **kwargs)


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token has expired", **kwargs):
        super().__init__(message, error_code="TOKEN_EXPIRED", **kwargs)


class AuthorizationError(BaseAuthException):
    """Raised when a principal is outside the scope of a request."""

    def __init__(self, message: str = "Access denied", **kwargs):
        kwargs.setdefault("error_code", "ACCESS_DENIED")
        super().__init__(message, **kwargs)


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the decision engine denies an operation."""

    def __init__(self, message: str = "Insufficient permissions", **kwargs):
        super().__init__(message, error_code="INSUFFICIENT_PERMISSIONS", **kwargs)


class ValidationError(BaseAuthException):
    """Raised when request data cannot be interpreted."""

    def __init__(self, message: str = "Validation failed", **kwargs):
        kwargs.setdefault("error_code", "VALIDATION_ERROR")
        super().__init__(message, **kwargs)


class ConfigurationError(BaseAuthException):
    """Raised when the authorization matrix cannot be loaded."""

    def __init__(self, message: str = "Authorization matrix configuration not found", **kwargs):
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        super().__init__(message, **kwargs)

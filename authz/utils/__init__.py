"""Utility functions and classes."""

from .exceptions import *

__all__ = [
    "BaseAuthException",
    "AuthenticationError",
    "InvalidTokenError",
    "TokenExpiredError",
    "AuthorizationError",
    "InsufficientPermissionsError",
    "ValidationError",
    "ConfigurationError",
]

"""Service layer."""

from .jwt_service import JWTService

__all__ = [
    "JWTService",
]

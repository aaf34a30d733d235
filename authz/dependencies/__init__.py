"""FastAPI dependencies."""

from .auth import *

__all__ = [
    "get_current_principal",
    "get_optional_principal",
    "get_engine",
    "get_matrix_store",
    "get_jwt_service",
]

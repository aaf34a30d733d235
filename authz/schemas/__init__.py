"""Pydantic schemas for request/response models."""

from .authorization import *
from .common import *

__all__ = [
    # Common
    "BaseResponse",
    "ErrorResponse",
    # Authorization
    "EvaluateRequest",
    "EvaluateResponse",
    "PermissionSummaryResponse",
    "RoleSummaryResponse",
    "MatrixResponse",
]

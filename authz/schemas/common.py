"""Common Pydantic schemas."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Base response model."""

    model_config = {"extra": "allow"}

    success: bool = True
    message: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class ErrorResponse(BaseResponse):
    """Error response model."""

    success: bool = False
    error_code: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

"""Authorization request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from authz.policies.base_policy import Operation

from .common import BaseResponse


class EvaluateRequest(BaseModel):
    """Instance-level pre-flight check for the authenticated principal."""

    resource_type: str = Field(..., min_length=1, description="Resource type, e.g. 'tasks'")
    operation: Operation = Field(..., description="Operation to check")
    document: dict[str, Any] | None = Field(
        None, description="Resource document; omit for a type-level check"
    )


class EvaluateResponse(BaseResponse):
    """Decision for an evaluate request."""

    allowed: bool
    resource_type: str
    operation: Operation


class PermissionSummaryResponse(BaseResponse):
    """Type-level permissions of the principal on one resource type."""

    resource_type: str
    can_create: bool = False
    can_read: bool = False
    can_update: bool = False
    can_delete: bool = False
    can_restore: bool = False


class RoleSummaryResponse(BaseResponse):
    """Role classification of the principal."""

    user_id: str
    role: str
    is_platform_superadmin: bool = False
    is_customer_superadmin: bool = False
    is_head_of_department: bool = False
    can_access_cross_org: bool = False
    can_access_cross_dept: bool = False


class MatrixResponse(BaseResponse):
    """The active shared authorization configuration."""

    version: str
    fingerprint: str
    matrix: dict[str, Any]

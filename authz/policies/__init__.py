"""Authorization decision engine and policies."""

from .base_policy import CRUD_OPERATIONS, TIER_PRIORITY, Operation, PolicyResult, ScopeTier
from .engine import DecisionEngine, evaluate
from .guards import can, require, require_department_access, require_organization_access
from .matrix import (
    AuthorizationConfig,
    OwnershipFieldRegistry,
    PermissionMatrix,
    RolePermissions,
    build_config,
    load_config,
    parse_config,
)
from .organization_policy import can_delete_organization, check_platform_superadmin_access
from .queries import (
    PermissionSummary,
    RoleSummary,
    can_access_cross_dept,
    can_access_cross_org,
    can_create,
    can_delete,
    can_read,
    can_restore,
    can_update,
    permission_summary,
    role_summary,
)
from .resolvers import (
    is_customer_superadmin,
    is_head_of_department,
    is_owner,
    is_platform_superadmin,
    is_same_department,
    is_same_organization,
)
from .store import MatrixStore

__all__ = [
    "Operation",
    "ScopeTier",
    "TIER_PRIORITY",
    "CRUD_OPERATIONS",
    "PolicyResult",
    "AuthorizationConfig",
    "PermissionMatrix",
    "RolePermissions",
    "OwnershipFieldRegistry",
    "build_config",
    "load_config",
    "parse_config",
    "MatrixStore",
    "DecisionEngine",
    "evaluate",
    "is_owner",
    "is_same_organization",
    "is_same_department",
    "is_platform_superadmin",
    "is_customer_superadmin",
    "is_head_of_department",
    "can_create",
    "can_read",
    "can_update",
    "can_delete",
    "can_restore",
    "permission_summary",
    "PermissionSummary",
    "RoleSummary",
    "role_summary",
    "can_access_cross_org",
    "can_access_cross_dept",
    "check_platform_superadmin_access",
    "can_delete_organization",
    "can",
    "require",
    "require_organization_access",
    "require_department_access",
]

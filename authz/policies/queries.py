"""Type-level convenience queries built on the decision engine."""

from dataclasses import asdict, dataclass
from typing import Any

from .base_policy import CRUD_OPERATIONS, Operation
from .engine import DecisionEngine
from .resolvers import (
    coerce_principal,
    is_customer_superadmin,
    is_head_of_department,
    is_platform_superadmin,
)


@dataclass(frozen=True)
class PermissionSummary:
    """All type-level permissions of a principal on one resource type."""

    can_create: bool = False
    can_read: bool = False
    can_update: bool = False
    can_delete: bool = False
    can_restore: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True)
class RoleSummary:
    """Role classification flags of a principal."""

    is_platform_superadmin: bool = False
    is_customer_superadmin: bool = False
    is_head_of_department: bool = False
    can_access_cross_org: bool = False
    can_access_cross_dept: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


def can_create(engine: DecisionEngine, principal: Any, resource_type: Any) -> bool:
    return engine.evaluate(principal, resource_type, Operation.CREATE)


def can_read(engine: DecisionEngine, principal: Any, resource_type: Any) -> bool:
    return engine.evaluate(principal, resource_type, Operation.READ)


def can_update(engine: DecisionEngine, principal: Any, resource_type: Any) -> bool:
    return engine.evaluate(principal, resource_type, Operation.UPDATE)


def can_delete(engine: DecisionEngine, principal: Any, resource_type: Any) -> bool:
    return engine.evaluate(principal, resource_type, Operation.DELETE)


def can_restore(engine: DecisionEngine, principal: Any, resource_type: Any) -> bool:
    return engine.evaluate(principal, resource_type, Operation.RESTORE)


def permission_summary(engine: DecisionEngine, principal: Any, resource_type: Any) -> PermissionSummary:
    """Batch the five type-level queries into one record."""
    flags = {
        f"can_{operation.value}": engine.evaluate(principal, resource_type, operation)
        for operation in CRUD_OPERATIONS
    }
    return PermissionSummary(**flags)


def can_access_cross_org(principal: Any) -> bool:
    return is_platform_superadmin(principal)


def can_access_cross_dept(engine: DecisionEngine, principal: Any) -> bool:
    """True iff the principal's role has a non-empty cross-department tier."""
    principal = coerce_principal(principal)
    if principal is None:
        return False

    permissions = engine.matrix.role(principal.role)
    if permissions is None:
        return False
    return len(permissions.cross_dept) > 0


def role_summary(engine: DecisionEngine, principal: Any) -> RoleSummary:
    principal = coerce_principal(principal)
    if principal is None:
        return RoleSummary()

    return RoleSummary(
        is_platform_superadmin=is_platform_superadmin(principal),
        is_customer_superadmin=is_customer_superadmin(principal),
        is_head_of_department=is_head_of_department(principal),
        can_access_cross_org=can_access_cross_org(principal),
        can_access_cross_dept=can_access_cross_dept(engine, principal),
    )

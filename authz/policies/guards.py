"""Guard helpers that enforce engine decisions by raising."""

import logging
from typing import Any

from authz.models.document import ResourceType, identifier_of
from authz.models.principal import Role
from authz.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InsufficientPermissionsError,
)

from .base_policy import Operation, enum_value
from .engine import DecisionEngine
from .organization_policy import can_delete_organization, check_platform_superadmin_access
from .resolvers import coerce_principal, is_platform_superadmin

logger = logging.getLogger(__name__)


def can(
    engine: DecisionEngine,
    principal: Any,
    resource_type: Any,
    operation: Any,
    document: Any = None,
) -> bool:
    """
    Check if principal can perform operation on resource.

    Usage:
        can(engine, principal, ResourceType.TASKS, Operation.CREATE)
        can(engine, principal, "tasks", "update", document=task)
    """
    return engine.evaluate(principal, resource_type, operation, document)


def require(
    engine: DecisionEngine,
    principal: Any,
    resource_type: Any,
    operation: Any,
    document: Any = None,
) -> None:
    """
    Require that principal can perform operation on resource.
    Raises AuthenticationError or InsufficientPermissionsError if not allowed.

    Usage:
        require(engine, principal, ResourceType.TASKS, Operation.UPDATE, document=task)
    """
    principal = coerce_principal(principal)
    if principal is None:
        raise AuthenticationError()

    resource = enum_value(resource_type)
    action = enum_value(operation)
    context = {
        "user_id": principal.id,
        "role": principal.role,
        "resource_type": resource,
        "operation": action,
    }

    if not engine.evaluate(principal, resource_type, operation, document):
        logger.warning("Authorization failed - insufficient permissions", extra=context)
        if document is None:
            message = f"Insufficient permissions to {action} {resource}"
        else:
            message = f"You do not have permission to {action} this {resource}"
        raise InsufficientPermissionsError(message, details={"resource_type": resource, "operation": action})

    if resource == ResourceType.ORGANIZATIONS.value and document is not None:
        if not check_platform_superadmin_access(principal, document, operation):
            raise InsufficientPermissionsError(
                "Platform SuperAdmin can only read customer organizations",
                details={"organization_id": identifier_of(document)},
            )

        if action == Operation.DELETE.value and not can_delete_organization(document):
            raise InsufficientPermissionsError(
                "Platform organizations cannot be deleted",
                details={"organization_id": identifier_of(document)},
            )

    logger.debug("Authorization successful", extra=context)


def require_organization_access(principal: Any, organization_id: Any = None) -> None:
    """
    Require that principal belongs to the requested organization.
    The platform superadmin may access every organization.

    Usage:
        require_organization_access(principal, organization_id="org-1")
    """
    principal = coerce_principal(principal)
    if principal is None:
        raise AuthenticationError()

    if is_platform_superadmin(principal):
        return

    requested = identifier_of(organization_id)
    if requested is None:
        return

    if principal.organization != requested:
        logger.warning(
            "Organization access denied",
            extra={"user_id": principal.id, "user_org": principal.organization, "requested_org": requested},
        )
        raise AuthorizationError("You do not have access to this organization")


def require_department_access(principal: Any, department_id: Any = None) -> None:
    """
    Require that principal belongs to the requested department.
    SuperAdmin and Admin may access every department of their organization.

    Usage:
        require_department_access(principal, department_id="dept-1")
    """
    principal = coerce_principal(principal)
    if principal is None:
        raise AuthenticationError()

    if principal.role in (Role.SUPER_ADMIN.value, Role.ADMIN.value):
        return

    requested = identifier_of(department_id)
    if requested is None:
        return

    if principal.department != requested:
        logger.warning(
            "Department access denied",
            extra={"user_id": principal.id, "user_dept": principal.department, "requested_dept": requested},
        )
        raise AuthorizationError("You do not have access to this department")

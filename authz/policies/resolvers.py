"""Scope resolvers: pure predicates relating a principal to a document."""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from authz.models.document import ResourceDocument
from authz.models.principal import Principal, Role

from .matrix import OwnershipFieldRegistry


def coerce_principal(principal: Any) -> Optional[Principal]:
    """Return a ``Principal`` for typed or raw input, or ``None`` if unusable."""
    if principal is None or isinstance(principal, Principal):
        return principal
    try:
        return Principal.model_validate(principal)
    except (PydanticValidationError, TypeError, ValueError):
        return None


def coerce_document(document: Any, fields: tuple[str, ...] = ()) -> Optional[ResourceDocument]:
    """Return a normalized document, or ``None`` if it cannot be read."""
    if document is None:
        return None
    try:
        return ResourceDocument.coerce(document, fields)
    except (TypeError, ValueError):
        return None


def is_owner(
    principal: Any,
    resource_type: Any,
    document: Any,
    registry: OwnershipFieldRegistry,
) -> bool:
    """True iff any registered ownership field references the principal."""
    principal = coerce_principal(principal)
    if principal is None:
        return False

    fields = registry.fields_for(resource_type)
    if not fields:
        return False

    document = coerce_document(document, fields)
    if document is None:
        return False

    for name in fields:
        reference = document.reference(name)
        if reference is not None and reference.contains(principal.id):
            return True
    return False


def is_same_organization(principal: Any, document: Any) -> bool:
    principal = coerce_principal(principal)
    document = coerce_document(document)
    if principal is None or document is None:
        return False
    if principal.organization is None or document.organization is None:
        return False
    return principal.organization == document.organization


def is_same_department(principal: Any, document: Any) -> bool:
    principal = coerce_principal(principal)
    document = coerce_document(document)
    if principal is None or document is None:
        return False
    if principal.department is None or document.department is None:
        return False
    return principal.department == document.department


def is_platform_superadmin(principal: Any) -> bool:
    """Platform operator: overrides the organization boundary everywhere."""
    principal = coerce_principal(principal)
    if principal is None:
        return False
    return principal.is_platform_user and principal.role == Role.SUPER_ADMIN.value


def is_customer_superadmin(principal: Any) -> bool:
    """A tenant's own super admin. Classification only, never a gate."""
    principal = coerce_principal(principal)
    if principal is None:
        return False
    return not principal.is_platform_user and principal.role == Role.SUPER_ADMIN.value


def is_head_of_department(principal: Any) -> bool:
    principal = coerce_principal(principal)
    if principal is None:
        return False
    return principal.is_head_of_department

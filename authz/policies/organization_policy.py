"""Organization-specific authorization rules applied during enforcement."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from authz.models.document import identifier_of

from .base_policy import Operation, enum_value
from .resolvers import coerce_principal, is_platform_superadmin

logger = logging.getLogger(__name__)


def _platform_flag(organization: Any) -> Optional[bool]:
    """Read ``isPlatformOrg`` from a mapping or object; ``None`` if absent."""
    for name in ("isPlatformOrg", "is_platform_org"):
        if isinstance(organization, Mapping):
            value = organization.get(name)
        else:
            value = getattr(organization, name, None)
        if isinstance(value, bool):
            return value
    return None


def check_platform_superadmin_access(principal: Any, organization: Any, operation: Any) -> bool:
    """
    Restrict the platform operator to reading customer organizations.

    Principals other than the platform superadmin are not affected by this
    rule and pass. Platform-owned organizations admit every operation.
    """
    principal = coerce_principal(principal)
    if principal is None:
        return False

    if not is_platform_superadmin(principal):
        return True

    if organization is None or isinstance(organization, (str, bytes, int, float, list, tuple)):
        return False

    if _platform_flag(organization) is not False:
        return True

    if enum_value(operation) == Operation.READ.value:
        return True

    logger.warning(
        "Platform SuperAdmin attempted to modify customer organization",
        extra={
            "user_id": principal.id,
            "organization_id": identifier_of(organization),
            "operation": enum_value(operation),
        },
    )
    return False


def can_delete_organization(organization: Any) -> bool:
    """Platform organizations can never be deleted."""
    if organization is None or isinstance(organization, (str, bytes, int, float, list, tuple)):
        return False

    if _platform_flag(organization) is True:
        logger.warning(
            "Attempted to delete platform organization",
            extra={"organization_id": identifier_of(organization)},
        )
        return False

    return True

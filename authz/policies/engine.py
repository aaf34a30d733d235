"""Decision engine combining the permission matrix with scope resolvers."""

import logging
from typing import Any, Optional

from .base_policy import PolicyResult, ScopeTier, enum_value
from .matrix import AuthorizationConfig
from .resolvers import (
    coerce_document,
    coerce_principal,
    is_owner,
    is_platform_superadmin,
    is_same_department,
    is_same_organization,
)

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Pure allow/deny decisions over an immutable authorization config.

    The engine holds no mutable state. Every call is independent and safe to
    run concurrently; a decision depends only on its arguments and the
    config the engine was built with.
    """

    def __init__(self, config: AuthorizationConfig):
        self.config = config

    @classmethod
    def from_store(cls, store: Any) -> "DecisionEngine":
        """Bind an engine to the config that is current in ``store``."""
        return cls(store.current)

    @property
    def matrix(self):
        return self.config.matrix

    @property
    def ownership(self):
        return self.config.ownership

    def allowed_operations(self, role: Any, resource_type: Any) -> frozenset:
        return self.config.matrix.allowed_operations(role, resource_type)

    def evaluate(
        self,
        principal: Any,
        resource_type: Any,
        operation: Any,
        document: Any = None,
    ) -> bool:
        """
        Decide whether ``principal`` may perform ``operation``.

        Without a document this answers the type-level question ("can this
        role ever do this"). With a document the scope tiers apply. Any input
        that cannot be interpreted is denied; this method never raises.
        """
        try:
            result = self._decide(principal, resource_type, operation, document)
        except Exception:
            logger.exception(
                "Authorization evaluation failed",
                extra={"resource_type": str(resource_type), "operation": str(operation)},
            )
            return False

        logger.debug(
            f"Authorization {'allowed' if result.allowed else 'denied'}: {result.reason}",
            extra={
                "resource_type": enum_value(resource_type),
                "operation": enum_value(operation),
                "allowed": result.allowed,
            },
        )
        return result.allowed

    def _decide(
        self,
        principal: Any,
        resource_type: Any,
        operation: Any,
        document: Any,
    ) -> PolicyResult:
        principal = coerce_principal(principal)
        if principal is None:
            return PolicyResult.deny("No principal")

        permissions = self.matrix.role(principal.role)
        if permissions is None:
            logger.warning(
                f"Role not found in authorization matrix: {principal.role}",
                extra={"user_id": principal.id, "role": principal.role},
            )
            return PolicyResult.deny(f"Unknown role {principal.role!r}")

        operation = enum_value(operation)
        if operation is None or operation not in permissions.allowed_operations(resource_type):
            return PolicyResult.deny("Operation not in role gate")

        if document is None:
            return PolicyResult.allow("Type-level gate")

        if is_platform_superadmin(principal):
            return PolicyResult.allow("Platform superadmin override")

        fields = self.ownership.fields_for(resource_type)
        resolved = coerce_document(document, fields)
        if resolved is None:
            return PolicyResult.deny("Unreadable document")

        if not is_same_organization(principal, resolved):
            return PolicyResult.deny("Organization boundary")

        tier = permissions.governing_tier(operation)
        if tier is ScopeTier.OWN:
            if is_owner(principal, resource_type, resolved, self.ownership):
                return PolicyResult.allow("Owner")
            return PolicyResult.deny("Not owner")

        if tier is ScopeTier.OWN_DEPT:
            if is_same_department(principal, resolved):
                return PolicyResult.allow("Same department")
            return PolicyResult.deny("Different department")

        if tier is ScopeTier.CROSS_DEPT:
            return PolicyResult.allow("Cross-department within organization")

        return PolicyResult.allow("No scope tier restriction")


def evaluate(
    config: AuthorizationConfig,
    principal: Any,
    resource_type: Any,
    operation: Any,
    document: Optional[Any] = None,
) -> bool:
    """Functional form of ``DecisionEngine.evaluate``."""
    return DecisionEngine(config).evaluate(principal, resource_type, operation, document)

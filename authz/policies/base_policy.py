"""Base policy types shared by the matrix, resolvers and engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Operation(str, Enum):
    """Operations a role can be granted on a resource type."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"

    # Tier-level token used by the shared matrix
    WRITE = "write"


CRUD_OPERATIONS = (
    Operation.CREATE,
    Operation.READ,
    Operation.UPDATE,
    Operation.DELETE,
    Operation.RESTORE,
)


class ScopeTier(str, Enum):
    """Breadth of relationship required between principal and document."""

    OWN = "own"
    OWN_DEPT = "ownDept"
    CROSS_DEPT = "crossDept"
    CROSS_ORG = "crossOrg"


# Instance-level tiers in evaluation order. The first tier holding an
# operation governs it; later tiers are never consulted for that operation.
TIER_PRIORITY = (ScopeTier.OWN, ScopeTier.OWN_DEPT, ScopeTier.CROSS_DEPT)


def enum_value(value: Any) -> Optional[str]:
    """Reduce an enum member or string to its plain string value."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class PolicyResult:
    """Result of an engine evaluation, with the rule that decided it."""

    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls, reason: Optional[str] = None) -> "PolicyResult":
        """Create an allow result."""
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str) -> "PolicyResult":
        """Create a deny result."""
        return cls(allowed=False, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed

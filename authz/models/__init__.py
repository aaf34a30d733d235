"""Domain models consumed by the authorization engine."""

from .document import (
    Many,
    Reference,
    ResourceDocument,
    ResourceType,
    Single,
    identifier_of,
    to_reference,
)
from .principal import Principal, Role

__all__ = [
    "Principal",
    "Role",
    "ResourceType",
    "ResourceDocument",
    "Reference",
    "Single",
    "Many",
    "identifier_of",
    "to_reference",
]

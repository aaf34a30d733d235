"""Resource document model and reference normalization."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ResourceType(str, Enum):
    """Manageable entities known to the authorization matrix."""

    USERS = "users"
    DEPARTMENTS = "departments"
    ORGANIZATIONS = "organizations"
    TASKS = "tasks"
    MATERIALS = "materials"
    VENDORS = "vendors"
    NOTIFICATIONS = "notifications"
    COMMENTS = "comments"
    ACTIVITIES = "activities"


def identifier_of(value: Any) -> str | None:
    """
    Extract a comparable identifier from a reference.

    Accepts a bare identifier (string, int, UUID, ObjectId-like) or an
    expanded object carrying ``_id`` / ``id`` either as a key or an
    attribute. Returns ``None`` when nothing usable is found.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        return value or None

    if isinstance(value, Mapping):
        if "_id" in value:
            return identifier_of(value["_id"])
        if "id" in value:
            return identifier_of(value["id"])
        return None

    for attr in ("_id", "id"):
        if hasattr(value, attr):
            return identifier_of(getattr(value, attr))

    if isinstance(value, (list, tuple, set, frozenset)):
        return None

    # 1 and 1.0 name the same record
    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    return str(value)


@dataclass(frozen=True)
class Single:
    """A single-valued reference field (e.g. a task's creator)."""

    id: str

    def contains(self, identifier: str) -> bool:
        return self.id == identifier


@dataclass(frozen=True)
class Many:
    """A collection-valued reference field (e.g. assignees, watchers)."""

    ids: tuple[str, ...] = ()

    def contains(self, identifier: str) -> bool:
        return identifier in self.ids


Reference = Union[Single, Many]


def to_reference(value: Any) -> Reference | None:
    """Normalize a raw field value into a tagged reference."""
    if isinstance(value, (Single, Many)):
        return value

    if isinstance(value, (list, tuple, set, frozenset)):
        ids = (identifier_of(item) for item in value)
        return Many(tuple(i for i in ids if i is not None))

    identifier = identifier_of(value)
    if identifier is None:
        return None
    return Single(identifier)


def _read_field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


@dataclass(frozen=True)
class ResourceDocument:
    """Authorization-relevant view of a concrete resource instance."""

    organization: str | None = None
    department: str | None = None
    references: Mapping[str, Reference] = field(default_factory=dict)

    @classmethod
    def coerce(cls, raw: Any, ownership_fields: Iterable[str] = ()) -> "ResourceDocument":
        """
        Build a document from a mapping or an attribute-bearing object.

        Only the organization, department and the named ownership fields are
        read. Raises ``TypeError`` for inputs that are neither.
        """
        if isinstance(raw, ResourceDocument):
            return raw

        if raw is None or isinstance(raw, (str, bytes, int, float, bool, list, tuple, set)):
            raise TypeError(f"Cannot read a resource document from {type(raw).__name__}")

        references = {}
        for name in ownership_fields:
            reference = to_reference(_read_field(raw, name))
            if reference is not None:
                references[name] = reference

        return cls(
            organization=identifier_of(_read_field(raw, "organization")),
            department=identifier_of(_read_field(raw, "department")),
            references=references,
        )

    def reference(self, name: str) -> Reference | None:
        return self.references.get(name)

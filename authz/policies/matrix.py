"""Permission matrix and ownership field registry."""

import hashlib
import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from authz.utils.exceptions import ConfigurationError

from .base_policy import TIER_PRIORITY, ScopeTier, enum_value

logger = logging.getLogger(__name__)

VERSION_KEY = "version"
OWNERSHIP_KEY = "ownershipFields"

_EMPTY = frozenset()


class RoleEntrySchema(BaseModel):
    """One role's entry as stored in the shared matrix file."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    own: list[str] = Field(default_factory=list)
    own_dept: list[str] = Field(default_factory=list, alias="ownDept")
    cross_dept: list[str] = Field(default_factory=list, alias="crossDept")
    cross_org: list[str] = Field(default_factory=list, alias="crossOrg")
    resources: dict[str, list[str]] = Field(default_factory=dict)


_ownership_adapter = TypeAdapter(dict[str, list[str]])


@dataclass(frozen=True)
class RolePermissions:
    """Scope-tier overlays and per-resource gate for a single role."""

    own: frozenset = _EMPTY
    own_dept: frozenset = _EMPTY
    cross_dept: frozenset = _EMPTY
    cross_org: frozenset = _EMPTY
    resources: Mapping[str, frozenset] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_schema(cls, entry: RoleEntrySchema) -> "RolePermissions":
        return cls(
            own=frozenset(entry.own),
            own_dept=frozenset(entry.own_dept),
            cross_dept=frozenset(entry.cross_dept),
            cross_org=frozenset(entry.cross_org),
            resources=MappingProxyType(
                {name: frozenset(ops) for name, ops in entry.resources.items()}
            ),
        )

    def tier_operations(self, tier: ScopeTier) -> frozenset:
        return {
            ScopeTier.OWN: self.own,
            ScopeTier.OWN_DEPT: self.own_dept,
            ScopeTier.CROSS_DEPT: self.cross_dept,
            ScopeTier.CROSS_ORG: self.cross_org,
        }[tier]

    def allowed_operations(self, resource_type: Any) -> frozenset:
        name = enum_value(resource_type)
        if name is None:
            return _EMPTY
        return self.resources.get(name, _EMPTY)

    def governing_tier(self, operation: Any) -> Optional[ScopeTier]:
        """Return the first instance-level tier whose set holds ``operation``."""
        operation = enum_value(operation)
        for tier in TIER_PRIORITY:
            if operation in self.tier_operations(tier):
                return tier
        return None

    def to_schema(self) -> RoleEntrySchema:
        return RoleEntrySchema(
            own=sorted(self.own),
            own_dept=sorted(self.own_dept),
            cross_dept=sorted(self.cross_dept),
            cross_org=sorted(self.cross_org),
            resources={name: sorted(ops) for name, ops in self.resources.items()},
        )


@dataclass(frozen=True)
class PermissionMatrix:
    """Role → permissions table. Unknown keys always resolve to nothing."""

    roles: Mapping[str, RolePermissions] = field(default_factory=lambda: MappingProxyType({}))

    def role(self, role: Any) -> Optional[RolePermissions]:
        name = enum_value(role)
        if name is None:
            return None
        return self.roles.get(name)

    def has_role(self, role: Any) -> bool:
        return self.role(role) is not None

    def allowed_operations(self, role: Any, resource_type: Any) -> frozenset:
        """The gate: operations ``role`` may ever perform on ``resource_type``."""
        permissions = self.role(role)
        if permissions is None:
            logger.warning(
                f"Role not found in authorization matrix: {role}",
                extra={"role": str(role)},
            )
            return _EMPTY

        return permissions.allowed_operations(resource_type)


@dataclass(frozen=True)
class OwnershipFieldRegistry:
    """Resource type → ordered fields whose values establish ownership."""

    fields: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def fields_for(self, resource_type: Any) -> tuple[str, ...]:
        name = enum_value(resource_type)
        if name is None:
            return ()
        return self.fields.get(name, ())

    def is_registered(self, resource_type: Any) -> bool:
        return bool(self.fields_for(resource_type))


@dataclass(frozen=True)
class AuthorizationConfig:
    """Immutable, versioned bundle of the matrix and ownership registry."""

    matrix: PermissionMatrix
    ownership: OwnershipFieldRegistry
    version: str = "unversioned"
    fingerprint: str = ""

    def as_dict(self) -> dict[str, Any]:
        """Render back into the shared file layout."""
        data: dict[str, Any] = {VERSION_KEY: self.version}
        for name, permissions in self.matrix.roles.items():
            data[name] = permissions.to_schema().model_dump(by_alias=True)
        data[OWNERSHIP_KEY] = {name: list(fields) for name, fields in self.ownership.fields.items()}
        return data


def _fingerprint(data: Mapping[str, Any]) -> str:
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: Any) -> AuthorizationConfig:
    """Validate raw matrix data and build an immutable configuration."""
    if not isinstance(data, Mapping):
        raise ConfigurationError("Authorization matrix must be a JSON object")

    try:
        ownership = _ownership_adapter.validate_python(data.get(OWNERSHIP_KEY, {}))
        roles = {
            name: RolePermissions.from_schema(RoleEntrySchema.model_validate(entry))
            for name, entry in data.items()
            if name not in (VERSION_KEY, OWNERSHIP_KEY)
        }
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid authorization matrix", details={"errors": e.errors(include_url=False)}
        ) from e

    version = data.get(VERSION_KEY, "unversioned")
    if not isinstance(version, str):
        raise ConfigurationError("Authorization matrix version must be a string")

    config = AuthorizationConfig(
        matrix=PermissionMatrix(MappingProxyType(roles)),
        ownership=OwnershipFieldRegistry(
            MappingProxyType({name: tuple(fields) for name, fields in ownership.items()})
        ),
        version=version,
    )
    return replace(config, fingerprint=_fingerprint(config.as_dict()))


def load_config(path: Path | str) -> AuthorizationConfig:
    """Read and parse the shared matrix file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(
            "Failed to load authorization matrix",
            extra={"error": str(e), "path": str(path)},
        )
        raise ConfigurationError(details={"path": str(path), "error": str(e)}) from e

    config = parse_config(data)
    logger.info(
        "Authorization matrix loaded successfully",
        extra={"path": str(path), "version": config.version, "roles": sorted(config.matrix.roles)},
    )
    return config


def build_config(
    roles: Mapping[str, Mapping[str, Any]],
    ownership_fields: Optional[Mapping[str, Iterable[str]]] = None,
    version: str = "unversioned",
) -> AuthorizationConfig:
    """Build a configuration in code, using the shared file's key names."""
    data: dict[str, Any] = {VERSION_KEY: version, **roles}
    data[OWNERSHIP_KEY] = {name: list(fields) for name, fields in (ownership_fields or {}).items()}
    return parse_config(data)

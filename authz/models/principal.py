"""Principal model for the acting user."""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .document import identifier_of


class Role(str, Enum):
    """Roles known to the authorization matrix."""

    SUPER_ADMIN = "SuperAdmin"  # Highest administrative role
    ADMIN = "Admin"
    MANAGER = "Manager"
    USER = "User"


class Principal(BaseModel):
    """
    The acting identity being authorized.

    Built by the identity layer. References to the organization and
    department may arrive bare or populated; both are reduced to their
    identifier. The role is kept as a plain string so that a principal with
    a role unknown to the matrix can still be represented and denied.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id", "userId", "user_id"))
    role: str
    organization: str | None = Field(
        default=None, validation_alias=AliasChoices("organization", "organization_id", "org_id")
    )
    department: str | None = Field(
        default=None, validation_alias=AliasChoices("department", "department_id", "dept_id")
    )
    is_head_of_department: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_head_of_department", "isHod", "isHeadOfDepartment", "is_hod"),
    )
    is_platform_user: bool = Field(
        default=False, validation_alias=AliasChoices("is_platform_user", "isPlatformUser")
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        identifier = identifier_of(v)
        if identifier is None:
            raise ValueError("Principal identifier is required")
        return identifier

    @field_validator("organization", "department", mode="before")
    @classmethod
    def normalize_reference(cls, v: Any) -> str | None:
        return identifier_of(v)

    @field_validator("is_head_of_department", "is_platform_user", mode="before")
    @classmethod
    def strict_flags(cls, v: Any) -> bool:
        # Only a real boolean grants a flag
        if v is None:
            return False
        if not isinstance(v, bool):
            raise ValueError("Principal flags must be booleans")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Any) -> str:
        if isinstance(v, Role):
            return v.value
        if not isinstance(v, str) or not v:
            raise ValueError("Principal role is required")
        return v

    def __repr__(self) -> str:
        return f"<Principal(id={self.id}, role='{self.role}', org={self.organization})>"

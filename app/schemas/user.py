"""
User API schemas.

Pydantic models for user-related request/response validation.
Field names are exposed in camelCase (``zipCode``, ``createdAt``);
snake_case names are accepted on input as well.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.pagination import Pagination

ZIP_CODE_PATTERN = r"^\d{5}(-\d{4})?$"

Name = Annotated[str, Field(min_length=2, max_length=50, description="Display name (2-50 characters)")]
Email = Annotated[str, Field(min_length=1, max_length=255, description="Unique email, stored lower-cased")]
Age = Annotated[int, Field(ge=18, le=120, description="Age in years (18-120)")]


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MODERATOR = "moderator"


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, trimmed strings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


# ---------------------------------------------------------------------------
# Nested value-object schemas
# ---------------------------------------------------------------------------

class Address(CamelModel):
    """Postal address embedded in a user record."""

    street: str = Field(..., min_length=1, max_length=100, description="Street address")
    city: str = Field(..., min_length=1, max_length=50, description="City")
    state: Optional[str] = Field(None, max_length=50, description="State or region")
    country: str = Field("USA", max_length=100, description="Country")
    zip_code: Optional[str] = Field(None, pattern=ZIP_CODE_PATTERN, description="US zip code (12345 or 12345-6789)")


# ---------------------------------------------------------------------------
# Entity schemas (Base / Create / Update / Response)
# ---------------------------------------------------------------------------

# Shared properties
class UserBase(CamelModel):
    """Base user schema with common fields."""

    name: Name
    email: Email
    age: Age = 18
    address: Address
    phone: Optional[str] = Field(None, max_length=32)
    status: UserStatus = UserStatus.ACTIVE
    role: UserRole = UserRole.USER

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


# Request schemas
class UserCreate(UserBase):
    """Schema for creating a user."""

    avatar: Optional[str] = Field(None, max_length=512)


REQUIRED_ON_UPDATE = frozenset({"name", "email", "age", "address", "avatar", "status", "role"})


class UserUpdate(CamelModel):
    """Schema for updating a user (all fields optional, ``address`` replaces the whole address)."""

    name: Optional[Name] = None
    email: Optional[Email] = None
    age: Optional[Age] = None
    address: Optional[Address] = None
    phone: Optional[str] = Field(None, max_length=32)
    avatar: Optional[str] = Field(None, max_length=512)
    status: Optional[UserStatus] = None
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else None

    @model_validator(mode="after")
    def reject_null_required(self) -> "UserUpdate":
        """Only ``phone`` may be cleared with an explicit null."""
        cleared = sorted(name for name in self.model_fields_set
                         if name in REQUIRED_ON_UPDATE and getattr(self, name) is None)
        if cleared:
            raise ValueError(f"Cannot clear required field(s): {', '.join(cleared)}")
        return self


# Response schemas
class UserResponse(UserBase):
    """Schema for user data in API responses."""

    id: int
    avatar: str
    full_address: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class UserEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: UserResponse


class UserListResponse(CamelModel):
    """Paginated listing payload."""

    success: bool = True
    count: int
    pagination: Pagination
    data: List[UserResponse]


class DeletedUser(CamelModel):
    id: int


class UserDeletedResponse(CamelModel):
    success: bool = True
    message: str
    data: DeletedUser


class ErrorResponse(CamelModel):
    """Body of every failed request."""

    success: bool = False
    message: str
    errors: Optional[list] = None

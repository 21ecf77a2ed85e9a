"""
User database model.

Defines the users table. The address is stored flattened so that the
city can be filtered, grouped and indexed.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

DEFAULT_AVATAR = "https://ui-avatars.com/api/?name=Unknown&background=random"


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    User record.

    Status and role hold enumeration values validated at the API boundary.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, nullable=False)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    age: int = Field(default=18, nullable=False)
    phone: Optional[str] = Field(default=None, max_length=32)
    avatar: str = Field(default=DEFAULT_AVATAR, max_length=512)

    # Address
    address_street: str = Field(max_length=100, nullable=False)
    address_city: str = Field(max_length=50, index=True, nullable=False)
    address_state: Optional[str] = Field(default=None, max_length=50)
    address_country: str = Field(default="USA", max_length=100)
    address_zip_code: Optional[str] = Field(default=None, max_length=10)

    status: str = Field(default="active", index=True, max_length=16)
    role: str = Field(default="user", max_length=16)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def full_address(self) -> str:
        return (f"{self.address_street}, {self.address_city}, {self.address_state or ''} "
                f"{self.address_zip_code or ''}, {self.address_country}").strip()

"""Pydantic schemas for request/response validation."""

from app.schemas.pagination import Pagination
from app.schemas.statistics import CityStat, StatusStat, UserStats, UserStatsResponse
from app.schemas.user import (
    Address,
    ErrorResponse,
    UserCreate,
    UserDeletedResponse,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserRole,
    UserStatus,
    UserUpdate,
)

__all__ = [
    "Address",
    "CityStat",
    "ErrorResponse",
    "Pagination",
    "StatusStat",
    "UserCreate",
    "UserDeletedResponse",
    "UserEnvelope",
    "UserListResponse",
    "UserResponse",
    "UserRole",
    "UserStats",
    "UserStatsResponse",
    "UserStatus",
    "UserUpdate",
]

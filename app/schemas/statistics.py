"""
User statistics schemas.

Grouped counts and averages returned by ``GET /api/users/stats``.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _StatsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusStat(_StatsModel):
    """Count and mean age of the users sharing one status."""

    status: str
    count: int = Field(..., ge=0)
    avg_age: float


class CityStat(_StatsModel):
    """Number of users living in one city."""

    city: str
    count: int = Field(..., ge=0)


class UserStats(_StatsModel):
    """Summary over the whole user collection."""

    total_users: int = Field(0, ge=0)
    average_age: float = Field(0, description="Mean of the per-status mean ages, 1 decimal")
    status_stats: List[StatusStat] = Field(default_factory=list)
    top_cities: List[CityStat] = Field(default_factory=list)


class UserStatsResponse(_StatsModel):
    success: bool = True
    data: UserStats

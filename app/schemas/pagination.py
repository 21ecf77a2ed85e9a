"""Pagination schemas."""

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Summary of a paginated listing."""

    page: int = Field(..., ge=1, description="Current page (1-based)")
    limit: int = Field(..., ge=1, description="Records per page")
    total: int = Field(..., ge=0, description="Records matching the filter")
    pages: int = Field(..., ge=0, description="Total number of pages")

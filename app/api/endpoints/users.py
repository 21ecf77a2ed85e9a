"""
User endpoints.

CRUD over user records plus the filtered listing and collection statistics.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.statistics import UserStatsResponse
from app.schemas.user import (
    DeletedUser,
    ErrorResponse,
    UserCreate,
    UserDeletedResponse,
    UserEnvelope,
    UserListResponse,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}


@router.post("",
             summary="Create a user.",
             response_model=UserEnvelope,
             status_code=status.HTTP_201_CREATED,
             responses=CONFLICT)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user.

    Raises:
        HTTPException 409: If the email is already in use
    """
    service = UserService(db)
    user = service.create(user_data)
    return UserEnvelope(message="User created successfully", data=user)


@router.get("", summary="List users with filters, sorting and pagination.", response_model=UserListResponse)
def list_users(page: Optional[str] = Query(None, description="Page number (1-based, default 1)"),
               limit: Optional[str] = Query(None, description="Records per page (default 10, capped)"),
               status_filter: Optional[str] = Query(None, alias="status", description="Exact status match"),
               city: Optional[str] = Query(None, description="Exact address city match"),
               search: Optional[str] = Query(None, description="Case-insensitive substring of name or email"),
               sort: Optional[str] = Query(None, description="Comma-separated field:direction, e.g. name:asc,age:desc"),
               db: Session = Depends(get_db), ):
    """
    Query users. Parameters arrive as raw strings; invalid page/limit values
    fall back to the defaults. Without ``sort`` the newest users come first.
    """
    service = UserService(db)
    return service.list_users(page=page, limit=limit, status_filter=status_filter, city=city, search=search,
                              sort=sort)


@router.get("/stats", summary="Get user statistics.", response_model=UserStatsResponse)
def get_user_stats(weighted: bool = Query(False, description="Population-weighted averageAge instead of the "
                                                             "mean of per-status means"),
                   db: Session = Depends(get_db), ):
    service = UserService(db)
    return UserStatsResponse(data=service.statistics(weighted=weighted))


@router.get("/{user_id}", summary="Get a user.", response_model=UserEnvelope, responses=NOT_FOUND)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    return UserEnvelope(data=service.get(user_id))


@router.put("/{user_id}",
            summary="Update a user.",
            response_model=UserEnvelope,
            responses={**NOT_FOUND, **CONFLICT})
def update_user(user_id: int, user_data: UserUpdate, db: Session = Depends(get_db)):
    """Partial update; a supplied ``address`` replaces the stored address."""
    service = UserService(db)
    user = service.update(user_id, user_data)
    return UserEnvelope(message="User updated successfully", data=user)


@router.delete("/{user_id}", summary="Delete a user.", response_model=UserDeletedResponse, responses=NOT_FOUND)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    deleted_id = service.delete(user_id)
    return UserDeletedResponse(message="User deleted successfully", data=DeletedUser(id=deleted_id))

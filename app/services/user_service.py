"""
User service.

Business logic for user management: email uniqueness, listing with
filters and pagination, and collection statistics.
Handles mapping between the nested API schemas and the flat database model.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.config import settings
from app.db.repositories.user import UserRepository
from app.models.user import DEFAULT_AVATAR, User, utcnow
from app.schemas.statistics import UserStats
from app.schemas.user import Address, UserCreate, UserListResponse, UserResponse, UserUpdate
from app.userbase.pagination import resolve_window, summarize
from app.userbase.query import build_user_query
from app.userbase.statistics import build_user_stats

RepositoryCall = Callable[[UserRepository], Any]

ADDRESS_COLUMNS = ("address_street", "address_city", "address_state", "address_country", "address_zip_code")


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session, concurrent: Optional[bool] = None):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
            concurrent: Run independent read queries on parallel sessions
                (defaults to ``settings.CONCURRENT_QUERIES``)
        """
        self.session = session
        self.repository = UserRepository(session)
        self.concurrent = settings.CONCURRENT_QUERIES if concurrent is None else concurrent

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, data: UserCreate) -> UserResponse:
        """
        Create a new user.

        Raises:
            HTTPException 409: If the email is already in use
        """
        if self.repository.exists_by_email(data.email):
            logger.warning("Rejected user creation, email {} already in use", data.email)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

        user = User(**self._schema_to_flat(data))
        try:
            user = self.repository.create(user)
        except IntegrityError:
            # Lost a race against a concurrent insert with the same email
            self.session.rollback()
            logger.warning("Unique constraint rejected email {}", data.email)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

        logger.info("Created user {} ({})", user.id, user.email)
        return self._to_response(user)

    def list_users(
        self,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        status_filter: Optional[str] = None,
        city: Optional[str] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> UserListResponse:
        """List users from raw query parameters.

        The page fetch and the total count run as two independent queries;
        a write landing between them can make ``total`` disagree with the page.
        """
        query = build_user_query(status=status_filter, city=city, search=search, sort=sort)
        window = resolve_window(page, limit, default_limit=settings.DEFAULT_PAGE_LIMIT,
                                max_limit=settings.MAX_PAGE_LIMIT, default_page=settings.DEFAULT_PAGE)

        users, total = self._gather(
            lambda repo: repo.find(query, skip=window.skip, limit=window.limit),
            lambda repo: repo.count(query),
        )

        data = [self._to_response(u) for u in users]
        return UserListResponse(count=len(data), pagination=summarize(window, total), data=data)

    def get(self, user_id: int) -> UserResponse:
        return self._to_response(self._get_existing(user_id))

    def update(self, user_id: int, data: UserUpdate) -> UserResponse:
        """
        Apply a partial update.

        Raises:
            HTTPException 404: If the user does not exist
            HTTPException 409: If the email changes to one already in use
        """
        user = self._get_existing(user_id)

        if data.email is not None and data.email != user.email:
            if self.repository.exists_by_email(data.email):
                logger.warning("Rejected email change of user {} to {}", user_id, data.email)
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

        # Only fields present in the body are written; a supplied address replaces the stored one entirely
        flat = self._schema_to_flat(data)
        for field in data.model_fields_set:
            for key in ADDRESS_COLUMNS if field == "address" else (field,):
                setattr(user, key, flat[key])
        user.updated_at = utcnow()

        try:
            user = self.repository.update(user)
        except IntegrityError:
            self.session.rollback()
            logger.warning("Unique constraint rejected email change of user {}", user_id)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

        logger.info("Updated user {}", user_id)
        return self._to_response(user)

    def delete(self, user_id: int) -> int:
        """
        Delete a user permanently.

        Raises:
            HTTPException 404: If the user does not exist
        """
        if not self.repository.delete(user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("Deleted user {}", user_id)
        return user_id

    def statistics(self, weighted: bool = False) -> UserStats:
        """Status breakdown, average age and top cities over all users."""
        status_groups, city_groups = self._gather(
            lambda repo: repo.group_by_status(),
            lambda repo: repo.group_by_city(limit=settings.TOP_CITIES_LIMIT),
        )
        return build_user_stats(status_groups, city_groups, weighted=weighted, top=settings.TOP_CITIES_LIMIT)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_existing(self, user_id: int) -> User:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def _gather(self, *calls: RepositoryCall) -> list:
        """Run independent repository reads, each on its own session when concurrent."""
        if not self.concurrent:
            return [call(self.repository) for call in calls]

        engine = self.session.get_bind()

        def run(call: RepositoryCall) -> Any:
            with Session(engine) as session:
                return call(UserRepository(session))

        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures = [pool.submit(run, call) for call in calls]
            return [future.result() for future in futures]

    @staticmethod
    def _schema_to_flat(data: UserCreate | UserUpdate) -> dict:
        """Convert nested schema to flat dict for the database model."""
        flat: dict = {
            "name": data.name,
            "email": data.email,
            "age": data.age,
            "phone": data.phone,
            "avatar": data.avatar,
            "status": data.status.value if data.status is not None else None,
            "role": data.role.value if data.role is not None else None,
        }

        if data.address:
            flat["address_street"] = data.address.street
            flat["address_city"] = data.address.city
            flat["address_state"] = data.address.state
            flat["address_country"] = data.address.country
            flat["address_zip_code"] = data.address.zip_code

        if isinstance(data, UserCreate):
            flat["avatar"] = data.avatar or DEFAULT_AVATAR

        return flat

    @staticmethod
    def _to_response(user: User) -> UserResponse:
        """Convert flat database model to nested response schema."""
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            address=Address(
                street=user.address_street,
                city=user.address_city,
                state=user.address_state,
                country=user.address_country,
                zip_code=user.address_zip_code,
            ),
            phone=user.phone,
            avatar=user.avatar,
            status=user.status,
            role=user.role,
            full_address=user.full_address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

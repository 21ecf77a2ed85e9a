"""
User repository.

Handles database operations for User model, including the filtered
listing, its count, and the grouping queries behind the statistics.
"""

from typing import Optional

from sqlalchemy import func, or_
from sqlmodel import Session, select

from app.models.user import User
from app.schemas.statistics import CityStat, StatusStat
from app.userbase.query import LIKE_ESCAPE, UserQuery


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, user: User) -> User:
        """
        Create a new user in the database.

        Args:
            user: User instance to create

        Returns:
            Created user with generated id

        Raises:
            IntegrityError: If the email is already taken
        """
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @staticmethod
    def _filters(query: UserQuery) -> list:
        clauses = []
        if query.status is not None:
            clauses.append(User.status == query.status)
        if query.city is not None:
            clauses.append(User.address_city == query.city)
        if query.search_pattern is not None:
            clauses.append(or_(User.name.ilike(query.search_pattern, escape=LIKE_ESCAPE),
                               User.email.ilike(query.search_pattern, escape=LIKE_ESCAPE)))
        return clauses

    @staticmethod
    def _ordering(query: UserQuery) -> list:
        order_by = []
        for key in query.sort:
            column = getattr(User, key.field)
            order_by.append(column.desc() if key.descending else column.asc())
        # Primary key tie-breaker keeps skip/limit pages stable
        order_by.append(User.id.desc() if query.sort[0].descending else User.id.asc())
        return order_by

    def find(self, query: UserQuery, skip: int = 0, limit: int = 10) -> list[User]:
        """
        Get the users matching the query, ordered and paginated.

        Args:
            query: Filters and sort order
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of users
        """
        statement = (select(User).where(*self._filters(query)).order_by(*self._ordering(query)).offset(skip)
                     .limit(limit))
        return list(self.session.exec(statement).all())

    def count(self, query: UserQuery) -> int:
        """Count users matching the query filters (sort is irrelevant)."""
        statement = select(func.count()).select_from(User).where(*self._filters(query))
        return self.session.exec(statement).first() or 0

    # ------------------------------------------------------------------
    # Aggregation queries for statistics
    # ------------------------------------------------------------------

    def group_by_status(self) -> list[StatusStat]:
        """Count and mean age per status."""
        statement = (select(User.status, func.count(User.id), func.avg(User.age)).group_by(User.status)
                     .order_by(User.status))
        return [StatusStat(status=status, count=count, avg_age=float(avg_age))
                for status, count, avg_age in self.session.exec(statement).all()]

    def group_by_city(self, limit: int = 5) -> list[CityStat]:
        """User count per city, most populated first."""
        statement = (select(User.address_city, func.count(User.id)).group_by(User.address_city)
                     .order_by(func.count(User.id).desc(), User.address_city).limit(limit))
        return [CityStat(city=city, count=count) for city, count in self.session.exec(statement).all()]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, user: User) -> User:
        """
        Update an existing user.

        Args:
            user: User instance with updated data

        Returns:
            Updated user

        Raises:
            IntegrityError: If the new email is already taken
        """
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        """
        Delete a user by ID.

        Args:
            user_id: User ID to delete

        Returns:
            True if deleted, False if not found
        """
        user = self.get_by_id(user_id)
        if user:
            self.session.delete(user)
            self.session.commit()
            return True
        return False

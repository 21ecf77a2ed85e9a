"""Service tests for the paths the HTTP tests cannot reach directly."""

import pytest
from fastapi import HTTPException

from app.core.config import settings
from app.schemas.user import UserCreate, UserUpdate
from app.services.user_service import UserService
from tests.utils import user_payload


@pytest.fixture
def service(session):
    return UserService(session, concurrent=False)


class TestUniqueEmailRace:
    """The pre-check can miss a concurrent insert; the unique index still wins."""

    def test_create_race_reported_as_conflict(self, service, make_user, monkeypatch):
        existing = make_user(name="Winner", email="race@x.com")
        monkeypatch.setattr(service.repository, "exists_by_email", lambda email: False)

        with pytest.raises(HTTPException) as exc:
            service.create(UserCreate(**user_payload(email="race@x.com")))

        assert exc.value.status_code == 409
        assert service.get(existing.id).name == "Winner"

    def test_update_race_reported_as_conflict(self, service, make_user, monkeypatch):
        make_user(email="race@x.com")
        user = make_user(email="mine@x.com")
        monkeypatch.setattr(service.repository, "exists_by_email", lambda email: False)

        with pytest.raises(HTTPException) as exc:
            service.update(user.id, UserUpdate(email="race@x.com"))

        assert exc.value.status_code == 409
        assert service.get(user.id).email == "mine@x.com"


class TestStatisticsService:
    def test_statistics_sequential(self, service, make_user):
        make_user(status="active", age=20, city="Boston")
        make_user(status="suspended", age=60, city="Austin")

        stats = service.statistics()
        assert stats.total_users == 2
        assert stats.average_age == 40.0
        assert [s.status for s in stats.status_stats] == ["active", "suspended"]
        assert {c.city for c in stats.top_cities} == {"Boston", "Austin"}

    def test_statistics_concurrent(self, session, make_user):
        make_user(status="active", age=20)
        make_user(status="inactive", age=40)

        stats = UserService(session, concurrent=True).statistics()
        assert stats.total_users == 2
        assert stats.average_age == 30.0


class TestListingService:
    def test_configured_default_page(self, service, make_user, monkeypatch):
        for _ in range(3):
            make_user()
        monkeypatch.setattr(settings, "DEFAULT_PAGE", 2)

        listing = service.list_users(limit="2")
        assert listing.pagination.page == 2
        assert listing.count == 1

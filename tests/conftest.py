"""Shared fixtures: a throwaway SQLite database per test."""

from __future__ import annotations

import datetime
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.db.init_db import init_db
from app.db.session import build_engine
from app.main import create_app
from app.models.user import User

BASE_TIME = datetime.datetime(2025, 1, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def engine(tmp_path) -> Generator[Engine]:
    """File-backed SQLite engine so parallel sessions see the same data."""
    engine = build_engine(f"sqlite:///{tmp_path / 'userbase.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient]:
    app = create_app(engine)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_user(session: Session) -> Callable[..., User]:
    """Insert a user directly; ``minutes`` offsets ``created_at`` from a fixed base time."""
    counter = {"n": 0}

    def _make(
        name: str = "Test User",
        email: str | None = None,
        age: int = 30,
        city: str = "Springfield",
        status: str = "active",
        role: str = "user",
        minutes: int | None = None,
    ) -> User:
        counter["n"] += 1
        offset = counter["n"] if minutes is None else minutes
        user = User(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            age=age,
            address_street=f"{counter['n']} Main St",
            address_city=city,
            status=status,
            role=role,
            created_at=BASE_TIME + datetime.timedelta(minutes=offset),
            updated_at=BASE_TIME + datetime.timedelta(minutes=offset),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make

"""
Database session management.

Provides engine construction and the per-request session dependency.
The engine is created by the application lifespan and kept on
``app.state.engine``; nothing here holds a module-level connection.
"""

from typing import Generator

from fastapi import Request
from loguru import logger
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, create_engine

from app.core.config import settings


def build_engine(database_url: str = settings.DATABASE_URL) -> Engine:
    """
    Create the database engine for ``database_url``.

    SQLite engines allow use across threads (parallel listing queries);
    server databases get a bounded connection pool.
    """
    url = make_url(database_url)
    logger.info("Creating database engine for {}", url.render_as_string(hide_password=True))

    if url.get_backend_name() == "sqlite":
        return create_engine(database_url, echo=settings.DATABASE_ECHO, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        echo=settings.DATABASE_ECHO,  # Log SQL queries when enabled
        pool_pre_ping=settings.DATABASE_POOL_PRE_PING,  # Verify connections before using
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session bound to the application's engine

    Example:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.exec(select(Item)).all()
    """
    with Session(request.app.state.engine) as session:
        yield session

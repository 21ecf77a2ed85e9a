"""
Database initialization.

Creates all tables that do not exist yet.
"""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def init_db(engine: Engine) -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables (existing tables are left untouched)
    - Creates the unique email index and the listing indexes
    """

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables ready: {}", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    from app.db.session import build_engine

    init_db(build_engine())

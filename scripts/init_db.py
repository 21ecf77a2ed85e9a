"""
Database initialization script.

Run this script to create the users table and its indexes.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from loguru import logger

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import build_engine

if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    logger.info("Userbase database initialization")

    engine = build_engine(settings.DATABASE_URL)
    try:
        init_db(engine)
    except Exception as e:
        logger.error("Database initialization failed: {}", e)
        sys.exit(1)
    finally:
        engine.dispose()

    logger.info("Database initialized")

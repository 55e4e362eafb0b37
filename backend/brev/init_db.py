"""
Initialize the database.

Run this once to create the links table (does nothing if it already exists):
    python -m brev.init_db
"""

import logging
import sys

from .config import settings
from .errors import StoreError
from .store import LinkStore
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def init_database(database_url: str) -> None:
    """Create all database tables"""
    store = LinkStore(database_url)
    store.init()
    try:
        store.create_schema()
    finally:
        store.close()


def main() -> int:
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    logger.info("Creating database tables...")
    try:
        init_database(settings.DATABASE_URL)
    except StoreError:
        logger.exception("Error creating database tables")
        return 1

    logger.info("Database tables created successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())

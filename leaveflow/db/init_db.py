# leaveflow/db/init_db.py
"""Database initialization utilities."""
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from leaveflow.models import Base

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    Production schemas are expected to be provisioned ahead of time.
    """
    try:
        existing_tables = set(inspect(engine).get_table_names())
        missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

        if not missing:
            logger.info(f"Database already initialized with {len(existing_tables)} tables")
            return

        Base.metadata.create_all(bind=engine, tables=missing)
        logger.info(f"Created tables: {', '.join(t.name for t in missing)}")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")

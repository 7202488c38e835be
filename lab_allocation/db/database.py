# /lab_allocation/db/database.py

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    SQLite ignores FOREIGN KEY / ON DELETE CASCADE clauses unless the pragma is
    switched on for every new connection.
    """
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)
if DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency that yields a database session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Creates any missing tables for the registered models."""
    # Importing the registry attaches every model to Base.metadata.
    from .base import Base

    logger.info("Creating database tables (if they don't exist)...")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables are ready.")

"""Engine, sessions and schema helpers for the classroom store."""

import os
import logging
import sqlite3
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./classroom.db")


def _engine_options(url: str) -> dict:
    options = {
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "echo": os.getenv("SQL_DEBUG", "false").lower() == "true",
    }
    if url.startswith("sqlite"):
        # Requests are served from a threadpool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = 10
        options["max_overflow"] = 20
    return options


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce foreign keys on SQLite connections."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
event.listen(engine, "connect", set_sqlite_pragma)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session. Services commit their own writes."""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Session for work outside a request; commits on a clean exit."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def _metadata():
    # Importing the models registers every table on Base.metadata
    from . import models  # noqa: F401
    return Base.metadata


def create_tables(bind=None):
    """Create the classroom tables that do not exist yet."""
    try:
        _metadata().create_all(bind=bind or engine)
    except SQLAlchemyError as e:
        logger.error(f"Error creating tables: {e}")
        raise
    logger.info("Classroom tables ready")


def drop_tables(bind=None):
    try:
        _metadata().drop_all(bind=bind or engine)
    except SQLAlchemyError as e:
        logger.error(f"Error dropping tables: {e}")
        raise
    logger.info("Classroom tables dropped")


def check_database_connection() -> bool:
    """Return whether the configured database answers a trivial query."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False
    logger.info(f"Connected to database at {engine.url.render_as_string(hide_password=True)}")
    return True

"""Database connection and session management.

This module handles the database connection using SQLAlchemy.
"""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from config import DATABASE_URL
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401


def _casefold(value):
    if value is None:
        return None
    return str(value).casefold()


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine, enabling foreign keys for SQLite connections.

    SQLite connections also get a ``casefold()`` SQL function, since the
    built-in ``lower()`` only folds ASCII letters.
    """
    db_url = make_url(url)
    if db_url.get_backend_name() == "sqlite":
        if db_url.database and db_url.database != ":memory:":
            # Ensure data directory exists
            Path(db_url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            dbapi_connection.create_function("casefold", 1, _casefold)

        return engine
    return create_engine(url, pool_pre_ping=True)


engine = create_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

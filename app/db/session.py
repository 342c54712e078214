"""
Database session management.

Provides the SQLModel engine factory for the embedded SQLite database.
"""

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from app.core.config import settings


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ``ON DELETE CASCADE`` unless foreign keys are enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_path: str, echo: bool = settings.DEBUG) -> Engine:
    """
    Create an engine for the SQLite database at ``database_path``.

    Args:
        database_path: File path, or ``":memory:"`` for an in-memory database
        echo: Log SQL statements

    Returns:
        SQLAlchemy engine with foreign keys enforced
    """
    options = {}
    if database_path == ":memory:":
        url = "sqlite://"
        # One shared connection, otherwise every checkout sees an empty database
        options["poolclass"] = StaticPool
    else:
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{database_path}"

    engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False},  # FastAPI runs sync endpoints in a threadpool
        **options,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine

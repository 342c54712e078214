"""
Database initialization.

Creates all tables and seeds the dataset metadata.
"""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from app.core.config import settings
from app.db.repositories.metadata import MetadataRepository


def init_db(engine: Engine, default_version: str = settings.DEFAULT_DATASET_VERSION) -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables (idempotent)
    - Inserts the ``version`` metadata row if missing
    """
    # Import all models so SQLModel.metadata has them
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        MetadataRepository(session).get_or_create_version(default_version)
        session.commit()
    logger.debug("Database schema ready")

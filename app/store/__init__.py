"""
Persistence backends.

Two interchangeable implementations of :class:`TrainingStore`; which one
serves the API is a configuration choice invisible to callers.
"""

from app.store.base import TrainingStore
from app.store.json_file import JsonTrainingStore
from app.store.sql import SqlTrainingStore
from app.core.config import settings

BACKENDS = ("sqlite", "json")


def build_store(
    backend: str = settings.STORE_BACKEND,
    database_path: str = settings.DATABASE_PATH,
    data_file: str = settings.DATA_FILE,
    default_version: str = settings.DEFAULT_DATASET_VERSION,
) -> TrainingStore:
    """Create the store selected by ``backend``.

    Raises:
        ValueError: for an unknown backend name.
    """
    if backend == "sqlite":
        from app.db.session import create_db_engine

        return SqlTrainingStore(create_db_engine(database_path), default_version)
    if backend == "json":
        return JsonTrainingStore(data_file, default_version)
    raise ValueError(f"Unknown store backend: '{backend}'. Available: {list(BACKENDS)}")


__all__ = ["BACKENDS", "JsonTrainingStore", "SqlTrainingStore", "TrainingStore", "build_store"]

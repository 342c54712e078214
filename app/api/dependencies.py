"""
Shared API dependencies.

Reusable FastAPI dependencies for store and service access.
"""

from functools import lru_cache

from fastapi import Depends

from app.services.tracker_service import TrackerService
from app.store import TrainingStore, build_store


@lru_cache
def get_store() -> TrainingStore:
    """Process-wide store selected by ``STORE_BACKEND``.

    Tests replace it through ``app.dependency_overrides``.
    """
    return build_store()


def get_service(store: TrainingStore = Depends(get_store)) -> TrackerService:
    return TrackerService(store)

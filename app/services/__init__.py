"""Business logic services."""

from app.services.tracker_service import TrackerService

__all__ = [
    "TrackerService",
]

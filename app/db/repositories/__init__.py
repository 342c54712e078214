"""Database repositories."""

from app.db.repositories.player import PlayerRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.metadata import MetadataRepository

__all__ = [
    "PlayerRepository",
    "TrainingSessionRepository",
    "MetadataRepository",
]

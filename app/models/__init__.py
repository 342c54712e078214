"""SQLModel table definitions."""

from app.models.player import PlayerRecord
from app.models.training_session import TrainingSessionRecord
from app.models.metadata import MetadataRecord

__all__ = ["PlayerRecord", "TrainingSessionRecord", "MetadataRecord"]

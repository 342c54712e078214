"""
Training session database model.

Stores one row per logged session.  ``training_load`` is persisted
redundantly for SQL-side aggregation and always equals
``duration * rpe`` at write time.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class TrainingSessionRecord(SQLModel, table=True):
    """A single training session belonging to a player."""

    __tablename__ = "training_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    player_id: str = Field(foreign_key="players.id", ondelete="CASCADE", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    duration: int = Field(nullable=False)
    rpe: int = Field(nullable=False)
    training_load: int = Field(nullable=False)
    notes: str = Field(default="", max_length=1000)

    created_at: datetime.datetime = Field(default_factory=utcnow)

"""
Player database model.
"""

import datetime

from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class PlayerRecord(SQLModel, table=True):
    """A player (athlete).

    ``name_key`` is the case-folded name and carries the uniqueness
    constraint, so ``"Anna"`` and ``"anna"`` cannot coexist.
    """

    __tablename__ = "players"

    id: str = Field(primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=255)
    name_key: str = Field(unique=True, index=True, nullable=False, max_length=255)

    created_at: datetime.datetime = Field(default_factory=utcnow)

"""
Whole-dataset schemas.

The :class:`Dataset` document is both the ``GET /data`` response and the
on-disk format of the JSON store; exported files use the same shape.
"""

import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.clock import utcnow
from app.schemas.player import MAX_NAME_LENGTH, Player
from app.schemas.session import SessionCreate

DEFAULT_VERSION = "1.0"


class Dataset(BaseModel):
    """Every player with every session, plus version metadata."""

    model_config = ConfigDict(populate_by_name=True)

    players: list[Player] = Field(default_factory=list)
    version: str = DEFAULT_VERSION
    updated_at: datetime.datetime = Field(default_factory=utcnow, alias="updatedAt")


class PlayerReplace(BaseModel):
    """A player entry of a full-dataset overwrite."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = Field(None, min_length=1, description="Kept when given, generated otherwise")
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    sessions: list[SessionCreate] = Field(default_factory=list)


class DatasetReplace(BaseModel):
    """Body of ``PUT /data``."""

    players: list[PlayerReplace]
    version: Optional[str] = None


class ImportRequest(BaseModel):
    """Body of ``POST /import``.

    Entries are checked leniently by the store: unnamed entries and invalid
    sessions are skipped rather than rejected.
    """

    players: list[Any]


class ImportResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    added_players: int = Field(..., alias="addedPlayers")


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str

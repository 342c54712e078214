"""
Player API schemas.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.session import Session

MAX_NAME_LENGTH = 255


class PlayerCreate(BaseModel):
    """Schema for adding a player."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ..., min_length=1, max_length=MAX_NAME_LENGTH, description="Player name (unique, case-insensitive)",
    )


class Player(BaseModel):
    """Schema for a player together with its sessions."""

    id: str
    name: str
    sessions: list[Session] = Field(default_factory=list)

"""
Dashboard statistics schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel

from app.schemas.session import Session
from app.tracker.load import RpeBand


class OverviewStats(BaseModel):
    """Aggregates across all sessions of all players."""

    player_count: int
    session_count: int
    avg_rpe: float
    avg_load: int


class PlayerStats(BaseModel):
    """Aggregates for one player."""

    player_id: str
    player_name: str
    session_count: int
    avg_rpe: float
    avg_load: int
    total_minutes: int


class RecentSession(BaseModel):
    """A session flattened out of its player, for the recent-sessions table."""

    player_id: str
    player_name: str
    session: Session
    band: Optional[RpeBand] = None


class TrendPoint(BaseModel):
    """One point of a player's training-load time series."""

    date: datetime.date
    label: str
    training_load: int

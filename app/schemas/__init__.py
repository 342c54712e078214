"""Pydantic schemas for request/response validation."""

from app.schemas.session import Session, SessionCreate
from app.schemas.player import Player, PlayerCreate
from app.schemas.dataset import (
    DEFAULT_VERSION,
    Dataset,
    DatasetReplace,
    ErrorResponse,
    ImportRequest,
    ImportResult,
    PlayerReplace,
    SuccessResponse,
)
from app.schemas.stats import OverviewStats, PlayerStats, RecentSession, TrendPoint

__all__ = [
    "Session",
    "SessionCreate",
    "Player",
    "PlayerCreate",
    "DEFAULT_VERSION",
    "Dataset",
    "DatasetReplace",
    "ErrorResponse",
    "ImportRequest",
    "ImportResult",
    "PlayerReplace",
    "SuccessResponse",
    "OverviewStats",
    "PlayerStats",
    "RecentSession",
    "TrendPoint",
]

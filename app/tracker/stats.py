"""
Dashboard aggregates.

Pure functions over an in-memory list of players; nothing here touches a
store or the network.  Averages round half-up (``4.25 -> 4.3``,
``412.5 -> 413``).
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from app.schemas.player import Player
from app.schemas.session import Session
from app.schemas.stats import OverviewStats, PlayerStats, RecentSession, TrendPoint
from app.tracker.load import rpe_band

DESKTOP_RECENT_LIMIT = 20
TABLET_RECENT_LIMIT = 10
TREND_LIMIT = 15


def _round_half_up(value: float, places: int = 0) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def _averages(sessions: Sequence[Session]) -> tuple[float, int]:
    """Return ``(avg_rpe, avg_load)``; both zero without sessions."""
    if not sessions:
        return 0.0, 0
    count = len(sessions)
    avg_rpe = sum(s.rpe for s in sessions) / count
    avg_load = sum(s.training_load for s in sessions) / count
    return float(_round_half_up(avg_rpe, 1)), int(_round_half_up(avg_load))


def overview_stats(players: Sequence[Player]) -> OverviewStats:
    sessions = [s for p in players for s in p.sessions]
    avg_rpe, avg_load = _averages(sessions)
    return OverviewStats(
        player_count=len(players), session_count=len(sessions), avg_rpe=avg_rpe, avg_load=avg_load,
    )


def player_stats(player: Player) -> PlayerStats:
    avg_rpe, avg_load = _averages(player.sessions)
    return PlayerStats(
        player_id=player.id,
        player_name=player.name,
        session_count=len(player.sessions),
        avg_rpe=avg_rpe,
        avg_load=avg_load,
        total_minutes=sum(s.duration for s in player.sessions),
    )


def recent_sessions(players: Sequence[Player], limit: int = DESKTOP_RECENT_LIMIT) -> list[RecentSession]:
    """Flatten every session, newest first, and keep the first ``limit``.

    Sessions on the same date keep their original relative order.
    """
    flattened = [
        RecentSession(player_id=p.id, player_name=p.name, session=s, band=rpe_band(s.rpe))
        for p in players
        for s in p.sessions
    ]
    flattened.sort(key=lambda r: r.session.date, reverse=True)
    return flattened[:limit]


def load_trend(player: Player, limit: int = TREND_LIMIT, date_format: str = "%Y-%m-%d") -> list[TrendPoint]:
    """The player's last ``limit`` sessions in ascending date order."""
    ordered = sorted(player.sessions, key=lambda s: s.date)
    if limit > 0:
        ordered = ordered[-limit:]
    return [
        TrendPoint(date=s.date, label=s.date.strftime(date_format), training_load=s.training_load)
        for s in ordered
    ]

"""
Dashboard view models.

The desktop dashboard and the tablet UI render the same data with
different sizes; :class:`ViewConfig` captures those differences and
:func:`render_dashboard` turns a :class:`ClientState` into everything a
dashboard needs to draw.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel

from app.client.state import ClientState
from app.schemas.stats import OverviewStats, PlayerStats, RecentSession, TrendPoint
from app.tracker.stats import (
    DESKTOP_RECENT_LIMIT,
    TABLET_RECENT_LIMIT,
    TREND_LIMIT,
    load_trend,
    overview_stats,
    player_stats,
    recent_sessions,
)


@dataclass(frozen=True)
class ViewConfig:
    name: str
    recent_limit: int
    trend_limit: int = TREND_LIMIT
    date_format: str = "%d.%m.%Y"


RecentColumn = Literal["date", "player", "duration", "rpe", "load", "notes"]

_RECENT_SORT_KEYS: dict[str, Callable[[RecentSession], Any]] = {
    "date": lambda r: r.session.date,
    "player": lambda r: r.player_name.casefold(),
    "duration": lambda r: r.session.duration,
    "rpe": lambda r: r.session.rpe,
    "load": lambda r: r.session.training_load,
    "notes": lambda r: r.session.notes.casefold(),
}
RECENT_COLUMNS = tuple(_RECENT_SORT_KEYS)

DESKTOP = ViewConfig(name="desktop", recent_limit=DESKTOP_RECENT_LIMIT)
TABLET = ViewConfig(name="tablet", recent_limit=TABLET_RECENT_LIMIT)


class DashboardView(BaseModel):
    overview: OverviewStats
    recent: list[RecentSession]
    selected: Optional[PlayerStats] = None
    trend: list[TrendPoint] = []


def render_dashboard(state: ClientState, config: ViewConfig = DESKTOP) -> DashboardView:
    player = state.selected_player
    return DashboardView(
        overview=overview_stats(state.players),
        recent=recent_sessions(state.players, config.recent_limit),
        selected=player_stats(player) if player else None,
        trend=load_trend(player, config.trend_limit, config.date_format) if player else [],
    )


def sort_recent(rows: Sequence[RecentSession], column: RecentColumn, ascending: bool = True) -> list[RecentSession]:
    """Reorder recent-session rows by a table column; equal values keep their order."""
    try:
        key = _RECENT_SORT_KEYS[column]
    except KeyError:
        raise ValueError(f"Unknown column: '{column}'. Available: {list(_RECENT_SORT_KEYS)}") from None
    return sorted(rows, key=key, reverse=not ascending)

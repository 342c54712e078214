"""
Front end shell.

One :class:`FrontEnd` per UI (desktop dashboard or tablet).  Every user
action goes through the shared :class:`DataCache`; its outcome becomes a
transient :class:`Notification`.  Failures are logged and reported, never
retried: the user triggers the action again.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, TypeVar

from loguru import logger

from app.client.api import TrackerAPIError
from app.client.cache import DataCache
from app.client.quick_entry import QuickEntry
from app.client.views import (
    DESKTOP,
    RECENT_COLUMNS,
    DashboardView,
    RecentColumn,
    ViewConfig,
    render_dashboard,
    sort_recent,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Notification:
    message: str
    kind: Literal["success", "error"] = "success"


class FrontEnd:
    """User actions of one UI configuration."""

    def __init__(self, cache: DataCache, config: ViewConfig = DESKTOP):
        self.cache = cache
        self.config = config
        self.quick_entry = QuickEntry()
        self.notifications: list[Notification] = []
        self.recent_sort: Optional[tuple[RecentColumn, bool]] = None
        self._sort_ascending: dict[str, bool] = {}

    @property
    def last_notification(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def dashboard(self) -> DashboardView:
        view = render_dashboard(self.cache.state, self.config)
        if self.recent_sort is None:
            return view
        column, ascending = self.recent_sort
        return view.model_copy(update={"recent": sort_recent(view.recent, column, ascending)})

    def sort_recent_by(self, column: RecentColumn) -> bool:
        """Sort the recent-sessions table by ``column``.

        The first click on a column sorts ascending; each further click on
        the same column flips the direction.  Returns the new direction.
        """
        if column not in RECENT_COLUMNS:
            raise ValueError(f"Unknown column: '{column}'")
        ascending = not self._sort_ascending.get(column, False)
        self._sort_ascending[column] = ascending
        self.recent_sort = (column, ascending)
        return ascending

    def _notify(self, message: str, kind: Literal["success", "error"] = "success") -> Notification:
        notification = Notification(message, kind)
        self.notifications.append(notification)
        return notification

    def _run(self, action: Callable[[], T], failure: str) -> tuple[bool, Optional[T]]:
        """Run ``action``; on failure log it, notify ``failure`` and return ``(False, None)``."""
        try:
            return True, action()
        except TrackerAPIError as e:
            logger.error(f"[{self.config.name}] {failure}: {e.message} (status={e.status_code})")
            self._notify(failure, "error")
            return False, None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def load(self) -> bool:
        ok, _ = self._run(self.cache.refresh, "Failed to load data from server")
        return ok

    def select_player(self, player_id: Optional[str]) -> None:
        self.cache.select(player_id)

    def add_player(self, name: str) -> bool:
        name = name.strip()
        if not name:
            self._notify("Please enter a player name.", "error")
            return False
        try:
            self.cache.add_player(name)
        except TrackerAPIError as e:
            logger.error(f"[{self.config.name}] add player failed: {e.message} (status={e.status_code})")
            if e.status_code == 409:
                self._notify("A player with this name already exists.", "error")
            else:
                self._notify("Failed to add player", "error")
            return False
        self._notify(f'Player "{name}" added.')
        return True

    def remove_player(self, player_id: str) -> bool:
        player = self.cache.state.find_player(player_id)
        if player is None:
            return False
        ok, _ = self._run(lambda: self.cache.delete_player(player_id), "Failed to delete player")
        if not ok:
            return False
        self._notify(f'Player "{player.name}" deleted.')
        return True

    def add_session(
        self, player_id: str, date: datetime.date, duration: int, rpe: int, notes: str = "",
    ) -> bool:
        if not player_id or duration <= 0 or not rpe:
            self._notify("Please fill in all required fields.", "error")
            return False
        ok, _ = self._run(
            lambda: self.cache.add_session(player_id, date, duration, rpe, notes.strip()),
            "Failed to save session",
        )
        if not ok:
            return False
        player = self.cache.state.find_player(player_id)
        self._notify(f"Session for {player.name if player else 'player'} saved.")
        return True

    def submit_quick_entry(self, today: Optional[datetime.date] = None) -> bool:
        """Submit the tablet keypad entry; resets it on success."""
        entry = self.quick_entry
        if not entry.can_submit:
            self._notify("Please fill in all fields.", "error")
            return False
        if self.add_session(entry.player_id, today or datetime.date.today(), entry.duration, entry.rpe):
            self.quick_entry = entry.reset()
            return True
        return False

    def export_data(self, path: str | Path) -> Optional[Path]:
        ok, target = self._run(lambda: self.cache.export_to_file(path), "Failed to export data")
        if ok:
            self._notify("Data exported.")
        return target

    def import_file(self, path: str | Path) -> Optional[int]:
        ok, added = self._run(lambda: self.cache.import_from_file(path), "Import failed: invalid JSON format")
        if ok:
            self._notify(f"Data imported. {added} new players added.")
        return added

    def clear_all(self) -> bool:
        ok, _ = self._run(self.cache.clear_all, "Failed to delete data")
        if not ok:
            return False
        self._notify("All data deleted.")
        return True

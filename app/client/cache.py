"""
Client data cache.

Holds the last fetched dataset for one front end.  Additive mutations
(new player, new session) are patched in from the server's response
without a round trip; deleting a player is patched locally; imports and
clearing trigger a full reload because their effect is not simply
additive.
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from app.client.api import TrackerAPIError, TrackerClient
from app.client.state import (
    ClientState,
    with_dataset,
    with_player_added,
    with_player_removed,
    with_selection,
    with_session_added,
)
from app.schemas.player import Player
from app.schemas.session import Session


class DataCache:
    """In-memory mirror of the server's dataset."""

    def __init__(self, client: TrackerClient, state: Optional[ClientState] = None):
        self.client = client
        self.state = state or ClientState()

    def refresh(self) -> ClientState:
        self.state = with_dataset(self.state, self.client.get_data())
        logger.debug(f"Cache refreshed: {len(self.state.players)} players")
        return self.state

    def select(self, player_id: Optional[str]) -> ClientState:
        self.state = with_selection(self.state, player_id)
        return self.state

    def add_player(self, name: str) -> Player:
        player = self.client.add_player(name)
        self.state = with_player_added(self.state, player)
        return player

    def delete_player(self, player_id: str) -> None:
        self.client.delete_player(player_id)
        self.state = with_player_removed(self.state, player_id)

    def add_session(
        self, player_id: str, date: datetime.date, duration: int, rpe: int, notes: str = "",
    ) -> Session:
        session = self.client.add_session(player_id, date, duration, rpe, notes)
        self.state = with_session_added(self.state, player_id, session)
        return session

    def import_players(self, document: dict[str, Any]) -> int:
        added = self.client.import_players(document)
        self.refresh()
        return added

    def clear_all(self) -> None:
        self.client.clear_data()
        self.refresh()

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def export_to_file(self, path: str | Path) -> Path:
        """Write the current server dataset as pretty-printed JSON."""
        target = Path(path)
        document = self.client.get_raw_data()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as e:
            raise TrackerAPIError(f"Cannot write export file {target.name}: {e}") from e
        logger.info(f"Exported {len(document.get('players', []))} players to {target}")
        return target

    def import_from_file(self, path: str | Path) -> int:
        """Import an exported file; returns the number of new players.

        Raises:
            TrackerAPIError: if the file is unreadable, not JSON, or has no
                ``players`` array (status ``None``), or the server rejects it.
        """
        source = Path(path)
        try:
            document = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise TrackerAPIError(f"Cannot read import file {source.name}: {e}") from e
        if not isinstance(document, dict) or not isinstance(document.get("players"), list):
            raise TrackerAPIError("Invalid import format: expected an object with a 'players' array")
        return self.import_players(document)

"""
Client-side dataset mirror.

:class:`ClientState` is an immutable snapshot of what a front end shows.
The ``with_*`` functions return a new state and never mutate their input,
so rendering code can hold on to a state without it changing underneath.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from typing import Optional

from app.schemas.dataset import DEFAULT_VERSION, Dataset
from app.schemas.player import Player
from app.schemas.session import Session


@dataclass(frozen=True)
class ClientState:
    players: tuple[Player, ...] = ()
    version: str = DEFAULT_VERSION
    updated_at: Optional[datetime.datetime] = None
    selected_player_id: Optional[str] = None

    def find_player(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def selected_player(self) -> Optional[Player]:
        return self.find_player(self.selected_player_id)


def _keep_valid_selection(state: ClientState) -> ClientState:
    """Drop the selection if its player no longer exists."""
    if state.selected_player_id is not None and state.selected_player is None:
        return replace(state, selected_player_id=None)
    return state


def with_dataset(state: ClientState, dataset: Dataset) -> ClientState:
    """Replace the mirror with a freshly fetched dataset."""
    return _keep_valid_selection(
        replace(
            state,
            players=tuple(p.model_copy(deep=True) for p in dataset.players),
            version=dataset.version,
            updated_at=dataset.updated_at,
        )
    )


def with_player_added(state: ClientState, player: Player) -> ClientState:
    return replace(state, players=state.players + (player,))


def with_player_removed(state: ClientState, player_id: str) -> ClientState:
    return _keep_valid_selection(
        replace(state, players=tuple(p for p in state.players if p.id != player_id))
    )


def with_session_added(state: ClientState, player_id: str, session: Session) -> ClientState:
    """Append the server-returned session to its player; unknown players are left alone."""
    players = tuple(
        p.model_copy(update={"sessions": [*p.sessions, session]}) if p.id == player_id else p
        for p in state.players
    )
    return replace(state, players=players)


def with_selection(state: ClientState, player_id: Optional[str]) -> ClientState:
    """Select a player; selecting an unknown id clears the selection."""
    if player_id is not None and state.find_player(player_id) is None:
        player_id = None
    return replace(state, selected_player_id=player_id)

"""
Abstract base class for training stores.

A store persists the logical dataset (players, each with a list of
sessions) in a concrete backend.  Every backend implements the same
contract and enforces the same invariants:

- player names are unique case-insensitively,
- deleting a player deletes its sessions,
- every stored session satisfies ``trainingLoad == duration * rpe``,
- every mutation refreshes the dataset's ``updatedAt``.

Validation shared by all backends (session fields, import filtering,
``PUT`` normalisation) happens here, before the backend hook is called.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Optional

from app.schemas.dataset import Dataset, DatasetReplace
from app.schemas.player import Player
from app.schemas.session import Session
from app.tracker.records import build_session, clean_name, iter_import_entries, normalize_dataset


class TrainingStore(ABC):
    """Abstract base class that every persistence backend must implement."""

    #: Short backend identifier, e.g. ``"sqlite"``.
    backend: str = ""

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def load_all(self) -> Dataset:
        """Return every player with its full session list.

        Raises:
            StoreUnavailable: if the store exists but cannot be read.
        """
        ...

    @abstractmethod
    def _write_dataset(self, dataset: Dataset) -> None:
        """Atomically overwrite the whole store with ``dataset``."""
        ...

    @abstractmethod
    def _insert_player(self, name: str) -> Player:
        ...

    @abstractmethod
    def delete_player(self, player_id: str) -> None:
        """Remove a player and all of its sessions.

        Raises:
            NotFound: if no player has ``player_id``.
        """
        ...

    @abstractmethod
    def _append_session(self, player_id: str, session: Session) -> Session:
        ...

    @abstractmethod
    def _merge(self, entries: Sequence[tuple[str, list[Session]]]) -> int:
        """Merge pre-validated ``(name, sessions)`` pairs; return players created."""
        ...

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every player and session, keeping the dataset version."""
        ...

    # ------------------------------------------------------------------
    # Validated entry points
    # ------------------------------------------------------------------

    def replace_all(self, payload: DatasetReplace) -> None:
        """Overwrite the store with a client-supplied dataset.

        Raises:
            InvalidInput: on duplicate ids or names.
        """
        self._write_dataset(normalize_dataset(payload))

    def insert_player(self, name: str) -> Player:
        """Create a player with no sessions.

        Raises:
            InvalidInput: if ``name`` is blank.
            DuplicatePlayer: if the name already exists (case-insensitive).
        """
        return self._insert_player(clean_name(name))

    def append_session(
        self, player_id: str, date: Any, duration: Any, rpe: Any, notes: Optional[str] = "",
    ) -> Session:
        """Store a session for a player, computing its training load.

        Raises:
            InvalidSession: if date, duration or RPE are invalid.
            NotFound: if the player does not exist.
        """
        session = build_session(date, duration, rpe, notes)
        return self._append_session(player_id, session)

    def merge_import(self, incoming: Any) -> int:
        """Merge imported players into the store.

        Returns:
            Number of newly created players.
        """
        return self._merge(list(iter_import_entries(incoming)))

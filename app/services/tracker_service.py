"""
Tracker service.

Translation boundary between the HTTP layer and the configured
:class:`~app.store.base.TrainingStore`: forwards validated requests and
maps store failures to HTTP status codes.  No business rules live here.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from fastapi import HTTPException, status
from loguru import logger

from app.core.exceptions import DuplicatePlayer, InvalidInput, NotFound, StoreUnavailable, TrackerError
from app.schemas.dataset import Dataset, DatasetReplace, ImportRequest, ImportResult
from app.schemas.player import Player, PlayerCreate
from app.schemas.session import Session, SessionCreate
from app.store.base import TrainingStore

T = TypeVar("T")

_STATUS_BY_ERROR: dict[type[TrackerError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicatePlayer: status.HTTP_409_CONFLICT,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    StoreUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: TrackerError) -> int:
    """HTTP status for a store error (most specific class wins)."""
    for cls in type(error).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class TrackerService:
    """Service for player and session requests."""

    def __init__(self, store: TrainingStore):
        self.store = store

    @contextmanager
    def _translate(self, action: str) -> Iterator[None]:
        try:
            yield
        except TrackerError as e:
            code = status_for(e)
            if code >= 500:
                logger.error(f"{action} failed: {e.message}")
            else:
                logger.info(f"{action} rejected ({code}): {e.message}")
            raise HTTPException(status_code=code, detail=e.message) from e

    def _call(self, action: str, fn: Callable[[], T]) -> T:
        with self._translate(action):
            return fn()

    def get_dataset(self) -> Dataset:
        return self._call("Load data", self.store.load_all)

    def replace_dataset(self, payload: DatasetReplace) -> None:
        self._call("Replace data", lambda: self.store.replace_all(payload))

    def clear(self) -> None:
        self._call("Clear data", self.store.clear_all)

    def add_player(self, data: PlayerCreate) -> Player:
        return self._call("Add player", lambda: self.store.insert_player(data.name))

    def delete_player(self, player_id: str) -> None:
        self._call("Delete player", lambda: self.store.delete_player(player_id))

    def add_session(self, player_id: str, data: SessionCreate) -> Session:
        return self._call(
            "Add session",
            lambda: self.store.append_session(player_id, data.date, data.duration, data.rpe, data.notes),
        )

    def import_players(self, data: ImportRequest) -> ImportResult:
        added = self._call("Import", lambda: self.store.merge_import(data.players))
        return ImportResult(added_players=added)

"""
JSON document training store.

The whole dataset lives in one JSON file with the same shape as the
``GET /data`` response.  Every mutation is a read-modify-write of the full
document; writes go to a temporary file in the target directory which is
then renamed over the document, so an interrupted write never leaves a
truncated file behind.

An in-process lock serialises read-modify-write cycles of this instance.
Separate processes writing the same file are not coordinated: the last
writer wins.
"""

import json
import threading
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from app.core.clock import utcnow
from app.core.config import settings
from app.core.exceptions import DuplicatePlayer, NotFound, StoreUnavailable
from app.schemas.dataset import Dataset
from app.schemas.player import Player
from app.schemas.session import Session
from app.store.base import TrainingStore
from app.tracker.records import name_key, new_player_id


class JsonTrainingStore(TrainingStore):
    """Store backed by a single JSON document."""

    backend = "json"

    def __init__(self, path: str | Path, default_version: str = settings.DEFAULT_DATASET_VERSION):
        self.path = Path(path)
        self.default_version = default_version
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def load_all(self) -> Dataset:
        """Read the document.

        A missing file means the store has never been written and yields an
        empty dataset.
        """
        if not self.path.exists():
            return Dataset(version=self.default_version)
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return Dataset.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.exception(f"Could not read {self.path}")
            raise StoreUnavailable(f"Could not read data file {self.path.name}") from e

    def _save(self, dataset: Dataset) -> None:
        dataset.updated_at = utcnow()
        payload = json.dumps(dataset.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False) + "\n"
        temp_path: Optional[Path] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp", delete=False, encoding="utf-8"
            ) as tmp:
                temp_path = Path(tmp.name)
                tmp.write(payload)
            temp_path.replace(self.path)
        except OSError as e:
            logger.exception(f"Could not write {self.path}")
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise StoreUnavailable(f"Could not write data file {self.path.name}") from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _write_dataset(self, dataset: Dataset) -> None:
        with self._lock:
            self._save(dataset)
        logger.info(f"Dataset replaced: {len(dataset.players)} players, version {dataset.version}")

    def _insert_player(self, name: str) -> Player:
        with self._lock:
            dataset = self.load_all()
            key = name_key(name)
            if any(name_key(p.name) == key for p in dataset.players):
                raise DuplicatePlayer("Player already exists")
            player = Player(id=new_player_id({p.id for p in dataset.players}), name=name, sessions=[])
            dataset.players.append(player)
            self._save(dataset)
        logger.info(f"Player added: {player.id} ({player.name})")
        return player

    def delete_player(self, player_id: str) -> None:
        with self._lock:
            dataset = self.load_all()
            remaining = [p for p in dataset.players if p.id != player_id]
            if len(remaining) == len(dataset.players):
                raise NotFound("Player not found")
            dataset.players = remaining
            self._save(dataset)
        logger.info(f"Player deleted: {player_id}")

    def _append_session(self, player_id: str, session: Session) -> Session:
        with self._lock:
            dataset = self.load_all()
            player = next((p for p in dataset.players if p.id == player_id), None)
            if player is None:
                raise NotFound("Player not found")
            player.sessions.append(session)
            self._save(dataset)
        logger.info(f"Session added for {player_id}: {session.date} load={session.training_load}")
        return session

    def _merge(self, entries: Sequence[tuple[str, list[Session]]]) -> int:
        added = 0
        with self._lock:
            dataset = self.load_all()
            by_key = {name_key(p.name): p for p in dataset.players}
            for name, incoming in entries:
                player = by_key.get(name_key(name))
                if player is None:
                    player = Player(id=new_player_id({p.id for p in dataset.players}), name=name, sessions=[])
                    dataset.players.append(player)
                    by_key[name_key(name)] = player
                    added += 1
                player.sessions.extend(incoming)
            self._save(dataset)
        logger.info(f"Import merged {len(entries)} players ({added} new)")
        return added

    def clear_all(self) -> None:
        with self._lock:
            dataset = self.load_all()
            removed = len(dataset.players)
            dataset.players = []
            self._save(dataset)
        logger.info(f"All data cleared ({removed} players)")

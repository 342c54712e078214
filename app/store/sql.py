"""
Relational training store.

Backed by the SQLite tables in :mod:`app.models`.  Every operation runs
in one transaction, so a failed import or overwrite leaves the previous
data untouched.
"""

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session as DbSession

from app.core.clock import as_utc
from app.core.config import settings
from app.core.exceptions import DuplicatePlayer, NotFound, StoreUnavailable
from app.db.init_db import init_db
from app.db.repositories import MetadataRepository, PlayerRepository, TrainingSessionRepository
from app.models.player import PlayerRecord
from app.models.training_session import TrainingSessionRecord
from app.schemas.dataset import Dataset
from app.schemas.player import Player
from app.schemas.session import Session
from app.store.base import TrainingStore
from app.tracker.records import name_key, new_player_id

T = TypeVar("T")

ID_ATTEMPTS = 5


class _IdCollision(StoreUnavailable):
    """A generated player id was taken by a concurrent writer."""


class SqlTrainingStore(TrainingStore):
    """Store backed by an embedded relational database."""

    backend = "sqlite"

    def __init__(self, engine: Engine, default_version: str = settings.DEFAULT_DATASET_VERSION):
        self.engine = engine
        self.default_version = default_version
        try:
            init_db(engine, default_version)
        except SQLAlchemyError as e:
            logger.exception("Database initialisation failed")
            raise StoreUnavailable(f"Database unavailable: {e}") from e

    @contextmanager
    def _transaction(self, action: str) -> Iterator[DbSession]:
        """Yield a session; commit on success, roll back on any error."""
        try:
            with DbSession(self.engine) as db:
                yield db
                db.commit()
        except IntegrityError as e:
            logger.warning(f"{action}: integrity error: {e.orig}")
            reason = str(e.orig)
            if "players.name_key" in reason:
                raise DuplicatePlayer("Player already exists") from e
            if "players.id" in reason:
                raise _IdCollision(reason) from e
            if "FOREIGN KEY" in reason:
                raise NotFound("Player not found") from e
            raise StoreUnavailable(f"Database error during {action}") from e
        except SQLAlchemyError as e:
            logger.exception(f"{action} failed")
            raise StoreUnavailable(f"Database error during {action}") from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_all(self) -> Dataset:
        with self._transaction("load") as db:
            players = PlayerRepository(db).get_all()
            sessions = TrainingSessionRepository(db).get_all_grouped()
            meta = MetadataRepository(db).get_or_create_version(self.default_version)
            return Dataset(
                players=[
                    Player(
                        id=p.id,
                        name=p.name,
                        sessions=[Session.model_validate(s) for s in sessions.get(p.id, [])],
                    )
                    for p in players
                ],
                version=meta.value or self.default_version,
                updated_at=as_utc(meta.updated_at),
            )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _write_dataset(self, dataset: Dataset) -> None:
        with self._transaction("replace") as db:
            players = PlayerRepository(db)
            sessions = TrainingSessionRepository(db)
            sessions.delete_all()
            players.delete_all()
            for player in dataset.players:
                players.create(PlayerRecord(id=player.id, name=player.name, name_key=name_key(player.name)))
                for session in player.sessions:
                    sessions.create(self._to_record(player.id, session))
            MetadataRepository(db).touch(self.default_version, dataset.version)
        logger.info(f"Dataset replaced: {len(dataset.players)} players, version {dataset.version}")

    def _with_fresh_ids(self, action: str, write: Callable[[set[str]], T]) -> T:
        """Run ``write`` and rerun it when a generated id was taken concurrently.

        ``write`` receives the ids tried so far and must add every id it
        generates to that set.
        """
        tried: set[str] = set()
        for attempt in range(1, ID_ATTEMPTS + 1):
            try:
                return write(tried)
            except _IdCollision as e:
                logger.info(f"{action}: player id collision ({e}), attempt {attempt}/{ID_ATTEMPTS}")
        raise StoreUnavailable(f"Could not allocate a player id during {action}")

    def _insert_player(self, name: str) -> Player:
        def write(tried: set[str]) -> Player:
            with self._transaction("insert player") as db:
                players = PlayerRepository(db)
                if players.get_by_name_key(name_key(name)):
                    raise DuplicatePlayer("Player already exists")
                player_id = new_player_id(players.get_all_ids() | tried)
                tried.add(player_id)
                record = players.create(PlayerRecord(id=player_id, name=name, name_key=name_key(name)))
                MetadataRepository(db).touch(self.default_version)
                return Player(id=record.id, name=record.name, sessions=[])

        player = self._with_fresh_ids("insert player", write)
        logger.info(f"Player added: {player.id} ({player.name})")
        return player

    def delete_player(self, player_id: str) -> None:
        with self._transaction("delete player") as db:
            players = PlayerRepository(db)
            record = players.get_by_id(player_id)
            if record is None:
                raise NotFound("Player not found")
            removed = TrainingSessionRepository(db).delete_by_player(player_id)
            players.delete(record)
            MetadataRepository(db).touch(self.default_version)
        logger.info(f"Player deleted: {player_id} ({removed} sessions)")

    def _append_session(self, player_id: str, session: Session) -> Session:
        with self._transaction("append session") as db:
            if PlayerRepository(db).get_by_id(player_id) is None:
                raise NotFound("Player not found")
            TrainingSessionRepository(db).create(self._to_record(player_id, session))
            MetadataRepository(db).touch(self.default_version)
        logger.info(f"Session added for {player_id}: {session.date} load={session.training_load}")
        return session

    def _merge(self, entries: Sequence[tuple[str, list[Session]]]) -> int:
        def write(tried: set[str]) -> int:
            added = 0
            with self._transaction("import") as db:
                players = PlayerRepository(db)
                sessions = TrainingSessionRepository(db)
                taken_ids = players.get_all_ids() | tried
                for name, incoming in entries:
                    record = players.get_by_name_key(name_key(name))
                    if record is None:
                        player_id = new_player_id(taken_ids)
                        taken_ids.add(player_id)
                        tried.add(player_id)
                        record = players.create(PlayerRecord(id=player_id, name=name, name_key=name_key(name)))
                        added += 1
                    for session in incoming:
                        sessions.create(self._to_record(record.id, session))
                MetadataRepository(db).touch(self.default_version)
            return added

        added = self._with_fresh_ids("import", write)
        logger.info(f"Import merged {len(entries)} players ({added} new)")
        return added

    def clear_all(self) -> None:
        with self._transaction("clear") as db:
            TrainingSessionRepository(db).delete_all()
            removed = PlayerRepository(db).delete_all()
            MetadataRepository(db).touch(self.default_version)
        logger.info(f"All data cleared ({removed} players)")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_record(player_id: str, session: Session) -> TrainingSessionRecord:
        return TrainingSessionRecord(
            player_id=player_id, date=session.date, duration=session.duration, rpe=session.rpe,
            training_load=session.training_load, notes=session.notes,
        )

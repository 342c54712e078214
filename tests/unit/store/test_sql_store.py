"""Tests specific to the relational store."""

import threading

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.exceptions import DuplicatePlayer
from app.db.repositories import PlayerRepository
from app.db.session import create_db_engine
from app.models import MetadataRecord, PlayerRecord, TrainingSessionRecord
from app.store import SqlTrainingStore, build_store


@pytest.fixture
def memory_store():
    engine = create_db_engine(":memory:", echo=False)
    yield SqlTrainingStore(engine)
    engine.dispose()


class TestSchema:
    def test_metadata_row_seeded(self, memory_store):
        with Session(memory_store.engine) as db:
            row = db.get(MetadataRecord, "version")
        assert row is not None
        assert row.value == "1.0"

    def test_training_load_column_stored(self, memory_store):
        player = memory_store.insert_player("Max")
        memory_store.append_session(player.id, "2024-01-10", 45, 3)
        with Session(memory_store.engine) as db:
            record = db.exec(select(TrainingSessionRecord)).one()
        assert record.training_load == 135
        assert record.player_id == player.id

    def test_name_key_column(self, memory_store):
        memory_store.insert_player("  Anna ")
        with Session(memory_store.engine) as db:
            record = db.exec(select(PlayerRecord)).one()
        assert record.name == "Anna"
        assert record.name_key == "anna"

    def test_unique_index_enforced(self, memory_store):
        memory_store.insert_player("Anna")
        with Session(memory_store.engine) as db:
            db.add(PlayerRecord(id="player_x", name="ANNA", name_key="anna"))
            with pytest.raises(IntegrityError):
                db.commit()

    def test_foreign_keys_cascade(self, memory_store):
        player = memory_store.insert_player("Max")
        memory_store.append_session(player.id, "2024-01-10", 60, 7)
        with Session(memory_store.engine) as db:
            db.delete(db.get(PlayerRecord, player.id))
            db.commit()
            assert db.exec(select(TrainingSessionRecord)).all() == []


class TestPersistence:
    def test_data_survives_new_engine(self, tmp_path):
        path = str(tmp_path / "tracker.sqlite")
        first = create_db_engine(path, echo=False)
        store = SqlTrainingStore(first)
        player = store.insert_player("Max")
        store.append_session(player.id, "2024-01-10", 60, 7)
        first.dispose()

        second = create_db_engine(path, echo=False)
        dataset = SqlTrainingStore(second).load_all()
        second.dispose()
        assert [p.name for p in dataset.players] == ["Max"]
        assert dataset.players[0].sessions[0].training_load == 420

    def test_sessions_newest_first(self, memory_store):
        player = memory_store.insert_player("Max")
        for day in ("2024-01-05", "2024-01-20", "2024-01-10"):
            memory_store.append_session(player.id, day, 30, 5)
        dates = [s.date.isoformat() for s in memory_store.load_all().players[0].sessions]
        assert dates == ["2024-01-20", "2024-01-10", "2024-01-05"]

    def test_players_ordered_by_name(self, memory_store):
        for name in ("Leo", "Anna", "Max"):
            memory_store.insert_player(name)
        assert [p.name for p in memory_store.load_all().players] == ["Anna", "Leo", "Max"]


class TestBuildStore:
    def test_sqlite_backend(self, tmp_path):
        store = build_store("sqlite", database_path=str(tmp_path / "db.sqlite"))
        assert isinstance(store, SqlTrainingStore)
        store.engine.dispose()

    def test_json_backend(self, tmp_path):
        store = build_store("json", data_file=str(tmp_path / "data.json"))
        assert store.backend == "json"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_store("mongo")


# ======================================================================
# Generated id collisions
# ======================================================================


FROZEN_EPOCH = 1700000000.0


@pytest.fixture
def file_store(tmp_path):
    engine = create_db_engine(str(tmp_path / "tracker.sqlite"), echo=False)
    yield SqlTrainingStore(engine)
    engine.dispose()


@pytest.fixture
def frozen_clock(monkeypatch):
    """Every generated id starts as ``player_1700000000000``."""
    monkeypatch.setattr("app.tracker.records.time.time", lambda: FROZEN_EPOCH)


class TestIdCollisions:
    def test_concurrent_inserts_with_same_timestamp(self, file_store, frozen_clock, monkeypatch):
        barrier = threading.Barrier(2, timeout=10)
        first_read = threading.local()
        read_ids = PlayerRepository.get_all_ids

        def get_all_ids_in_lockstep(self):
            ids = read_ids(self)
            if not getattr(first_read, "done", False):
                first_read.done = True
                barrier.wait()
            return ids

        monkeypatch.setattr(PlayerRepository, "get_all_ids", get_all_ids_in_lockstep)

        results = {}

        def insert(name):
            try:
                results[name] = file_store.insert_player(name).id
            except Exception as e:  # collected for the assertion below
                results[name] = e

        threads = [threading.Thread(target=insert, args=(name,)) for name in ("Anna", "Ben")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert all(isinstance(value, str) for value in results.values()), results
        assert len(set(results.values())) == 2
        assert sorted(p.name for p in file_store.load_all().players) == ["Anna", "Ben"]

    def test_insert_retries_taken_id(self, file_store, frozen_clock, monkeypatch):
        file_store.insert_player("Anna")
        calls = []
        read_ids = PlayerRepository.get_all_ids

        def stale_first_read(self):
            calls.append(1)
            return set() if len(calls) == 1 else read_ids(self)

        monkeypatch.setattr(PlayerRepository, "get_all_ids", stale_first_read)

        player = file_store.insert_player("Ben")
        assert player.id.startswith("player_1700000000000_")
        assert len(calls) == 2

    def test_import_retries_taken_id(self, file_store, frozen_clock, monkeypatch):
        file_store.insert_player("Anna")
        calls = []
        read_ids = PlayerRepository.get_all_ids

        def stale_first_read(self):
            calls.append(1)
            return set() if len(calls) == 1 else read_ids(self)

        monkeypatch.setattr(PlayerRepository, "get_all_ids", stale_first_read)

        added = file_store.merge_import(
            [{"name": "Ben", "sessions": [{"date": "2024-01-10", "duration": 30, "rpe": 5}]}]
        )
        assert added == 1
        ben = next(p for p in file_store.load_all().players if p.name == "Ben")
        assert len(ben.sessions) == 1

    def test_name_conflict_still_duplicate(self, file_store, frozen_clock):
        file_store.insert_player("Anna")
        with pytest.raises(DuplicatePlayer):
            file_store.insert_player("ANNA")

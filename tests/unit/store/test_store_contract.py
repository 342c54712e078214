"""Contract tests run against every store backend.

Both the relational and the JSON document store must behave identically;
the ``store`` fixture parametrises each test over both.
"""

import datetime

import pytest

from app.core.exceptions import DuplicatePlayer, InvalidInput, InvalidSession, NotFound
from app.schemas.dataset import DatasetReplace
from app.store.base import TrainingStore


def _add_session(store, player_id, day="2024-01-10", duration=60, rpe=7, notes=""):
    return store.append_session(player_id, day, duration, rpe, notes)


# ======================================================================
# load_all
# ======================================================================


class TestLoadAll:
    def test_fresh_store_is_empty(self, store):
        dataset = store.load_all()
        assert dataset.players == []
        assert dataset.version == "1.0"
        assert dataset.updated_at.tzinfo is not None

    def test_is_training_store(self, store):
        assert isinstance(store, TrainingStore)
        assert store.backend in ("sqlite", "json")

    def test_returns_players_with_sessions(self, store):
        player = store.insert_player("Max")
        _add_session(store, player.id, "2024-01-10", 60, 7)
        _add_session(store, player.id, "2024-01-12", 30, 4)
        dataset = store.load_all()
        assert [p.name for p in dataset.players] == ["Max"]
        assert sorted(s.training_load for s in dataset.players[0].sessions) == [120, 420]


# ======================================================================
# insert_player
# ======================================================================


class TestInsertPlayer:
    def test_creates_player_without_sessions(self, store):
        player = store.insert_player("Max")
        assert player.id.startswith("player_")
        assert player.name == "Max"
        assert player.sessions == []

    def test_duplicate_case_insensitive(self, store):
        store.insert_player("Anna")
        with pytest.raises(DuplicatePlayer):
            store.insert_player("anna")

    def test_blank_name(self, store):
        with pytest.raises(InvalidInput):
            store.insert_player("   ")

    def test_overlong_name(self, store):
        with pytest.raises(InvalidInput):
            store.insert_player("x" * 256)

    def test_ids_unique(self, store):
        ids = {store.insert_player(f"Player {i}").id for i in range(5)}
        assert len(ids) == 5

    def test_refreshes_updated_at(self, store):
        before = store.load_all().updated_at
        store.insert_player("Max")
        assert store.load_all().updated_at >= before


# ======================================================================
# delete_player
# ======================================================================


class TestDeletePlayer:
    def test_cascades_to_sessions(self, store):
        max_ = store.insert_player("Max")
        anna = store.insert_player("Anna")
        _add_session(store, max_.id)
        _add_session(store, anna.id, "2024-01-11", 45, 5)

        store.delete_player(max_.id)

        dataset = store.load_all()
        assert [p.id for p in dataset.players] == [anna.id]
        assert [s.duration for p in dataset.players for s in p.sessions] == [45]

    def test_unknown_id(self, store):
        with pytest.raises(NotFound):
            store.delete_player("player_missing")

    def test_name_reusable_after_delete(self, store):
        player = store.insert_player("Max")
        store.delete_player(player.id)
        assert store.insert_player("max").name == "max"


# ======================================================================
# append_session
# ======================================================================


class TestAppendSession:
    def test_computes_training_load(self, store):
        player = store.insert_player("Max")
        session = _add_session(store, player.id, "2024-01-10", 60, 7, "Sprint")
        assert session.date == datetime.date(2024, 1, 10)
        assert session.training_load == 420
        assert session.notes == "Sprint"

    @pytest.mark.parametrize("duration, rpe", [(1, 1), (45, 3), (90, 10), (999, 6)])
    def test_load_invariant_persisted(self, store, duration, rpe):
        player = store.insert_player("Max")
        _add_session(store, player.id, duration=duration, rpe=rpe)
        stored = store.load_all().players[0].sessions[0]
        assert stored.training_load == duration * rpe

    def test_unknown_player(self, store):
        with pytest.raises(NotFound):
            _add_session(store, "player_missing")

    @pytest.mark.parametrize(
        "day, duration, rpe",
        [(None, 60, 7), ("2024-01-10", 0, 7), ("2024-01-10", 60, 11), ("2024-01-10", 60, None)],
    )
    def test_invalid_fields(self, store, day, duration, rpe):
        player = store.insert_player("Max")
        with pytest.raises(InvalidSession):
            store.append_session(player.id, day, duration, rpe)
        assert store.load_all().players[0].sessions == []

    def test_invalid_fields_checked_before_player(self, store):
        with pytest.raises(InvalidSession):
            store.append_session("player_missing", None, 60, 7)


# ======================================================================
# merge_import
# ======================================================================


class TestMergeImport:
    def test_existing_player_gets_valid_sessions_only(self, store):
        existing = store.insert_player("Max")
        added = store.merge_import(
            [
                {
                    "name": "MAX",
                    "sessions": [
                        {"date": "2024-02-01", "duration": 50, "rpe": 6, "trainingLoad": 1},
                        {"date": "2024-02-02", "duration": 50},
                    ],
                }
            ]
        )
        assert added == 0
        dataset = store.load_all()
        assert [p.id for p in dataset.players] == [existing.id]
        assert [(s.date.isoformat(), s.training_load) for s in dataset.players[0].sessions] == [("2024-02-01", 300)]

    def test_new_player_created(self, store):
        added = store.merge_import(
            [
                {
                    "name": "Anna",
                    "sessions": [
                        {"date": "2024-02-01", "duration": 30, "rpe": 5, "notes": "Easy"},
                        {"duration": 30, "rpe": 5},
                        {"date": "2024-02-03", "rpe": 5},
                    ],
                }
            ]
        )
        assert added == 1
        dataset = store.load_all()
        assert [p.name for p in dataset.players] == ["Anna"]
        assert [s.notes for s in dataset.players[0].sessions] == ["Easy"]

    def test_unnamed_entries_skipped(self, store):
        assert store.merge_import([{"sessions": []}, {"name": ""}, "junk", None]) == 0
        assert store.load_all().players == []

    def test_same_name_twice_in_one_import(self, store):
        added = store.merge_import(
            [
                {"name": "Leo", "sessions": [{"date": "2024-02-01", "duration": 10, "rpe": 1}]},
                {"name": "leo", "sessions": [{"date": "2024-02-02", "duration": 20, "rpe": 1}]},
            ]
        )
        assert added == 1
        players = store.load_all().players
        assert len(players) == 1
        assert len(players[0].sessions) == 2

    def test_round_trip_of_export(self, store):
        player = store.insert_player("Max")
        _add_session(store, player.id)
        exported = store.load_all().model_dump(mode="json", by_alias=True)

        assert store.merge_import(exported["players"]) == 0
        assert len(store.load_all().players[0].sessions) == 2


# ======================================================================
# replace_all / clear_all
# ======================================================================


class TestReplaceAll:
    def test_overwrites_everything(self, store):
        store.insert_player("Old")
        store.replace_all(
            DatasetReplace.model_validate(
                {
                    "players": [
                        {"id": "player_1", "name": "Max",
                         "sessions": [{"date": "2024-01-10", "duration": 60, "rpe": 7, "trainingLoad": 5}]},
                        {"name": "Anna"},
                    ],
                    "version": "2.0",
                }
            )
        )
        dataset = store.load_all()
        assert dataset.version == "2.0"
        assert sorted(p.name for p in dataset.players) == ["Anna", "Max"]
        max_ = next(p for p in dataset.players if p.id == "player_1")
        assert max_.sessions[0].training_load == 420

    def test_duplicate_names_rejected_and_store_untouched(self, store):
        store.insert_player("Old")
        payload = DatasetReplace.model_validate({"players": [{"name": "A"}, {"name": "a"}]})
        with pytest.raises(InvalidInput):
            store.replace_all(payload)
        assert [p.name for p in store.load_all().players] == ["Old"]

    def test_replaced_names_still_unique(self, store):
        store.replace_all(DatasetReplace.model_validate({"players": [{"name": "Max"}]}))
        with pytest.raises(DuplicatePlayer):
            store.insert_player("MAX")


class TestClearAll:
    def test_removes_everything_keeps_version(self, store):
        store.replace_all(DatasetReplace.model_validate({"players": [{"name": "Max"}], "version": "3.1"}))
        before = store.load_all().updated_at
        store.clear_all()
        dataset = store.load_all()
        assert dataset.players == []
        assert dataset.version == "3.1"
        assert dataset.updated_at >= before

    def test_clear_empty_store(self, store):
        store.clear_all()
        assert store.load_all().version == "1.0"

"""Tests for the dashboard view models."""

import datetime

import pytest

from app.client.state import ClientState, with_selection
from app.client.views import DESKTOP, TABLET, render_dashboard, sort_recent
from app.schemas.player import Player
from app.schemas.session import Session


def _state(session_count: int) -> ClientState:
    start = datetime.date(2024, 1, 1)
    sessions = [
        Session(date=start + datetime.timedelta(days=i), duration=30, rpe=(i % 10) + 1)
        for i in range(session_count)
    ]
    return ClientState(players=(Player(id="p1", name="Max", sessions=sessions), Player(id="p2", name="Anna")))


def test_desktop_and_tablet_limits():
    state = _state(30)
    assert len(render_dashboard(state, DESKTOP).recent) == 20
    assert len(render_dashboard(state, TABLET).recent) == 10


def test_overview_counts_everything():
    view = render_dashboard(_state(30))
    assert view.overview.player_count == 2
    assert view.overview.session_count == 30


def test_no_selection():
    view = render_dashboard(_state(3))
    assert view.selected is None
    assert view.trend == []


def test_selected_player_trend():
    view = render_dashboard(with_selection(_state(20), "p1"))
    assert view.selected.player_name == "Max"
    assert view.selected.session_count == 20
    assert len(view.trend) == 15
    assert view.trend[-1].label == "20.01.2024"


def test_empty_state():
    view = render_dashboard(ClientState())
    assert view.overview.avg_load == 0
    assert view.recent == []


def _rows():
    players = (
        Player(id="p1", name="max", sessions=[
            Session(date=datetime.date(2024, 1, 3), duration=60, rpe=7, notes="b"),
            Session(date=datetime.date(2024, 1, 1), duration=90, rpe=4, notes="A"),
        ]),
        Player(id="p2", name="Anna", sessions=[Session(date=datetime.date(2024, 1, 2), duration=30, rpe=9)]),
    )
    return render_dashboard(ClientState(players=players)).recent


@pytest.mark.parametrize(
    "column, expected",
    [
        ("date", [1, 2, 3]),
        ("duration", [2, 3, 1]),
        ("rpe", [1, 3, 2]),
        ("load", [2, 1, 3]),
    ],
)
def test_sort_recent_ascending(column, expected):
    assert [r.session.date.day for r in sort_recent(_rows(), column)] == expected


def test_sort_recent_descending():
    rows = sort_recent(_rows(), "load", ascending=False)
    assert [r.session.training_load for r in rows] == [420, 360, 270]


def test_sort_recent_by_player_ignores_case():
    assert [r.player_name for r in sort_recent(_rows(), "player")] == ["Anna", "max", "max"]


def test_sort_recent_by_notes():
    assert [r.session.notes for r in sort_recent(_rows(), "notes")] == ["", "A", "b"]


def test_sort_recent_ties_keep_order():
    rows = _rows()
    by_player = sort_recent(rows, "player")
    assert [r.session.date for r in by_player[1:]] == [r.session.date for r in rows if r.player_id == "p1"]


def test_sort_recent_unknown_column():
    with pytest.raises(ValueError):
        sort_recent(_rows(), "weather")

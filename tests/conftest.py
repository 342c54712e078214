"""Shared fixtures: both store backends, and the API wired to either of them."""

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_store
from app.client.api import TrackerClient
from app.db.session import create_db_engine
from app.main import app
from app.store import JsonTrainingStore, SqlTrainingStore

_STORE_FIXTURES = {"sqlite": "sql_store", "json": "json_store"}


@pytest.fixture
def sql_store(tmp_path):
    engine = create_db_engine(str(tmp_path / "tracker.sqlite"), echo=False)
    yield SqlTrainingStore(engine)
    engine.dispose()


@pytest.fixture
def json_store(tmp_path):
    return JsonTrainingStore(tmp_path / "data.json")


@pytest.fixture(params=list(_STORE_FIXTURES))
def store(request):
    """Run the test once per backend."""
    return request.getfixturevalue(_STORE_FIXTURES[request.param])


@pytest.fixture
def api(store):
    """TestClient against the app, backed by ``store``."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def tracker_client(api):
    return TrackerClient(http=api)

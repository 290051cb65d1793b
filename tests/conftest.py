"""Shared fixtures: a throwaway SQLite database and clients bound to the app."""

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="calendar-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir}/test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["FRONTEND_DIST"] = os.path.join(_tmp_dir, "no-dist")
os.environ["WEEK_STARTS_ON"] = "6"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import calendar_backend.models  # noqa: E402,F401
from calendar_backend.client import ApiClient, CalendarStore  # noqa: E402
from calendar_backend.database import Base, engine  # noqa: E402
from calendar_backend.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def api(client):
    return ApiClient(base_url="http://testserver/api", http=client)


@pytest.fixture
def store(api):
    return CalendarStore(api)


STANDUP = {
    "title": "Standup",
    "category": "work",
    "date": "2024-06-03",
    "startTime": "2024-06-03T09:00",
    "endTime": "2024-06-03T09:15",
}


@pytest.fixture
def standup(client):
    resp = client.post("/api/events", json=STANDUP)
    assert resp.status_code == 201
    return resp.json()["data"]


@pytest.fixture
def goal(client):
    resp = client.post("/api/goals", json={"title": "Fitness"})
    assert resp.status_code == 201
    return resp.json()["data"]

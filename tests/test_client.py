"""Tests for the HTTP client, its offline fallback, and the client store."""

from datetime import date

import httpx
import pytest

from calendar_backend import keepalive
from calendar_backend.client import ApiClient, ApiError, CalendarStore, ResponseCache
from calendar_backend.services.gesture import InteractionController
from calendar_backend.services.slot_grid import SlotRef

from tests.conftest import STANDUP


class FlakyBackend:
    """MockTransport handler that can be switched off to simulate a dead server."""

    def __init__(self):
        self.up = True
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.up:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(200, json={"success": True, "count": 1, "data": [{"_id": 1, **STANDUP}]})


@pytest.fixture
def backend():
    return FlakyBackend()


@pytest.fixture
def flaky_api(backend):
    return ApiClient(base_url="http://calendar.test/api", http=httpx.Client(transport=httpx.MockTransport(backend)))


class TestOfflineMode:
    def test_unreachable_api_returns_empty_list(self, backend, flaky_api):
        backend.up = False
        resp = flaky_api.get_events("2024-06-02", "2024-06-08")

        assert resp == {"success": True, "count": 0, "data": [], "offline": True}
        assert flaky_api.online is False
        assert flaky_api.last_error

    def test_cached_read_is_served_when_offline(self, backend, flaky_api):
        live = flaky_api.get_events("2024-06-02", "2024-06-08")
        assert "offline" not in live

        backend.up = False
        resp = flaky_api.get_events("2024-06-02", "2024-06-08")

        assert resp["offline"] is True
        assert resp["data"] == live["data"]

    def test_cache_is_keyed_by_query(self, backend, flaky_api):
        flaky_api.get_events("2024-06-02", "2024-06-08")
        backend.up = False
        assert flaky_api.get_events("2024-06-09", "2024-06-15")["data"] == []

    def test_stale_cache_is_not_served(self, backend):
        now = [1000.0]
        api = ApiClient(
            base_url="http://calendar.test/api",
            http=httpx.Client(transport=httpx.MockTransport(backend)),
            cache=ResponseCache(ttl_seconds=60, clock=lambda: now[0]),
        )
        api.get_events("2024-06-02", "2024-06-08")

        backend.up = False
        now[0] += 120

        assert api.get_events("2024-06-02", "2024-06-08")["data"] == []

    def test_offline_create_gets_temporary_id(self, backend, flaky_api):
        backend.up = False
        resp = flaky_api.create_event(STANDUP)

        assert resp["offline"] is True
        assert resp["data"]["_id"].startswith("temp-")
        assert resp["data"]["title"] == "Standup"

    def test_online_again_after_success(self, backend, flaky_api):
        backend.up = False
        flaky_api.get_goals()
        backend.up = True
        flaky_api.get_goals()
        assert flaky_api.online is True
        assert flaky_api.last_error is None

    def test_requests_use_absolute_urls(self, backend, flaky_api):
        flaky_api.get_events("2024-06-02", "2024-06-08")
        url = backend.requests[0].url
        assert url.host == "calendar.test"
        assert url.path == "/api/events"
        assert url.params["startDate"] == "2024-06-02"

    def test_offline_store_keeps_working(self, backend, flaky_api):
        store = CalendarStore(flaky_api)
        store.fetch_events()
        backend.up = False

        updated = store.update_event(1, {"title": "Daily standup"})

        assert store.online is False
        assert store.offline_reason
        assert store.error is None
        assert updated["title"] == "Daily standup"
        assert updated["startTime"] == STANDUP["startTime"]


class TestHttpErrors:
    def test_error_status_raises(self, api):
        with pytest.raises(ApiError) as excinfo:
            api.update_event(999, {"title": "Nope"})
        assert excinfo.value.status_code == 404
        assert excinfo.value.error == "Event not found"
        assert api.online is True

    def test_store_records_error(self, store):
        assert store.update_event(999, {"title": "Nope"}) is None
        assert store.error == "Event not found"
        assert store.is_loading is False

    def test_validation_errors_come_back_as_list(self, store):
        assert store.create_event({**STANDUP, "endTime": "2024-06-03T08:00"}) is None
        assert isinstance(store.error, list)


class TestStore:
    def test_fetch_and_create_events(self, store, standup):
        events = store.fetch_events("2024-06-02", "2024-06-08")
        assert [e["title"] for e in events] == ["Standup"]

        created = store.create_event({**STANDUP, "title": "Review", "startTime": "2024-06-04T10:00", "endTime": "2024-06-04T11:00"})
        assert created["_id"]
        assert len(store.events) == 2

    def test_delete_goal_drops_cached_tasks(self, store):
        goal = store.create_goal({"title": "Fitness", "color": "#10B981"})
        store.create_task({"title": "Run 5k", "goalId": goal["_id"]})
        store.fetch_tasks()
        assert len(store.tasks) == 1

        assert store.delete_goal(goal["_id"])
        assert store.goals == []
        assert store.tasks == []

    def test_toggle_task(self, store, goal):
        task = store.create_task({"title": "Stretch", "goalId": goal["_id"]})
        assert store.toggle_task(task["_id"])["completed"] is True
        assert store.find_task(task["_id"])["completed"] is True


class TestCalendarFlows:
    """Drag, resize and task conversion driven through the real API."""

    def test_drag_persists_new_time(self, store, client, standup):
        store.fetch_events("2024-06-02", "2024-06-08")
        controller = InteractionController(store)

        controller.press_event(standup["_id"])
        controller.release(SlotRef("week", date(2024, 6, 5), 14, 30))

        saved = client.get("/api/events", params={"startDate": "2024-06-05", "endDate": "2024-06-05"}).json()["data"]
        assert len(saved) == 1
        assert saved[0]["startTime"].startswith("2024-06-05T14:30")
        assert saved[0]["endTime"].startswith("2024-06-05T14:45")

    def test_resize_persists_end_time_only(self, store, client, standup):
        store.fetch_events("2024-06-02", "2024-06-08")
        controller = InteractionController(store)

        controller.press_resize_handle(standup["_id"], y=0)
        controller.pointer_move(28)
        controller.release()

        saved = client.get("/api/events", params={"startDate": "2024-06-03", "endDate": "2024-06-03"}).json()["data"][0]
        assert saved["startTime"].startswith("2024-06-03T09:00")
        assert saved["endTime"].startswith("2024-06-03T09:40")
        assert saved["duration"] == 40

    def test_task_becomes_event_and_is_completed(self, store, client):
        goal = store.create_goal({"title": "Fitness", "color": "#10B981"})
        store.create_task({"title": "Run 5k", "goalId": goal["_id"]})
        task = store.fetch_tasks()[0]
        controller = InteractionController(store)

        controller.press_task(task)
        draft = controller.release(SlotRef("day", date(2024, 6, 5), 7, 0))
        created = controller.confirm_draft(draft)

        assert created["title"] == "Run 5k"
        assert created["category"] == "exercise"
        assert client.get(f"/api/tasks/{task['_id']}").json()["data"]["completed"] is True


class TestKeepalive:
    def test_ping_reports_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"status": "ok", "databaseConnected": True}))
        with httpx.Client(transport=transport) as http:
            assert keepalive.ping_once(http, "http://calendar.test", "/api/health") == 200

    def test_ping_failure_returns_none(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(refuse)) as http:
            assert keepalive.ping_once(http, "http://calendar.test") is None

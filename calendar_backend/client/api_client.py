"""
api_client.py — HTTP client for the calendar API
Uses httpx with a request timeout. Reads are cached; when the API cannot be
reached (timeout, DNS, connection refused) the client switches to offline
mode and answers from the cache or with placeholder data instead of raising.
Every placeholder response carries `offline: True`.
"""

import logging
import time

import httpx

from calendar_backend.config import API_TIMEOUT_SECONDS, API_URL
from calendar_backend.client.response_cache import ResponseCache

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, error):
        self.status_code = status_code
        self.error = error
        super().__init__(f"{status_code}: {error}")


class ApiClient:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        http: httpx.Client | None = None,
        cache: ResponseCache | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.http = http or httpx.Client(timeout=timeout)
        self.cache = cache if cache is not None else ResponseCache()
        self.online = True
        self.last_error: str | None = None

    def close(self):
        self.http.close()

    # ------------------------------------------------------------------
    def _mark_online(self):
        if not self.online:
            logger.info("API reachable again, leaving offline mode")
        self.online = True
        self.last_error = None

    def _mark_offline(self, method: str, path: str, exc: Exception):
        if self.online:
            logger.warning(f"API unreachable ({method} {path}): {exc!r}; switching to offline mode")
        self.online = False
        self.last_error = str(exc) or exc.__class__.__name__

    def _request(self, method: str, path: str, params: dict | None = None, json: dict | None = None, fallback=None) -> dict:
        try:
            resp = self.http.request(method, f"{self.base_url}{path}", params=params, json=json)
        except httpx.TransportError as e:
            self._mark_offline(method, path, e)
            return {**fallback(), "offline": True}

        self._mark_online()
        try:
            body = resp.json()
        except ValueError:
            body = {"success": False, "error": resp.text}
        if resp.is_error:
            raise ApiError(resp.status_code, body.get("error", resp.reason_phrase))
        if method == "GET":
            self.cache.set(method, path, params, body)
        return body

    def _cached_read(self, path: str, params: dict | None = None):
        def fallback():
            cached = self.cache.get("GET", path, params)
            if cached is not None:
                return cached
            return {"success": True, "count": 0, "data": []}
        return fallback

    @staticmethod
    def _synthetic(payload: dict | None, record_id=None):
        def fallback():
            return {
                "success": True,
                "data": {"_id": record_id or f"temp-{int(time.time() * 1000)}", **(payload or {})},
            }
        return fallback

    @staticmethod
    def _empty():
        return {"success": True, "data": {}}

    # ------------------------------------------------------------------
    # Events

    def get_events(self, start_date: str | None = None, end_date: str | None = None) -> dict:
        params = {"startDate": start_date, "endDate": end_date} if start_date and end_date else None
        return self._request("GET", "/events", params=params, fallback=self._cached_read("/events", params))

    def create_event(self, payload: dict) -> dict:
        return self._request("POST", "/events", json=payload, fallback=self._synthetic(payload))

    def update_event(self, event_id, payload: dict) -> dict:
        return self._request("PUT", f"/events/{event_id}", json=payload, fallback=self._synthetic(payload, event_id))

    def delete_event(self, event_id) -> dict:
        return self._request("DELETE", f"/events/{event_id}", fallback=self._empty)

    # ------------------------------------------------------------------
    # Goals

    def get_goals(self) -> dict:
        return self._request("GET", "/goals", fallback=self._cached_read("/goals"))

    def get_goal(self, goal_id) -> dict:
        path = f"/goals/{goal_id}"
        return self._request("GET", path, fallback=lambda: self.cache.get("GET", path, None) or {"success": True, "data": None})

    def create_goal(self, payload: dict) -> dict:
        return self._request("POST", "/goals", json=payload, fallback=self._synthetic(payload))

    def update_goal(self, goal_id, payload: dict) -> dict:
        return self._request("PUT", f"/goals/{goal_id}", json=payload, fallback=self._synthetic(payload, goal_id))

    def delete_goal(self, goal_id) -> dict:
        return self._request("DELETE", f"/goals/{goal_id}", fallback=self._empty)

    def get_goal_tasks(self, goal_id) -> dict:
        path = f"/goals/{goal_id}/tasks"
        return self._request("GET", path, fallback=self._cached_read(path))

    # ------------------------------------------------------------------
    # Tasks

    def get_tasks(self, completed: bool | None = None, goal_id=None) -> dict:
        params = {}
        if completed is not None:
            params["completed"] = "true" if completed else "false"
        if goal_id is not None:
            params["goalId"] = goal_id
        params = params or None
        return self._request("GET", "/tasks", params=params, fallback=self._cached_read("/tasks", params))

    def create_task(self, payload: dict) -> dict:
        return self._request("POST", "/tasks", json=payload, fallback=self._synthetic(payload))

    def update_task(self, task_id, payload: dict) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=payload, fallback=self._synthetic(payload, task_id))

    def toggle_task(self, task_id) -> dict:
        return self._request("PATCH", f"/tasks/{task_id}/toggle", fallback=self._synthetic(None, task_id))

    def delete_task(self, task_id) -> dict:
        return self._request("DELETE", f"/tasks/{task_id}", fallback=self._empty)

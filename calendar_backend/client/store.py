"""
store.py — Client-side state for the calendar view
Caches fetched events, goals and tasks and mediates every API call, keeping
`is_loading`, the last `error`, and the client's online/offline state.
"""

import logging

from calendar_backend.client.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def _same_id(a, b) -> bool:
    return a is not None and b is not None and str(a) == str(b)


class CalendarStore:
    def __init__(self, api: ApiClient):
        self.api = api
        self.events: list[dict] = []
        self.goals: list[dict] = []
        self.tasks: list[dict] = []
        self.is_loading = False
        self.error = None

    @property
    def online(self) -> bool:
        return self.api.online

    @property
    def offline_reason(self) -> str | None:
        return None if self.api.online else self.api.last_error

    # ------------------------------------------------------------------
    def _call(self, fn, *args):
        """Run one API call; HTTP errors are recorded in `error` and yield None."""
        self.is_loading = True
        self.error = None
        try:
            return fn(*args)
        except ApiError as e:
            logger.warning(f"{fn.__name__} failed: {e}")
            self.error = e.error
            return None
        finally:
            self.is_loading = False

    @staticmethod
    def _replace(items: list[dict], record: dict) -> None:
        for i, item in enumerate(items):
            if _same_id(item.get("_id"), record.get("_id")):
                items[i] = record
                return

    # ------------------------------------------------------------------
    # Events

    def find_event(self, event_id) -> dict | None:
        return next((e for e in self.events if _same_id(e.get("_id"), event_id)), None)

    def fetch_events(self, start_date=None, end_date=None) -> list[dict] | None:
        resp = self._call(self.api.get_events, start_date, end_date)
        if resp is None:
            return None
        self.events = list(resp.get("data") or [])
        return self.events

    def create_event(self, payload: dict) -> dict | None:
        resp = self._call(self.api.create_event, payload)
        if resp is None:
            return None
        event = resp["data"]
        self.events.append(event)
        return event

    def update_event(self, event_id, payload: dict) -> dict | None:
        resp = self._call(self.api.update_event, event_id, payload)
        if resp is None:
            return None
        event = resp["data"]
        if resp.get("offline"):
            # the placeholder only echoes the changed fields
            event = {**(self.find_event(event_id) or {}), **event}
        self._replace(self.events, event)
        return event

    def delete_event(self, event_id) -> bool:
        if self._call(self.api.delete_event, event_id) is None:
            return False
        self.events = [e for e in self.events if not _same_id(e.get("_id"), event_id)]
        return True

    # ------------------------------------------------------------------
    # Goals

    def fetch_goals(self) -> list[dict] | None:
        resp = self._call(self.api.get_goals)
        if resp is None:
            return None
        self.goals = list(resp.get("data") or [])
        return self.goals

    def create_goal(self, payload: dict) -> dict | None:
        resp = self._call(self.api.create_goal, payload)
        if resp is None:
            return None
        goal = resp["data"]
        self.goals.insert(0, goal)
        return goal

    def update_goal(self, goal_id, payload: dict) -> dict | None:
        resp = self._call(self.api.update_goal, goal_id, payload)
        if resp is None:
            return None
        goal = resp["data"]
        self._replace(self.goals, goal)
        return goal

    def delete_goal(self, goal_id) -> bool:
        """Deleting a goal also drops its cached tasks."""
        if self._call(self.api.delete_goal, goal_id) is None:
            return False
        self.goals = [g for g in self.goals if not _same_id(g.get("_id"), goal_id)]
        self.tasks = [t for t in self.tasks if not _same_id(t.get("goalId"), goal_id)]
        return True

    def fetch_goal_tasks(self, goal_id) -> list[dict] | None:
        resp = self._call(self.api.get_goal_tasks, goal_id)
        if resp is None:
            return None
        tasks = list(resp.get("data") or [])
        self.tasks = [t for t in self.tasks if not _same_id(t.get("goalId"), goal_id)] + tasks
        return tasks

    # ------------------------------------------------------------------
    # Tasks

    def find_task(self, task_id) -> dict | None:
        return next((t for t in self.tasks if _same_id(t.get("_id"), task_id)), None)

    def fetch_tasks(self, completed: bool | None = None, goal_id=None) -> list[dict] | None:
        resp = self._call(self.api.get_tasks, completed, goal_id)
        if resp is None:
            return None
        self.tasks = list(resp.get("data") or [])
        return self.tasks

    def create_task(self, payload: dict) -> dict | None:
        resp = self._call(self.api.create_task, payload)
        if resp is None:
            return None
        task = resp["data"]
        self.tasks.insert(0, task)
        return task

    def update_task(self, task_id, payload: dict) -> dict | None:
        resp = self._call(self.api.update_task, task_id, payload)
        if resp is None:
            return None
        task = resp["data"]
        if resp.get("offline"):
            task = {**(self.find_task(task_id) or {}), **task}
        self._replace(self.tasks, task)
        return task

    def complete_task(self, task_id) -> dict | None:
        return self.update_task(task_id, {"completed": True})

    def toggle_task(self, task_id) -> dict | None:
        resp = self._call(self.api.toggle_task, task_id)
        if resp is None:
            return None
        task = resp["data"]
        if resp.get("offline"):
            cached = self.find_task(task_id) or {"_id": task_id, "completed": False}
            task = {**cached, "completed": not cached.get("completed", False)}
        self._replace(self.tasks, task)
        return task

    def delete_task(self, task_id) -> bool:
        if self._call(self.api.delete_task, task_id) is None:
            return False
        self.tasks = [t for t in self.tasks if not _same_id(t.get("_id"), task_id)]
        return True

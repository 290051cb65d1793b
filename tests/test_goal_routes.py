"""Tests for the /api/goals endpoints, including the task cascade."""


def _add_task(client, goal_id, title):
    resp = client.post("/api/tasks", json={"title": title, "goalId": goal_id})
    assert resp.status_code == 201
    return resp.json()["data"]


class TestGoals:
    def test_create_defaults_to_blue(self, client):
        resp = client.post("/api/goals", json={"title": "Fitness"})
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["title"] == "Fitness"
        assert data["color"] == "#3B82F6"

    def test_missing_title_is_rejected(self, client):
        resp = client.post("/api/goals", json={"color": "#10B981"})
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_list_newest_first(self, client):
        client.post("/api/goals", json={"title": "First"})
        client.post("/api/goals", json={"title": "Second"})
        body = client.get("/api/goals").json()
        assert body["count"] == 2
        assert [g["title"] for g in body["data"]] == ["Second", "First"]

    def test_get_update_and_404(self, client, goal):
        assert client.get(f"/api/goals/{goal['_id']}").json()["data"]["title"] == "Fitness"
        resp = client.put(f"/api/goals/{goal['_id']}", json={"color": "#EF4444"})
        assert resp.status_code == 200
        assert resp.json()["data"]["color"] == "#EF4444"
        assert client.get("/api/goals/999").status_code == 404
        assert client.put("/api/goals/999", json={"title": "x"}).status_code == 404

    def test_update_with_blank_title_is_rejected(self, client, goal):
        resp = client.put(f"/api/goals/{goal['_id']}", json={"title": " "})
        assert resp.status_code == 400


class TestGoalCascade:
    def test_deleting_goal_removes_its_tasks(self, client, goal):
        _add_task(client, goal["_id"], "Run 5k")
        _add_task(client, goal["_id"], "Stretch")

        resp = client.delete(f"/api/goals/{goal['_id']}")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": {}}

        assert client.get("/api/tasks").json()["data"] == []
        assert client.get(f"/api/goals/{goal['_id']}/tasks").json()["count"] == 0
        assert client.get(f"/api/goals/{goal['_id']}").status_code == 404

    def test_other_goals_tasks_survive(self, client, goal):
        other = client.post("/api/goals", json={"title": "Reading"}).json()["data"]
        _add_task(client, goal["_id"], "Run 5k")
        kept = _add_task(client, other["_id"], "Finish novel")

        client.delete(f"/api/goals/{goal['_id']}")

        remaining = client.get("/api/tasks").json()["data"]
        assert [t["_id"] for t in remaining] == [kept["_id"]]

    def test_delete_unknown_goal_is_404(self, client):
        assert client.delete("/api/goals/42").status_code == 404

    def test_goal_tasks_listing(self, client, goal):
        _add_task(client, goal["_id"], "Run 5k")
        _add_task(client, goal["_id"], "Stretch")
        body = client.get(f"/api/goals/{goal['_id']}/tasks").json()
        assert body["count"] == 2
        assert [t["title"] for t in body["data"]] == ["Stretch", "Run 5k"]

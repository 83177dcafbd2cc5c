from unittest.mock import patch

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from grow_app.core.main import app, container
from grow_app.growth.store import GrowthStore

client = TestClient(app)
store = GrowthStore()


def setup_module(module):
    container.store.override(providers.Object(store))


def teardown_module(module):
    container.store.reset_override()


@pytest.fixture(autouse=True)
def clean_store():
    store.reset()
    yield
    store.reset()


def test_root_message():
    response = client.get("/")
    assert response.status_code == 200
    assert "Welcome" in response.json()["message"]


def test_habit_lifecycle():
    response = client.post("/habits", json={"title": "Meditate"})
    assert response.status_code == 201
    habit = response.json()
    assert habit["streak"] == 0 and habit["completed"] is False

    response = client.post(f"/habits/{habit['id']}/complete")
    assert response.status_code == 200
    assert response.json()["streak"] == 1

    assert len(client.get("/habits").json()) == 1
    assert client.delete(f"/habits/{habit['id']}").json() == {"success": True}
    assert client.delete(f"/habits/{habit['id']}").json() == {"success": False}


def test_blank_habit_title_rejected():
    response = client.post("/habits", json={"title": "   "})
    assert response.status_code == 422
    assert store.get_habits() == []


def test_complete_unknown_habit_404():
    assert client.post("/habits/nonexistent/complete").status_code == 404


def test_goal_tree_and_progress():
    root = client.post("/goals", json={"title": "Write a Book"}).json()
    child = client.post("/goals", json={"title": "Outline", "parent_id": root["id"]})
    assert child.status_code == 201
    child = child.json()

    task = client.post(f"/goals/{root['id']}/tasks", json={"title": "Research"}).json()
    client.post(f"/goals/{root['id']}/tasks", json={"title": "Draft"})
    assert task["goal_id"] == root["id"]

    response = client.post(f"/tasks/{task['id']}/complete")
    assert response.status_code == 200
    assert response.json()["completed"] is True

    goal = client.get(f"/goals/{root['id']}").json()
    assert goal["progress"] == 50
    assert [g["id"] for g in goal["subgoals"]] == [child["id"]]
    assert len(goal["tasks"]) == 2

    roots = client.get("/goals/roots").json()
    assert [g["id"] for g in roots] == [root["id"]]
    assert len(client.get("/goals").json()) == 2


def test_goal_with_unknown_parent_404():
    response = client.post("/goals", json={"title": "Orphan", "parent_id": "missing"})
    assert response.status_code == 404


def test_task_for_unknown_goal_404():
    assert client.post("/goals/missing/tasks", json={"title": "Lost"}).status_code == 404
    assert client.get("/goals/missing").status_code == 404
    assert client.post("/tasks/missing/complete").status_code == 404


def test_delete_goal_cascade():
    root = client.post("/goals", json={"title": "Root"}).json()
    child = client.post("/goals", json={"title": "Child", "parent_id": root["id"]}).json()
    client.post(f"/goals/{child['id']}/tasks", json={"title": "Deep task"})

    response = client.delete(f"/goals/{root['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["removed_goal_ids"] == [root["id"], child["id"]]
    assert client.get("/goals").json() == []
    assert store.get_tasks() == []

    assert client.delete(f"/goals/{root['id']}").json() == {"success": False, "removed_goal_ids": []}


def test_delete_task_updates_progress():
    goal = client.post("/goals", json={"title": "Goal"}).json()
    task = client.post(f"/goals/{goal['id']}/tasks", json={"title": "Only"}).json()
    client.post(f"/tasks/{task['id']}/complete")
    assert client.get(f"/goals/{goal['id']}").json()["progress"] == 100
    assert client.delete(f"/tasks/{task['id']}").json() == {"success": True}
    assert client.get(f"/goals/{goal['id']}").json()["progress"] == 0


def test_challenge_completion_is_one_way():
    challenge = client.post("/challenges", json={"title": "Breathe", "description": "Five minutes"}).json()
    for _ in range(2):
        response = client.post(f"/challenges/{challenge['id']}/complete")
        assert response.status_code == 200
        assert response.json()["completed"] is True
    assert client.post("/challenges/missing/complete").status_code == 404
    assert client.delete(f"/challenges/{challenge['id']}").json() == {"success": True}


def test_daily_challenge():
    response = client.post("/challenges/daily")
    assert response.status_code == 201
    assert response.json()["completed"] is False
    assert len(client.get("/challenges").json()) == 1


def test_daily_challenge_disabled():
    with patch("grow_app.routers.challenges.is_enabled", return_value=False):
        response = client.post("/challenges/daily")
    assert response.status_code == 403
    assert store.get_challenges() == []


def test_tree_layout_endpoint():
    client.post("/habits", json={"title": "Meditate"})
    client.post("/goals", json={"title": "Branch"})
    client.post("/challenges", json={"title": "Root"})
    response = client.get("/tree/layout")
    assert response.status_code == 200
    layout = response.json()
    assert layout["trunk_width"] == 20
    assert len(layout["left"]) == 1 and layout["right"] == []
    assert len(layout["roots"]) == 1


def test_tree_layout_disabled():
    with patch("grow_app.routers.tree.is_enabled", return_value=False):
        assert client.get("/tree/layout").status_code == 403


def test_summary_endpoint():
    client.post("/habits", json={"title": "Meditate"})
    summary = client.get("/tree/summary").json()
    assert summary["habits"] == 1
    assert summary["goals"] == 0

"""HTTP tests for /tasks."""

from __future__ import annotations

from fastapi.testclient import TestClient


def _create(client: TestClient, title: str = "Buy milk") -> dict:
    r = client.post("/tasks", json={"title": title})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list(client: TestClient) -> None:
    assert client.get("/tasks").json() == []
    task = _create(client)
    assert task["done"] is False
    assert task["title"] == "Buy milk"
    assert client.get("/tasks").json() == [task]


def test_create_requires_title(client: TestClient) -> None:
    r = client.post("/tasks", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Title is required."
    assert client.post("/tasks").status_code == 400


def test_patch_without_done_toggles(client: TestClient) -> None:
    task = _create(client)
    r = client.patch(f"/tasks/{task['id']}", json={})
    assert r.status_code == 200
    assert r.json()["done"] is True
    # no body at all also toggles
    assert client.patch(f"/tasks/{task['id']}").json()["done"] is False


def test_patch_with_done_sets_unconditionally(client: TestClient) -> None:
    task = _create(client)
    assert client.patch(f"/tasks/{task['id']}", json={"done": True}).json()["done"] is True
    assert client.patch(f"/tasks/{task['id']}", json={"done": True}).json()["done"] is True
    assert client.patch(f"/tasks/{task['id']}", json={"done": False}).json()["done"] is False


def test_patch_unknown_task(client: TestClient) -> None:
    r = client.patch("/tasks/123", json={"done": True})
    assert r.status_code == 404
    assert r.json()["message"] == "Task not found"


def test_delete(client: TestClient) -> None:
    task = _create(client)
    r = client.delete(f"/tasks/{task['id']}")
    assert r.status_code == 204
    assert client.get("/tasks").json() == []
    assert client.delete(f"/tasks/{task['id']}").status_code == 404

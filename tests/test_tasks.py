# tests/test_tasks.py
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from main import app


def create(client, headers, title, description, status=None):
    payload = {"title": title, "description": description}
    if status is not None:
        payload["status"] = status
    resp = client.post("/api/tasks", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["task"]


def test_example_flow(client, ann):
    user, headers = ann
    task = create(client, headers, "Buy milk", "2%")
    assert task["status"] == "pending"
    assert task["user_id"] == user["id"]

    resp = client.get("/api/tasks", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["data"]["tasks"][0]["title"] == "Buy milk"


def test_empty_or_null_status_is_rejected(client, ann):
    _, headers = ann
    for value in ("", None):
        resp = client.post("/api/tasks", json={"title": "t", "description": "d", "status": value}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "status"
    assert client.get("/api/tasks", headers=headers).json()["count"] == 0


def test_create_rejects_unknown_status_and_long_fields(client, ann):
    _, headers = ann
    bad_status = client.post("/api/tasks", json={"title": "t", "description": "d", "status": "done"}, headers=headers)
    assert bad_status.status_code == 400
    too_long = client.post("/api/tasks", json={"title": "x" * 101, "description": "d"}, headers=headers)
    assert too_long.status_code == 400
    blank = client.post("/api/tasks", json={"title": "   ", "description": "d"}, headers=headers)
    assert blank.status_code == 400
    assert client.get("/api/tasks", headers=headers).json()["count"] == 0


def test_list_is_newest_first_and_owner_scoped(client, ann, bob):
    _, ann_headers = ann
    _, bob_headers = bob
    create(client, ann_headers, "first", "a")
    create(client, ann_headers, "second", "b")
    create(client, bob_headers, "bob task", "c")

    titles = [t["title"] for t in client.get("/api/tasks", headers=ann_headers).json()["data"]["tasks"]]
    assert titles == ["second", "first"]
    assert client.get("/api/tasks", headers=bob_headers).json()["count"] == 1


def test_status_filter(client, ann, bob):
    _, headers = ann
    _, bob_headers = bob
    create(client, headers, "a", "a", status="completed")
    create(client, headers, "b", "b", status="pending")
    create(client, headers, "c", "c", status="in-progress")
    create(client, bob_headers, "d", "d", status="completed")

    resp = client.get("/api/tasks", params={"status": "completed"}, headers=headers)
    tasks = resp.json()["data"]["tasks"]
    assert [t["title"] for t in tasks] == ["a"]
    assert all(t["status"] == "completed" for t in tasks)


def test_invalid_status_filter_is_rejected(client, ann):
    _, headers = ann
    resp = client.get("/api/tasks", params={"status": "archived"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["location"] == "query"


def test_search_matches_title_or_description_case_insensitively(client, ann):
    _, headers = ann
    create(client, headers, "FOO in title", "nothing")
    create(client, headers, "plain", "has a Foo inside")
    create(client, headers, "unrelated", "nope")

    resp = client.get("/api/tasks", params={"search": "foo"}, headers=headers)
    titles = {t["title"] for t in resp.json()["data"]["tasks"]}
    assert titles == {"FOO in title", "plain"}


def test_search_treats_pattern_characters_literally(client, ann):
    _, headers = ann
    create(client, headers, "cost (approx)", "d")
    create(client, headers, "costs", "d")
    resp = client.get("/api/tasks", params={"search": "(approx"}, headers=headers)
    assert [t["title"] for t in resp.json()["data"]["tasks"]] == ["cost (approx)"]


def test_search_and_status_combined(client, ann):
    _, headers = ann
    create(client, headers, "report", "write", status="completed")
    create(client, headers, "report draft", "write", status="pending")
    resp = client.get("/api/tasks", params={"search": "REPORT", "status": "pending"}, headers=headers)
    assert [t["title"] for t in resp.json()["data"]["tasks"]] == ["report draft"]


def test_get_update_delete_own_task(client, ann):
    _, headers = ann
    task = create(client, headers, "Buy milk", "2%")

    got = client.get(f"/api/tasks/{task['id']}", headers=headers)
    assert got.status_code == 200
    assert got.json()["data"]["task"]["title"] == "Buy milk"

    upd = client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=headers)
    assert upd.status_code == 200
    updated = upd.json()["data"]["task"]
    assert updated["status"] == "completed"
    assert updated["title"] == "Buy milk"
    assert updated["description"] == "2%"
    assert updated["user_id"] == task["user_id"]


def test_status_can_move_freely(client, ann):
    _, headers = ann
    task = create(client, headers, "t", "d", status="completed")
    resp = client.put(f"/api/tasks/{task['id']}", json={"status": "pending"}, headers=headers)
    assert resp.json()["data"]["task"]["status"] == "pending"


def test_update_cannot_change_owner(client, ann, bob):
    _, headers = ann
    bob_user, _ = bob
    task = create(client, headers, "t", "d")
    resp = client.put(f"/api/tasks/{task['id']}", json={"title": "new", "user_id": bob_user["id"]}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["task"]["user_id"] == task["user_id"]


def test_update_rejects_null_and_invalid_values(client, ann):
    _, headers = ann
    task = create(client, headers, "t", "d")
    assert client.put(f"/api/tasks/{task['id']}", json={"title": None}, headers=headers).status_code == 400
    assert client.put(f"/api/tasks/{task['id']}", json={"description": ""}, headers=headers).status_code == 400
    assert client.put(f"/api/tasks/{task['id']}", json={"status": "done"}, headers=headers).status_code == 400
    unchanged = client.get(f"/api/tasks/{task['id']}", headers=headers).json()["data"]["task"]
    assert unchanged["title"] == "t"


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_foreign_task_is_forbidden(client, ann, bob, method):
    _, ann_headers = ann
    _, bob_headers = bob
    task = create(client, ann_headers, "secret", "mine")

    kwargs = {"headers": bob_headers}
    if method == "put":
        kwargs["json"] = {"title": "hijacked"}
    resp = getattr(client, method)(f"/api/tasks/{task['id']}", **kwargs)
    assert resp.status_code == 403
    assert "data" not in resp.json()

    still = client.get(f"/api/tasks/{task['id']}", headers=ann_headers).json()["data"]["task"]
    assert still["title"] == "secret"


def test_delete_twice(client, ann):
    _, headers = ann
    task = create(client, headers, "t", "d")
    first = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert first.status_code == 200
    assert first.json()["data"] == {}
    second = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert second.status_code == 404


def test_missing_and_malformed_ids(client, ann):
    _, headers = ann
    assert client.get("/api/tasks/64b000000000000000000001", headers=headers).status_code == 404
    resp = client.get("/api/tasks/not-an-id", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "id"


def test_unexpected_errors_become_500(db, ann, monkeypatch):
    _, headers = ann

    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr("tasks.controllers.find_tasks", boom)
    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/api/tasks", headers=headers)
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert "error" not in body


def test_database_errors_become_internal_error(db, ann, monkeypatch):
    _, headers = ann

    def unreachable(*args, **kwargs):
        raise ServerSelectionTimeoutError("no servers")

    monkeypatch.setattr("tasks.controllers.find_tasks", unreachable)
    resp = TestClient(app).get("/api/tasks", headers=headers)
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Error de base de datos."}

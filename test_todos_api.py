import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from todo_app.controller import TodoController
from todo_app.database import make_engine
from todo_app.errors import PersistenceError
from todo_app.main import app, on_startup


def add(client, title):
    response = client.post("/api/todos", json={"title": title})
    assert response.status_code == 201
    return response.json()


def test_root_and_health():
    client = TestClient(app)
    assert client.get("/").json() == {"message": "Todo API"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_empty_view(client):
    response = client.get("/api/todos")

    assert response.status_code == 200
    assert response.json() == {
        "filter": "all",
        "todos": [],
        "stats": {"total": 0, "completed": 0, "active": 0},
    }


def test_add_returns_refreshed_view(client):
    add(client, "Write report")
    view = add(client, "  Call client  ")

    assert [t["title"] for t in view["todos"]] == ["Call client", "Write report"]
    todo = view["todos"][0]
    assert set(todo) == {"id", "title", "completed", "createdAt"}
    assert todo["completed"] is False
    assert view["stats"] == {"total": 2, "completed": 0, "active": 2}


def test_add_blank_title_is_400(client):
    response = client.post("/api/todos", json={"title": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "title must not be blank"}
    assert client.get("/api/todos/stats").json()["total"] == 0


def test_add_without_body_is_400(client):
    response = client.post("/api/todos", json={})

    assert response.status_code == 400
    assert "title" in response.json()["error"]


def test_toggle_filter_and_clear(client):
    add(client, "Write report")
    view = add(client, "Call client")
    report_id = view["todos"][1]["id"]

    view = client.patch(f"/api/todos/{report_id}/toggle").json()
    assert view["stats"] == {"total": 2, "completed": 1, "active": 1}

    view = client.put("/api/todos/filter", json={"filter": "completed"}).json()
    assert view["filter"] == "completed"
    assert [t["title"] for t in view["todos"]] == ["Write report"]

    view = client.put("/api/todos/filter", json={"filter": "active"}).json()
    assert [t["title"] for t in view["todos"]] == ["Call client"]

    client.put("/api/todos/filter", json={"filter": "all"})
    view = client.post("/api/todos/clear-completed").json()
    assert [t["title"] for t in view["todos"]] == ["Call client"]
    assert view["stats"] == {"total": 1, "completed": 0, "active": 1}


def test_unknown_filter_is_400(client):
    response = client.put("/api/todos/filter", json={"filter": "someday"})
    assert response.status_code == 400


def test_update_and_delete(client):
    view = add(client, "Draft")
    todo_id = view["todos"][0]["id"]

    view = client.put(f"/api/todos/{todo_id}", json={"title": " Final "}).json()
    assert view["todos"][0]["title"] == "Final"

    response = client.put(f"/api/todos/{todo_id}", json={"title": ""})
    assert response.status_code == 400

    view = client.delete(f"/api/todos/{todo_id}").json()
    assert view["todos"] == []


def test_unknown_id_is_a_no_op(client):
    add(client, "Stay")

    for response in (
        client.patch("/api/todos/1/toggle"),
        client.put("/api/todos/1", json={"title": "Renamed"}),
        client.delete("/api/todos/1"),
    ):
        assert response.status_code == 200
        view = response.json()
        assert [t["title"] for t in view["todos"]] == ["Stay"]
        assert view["todos"][0]["completed"] is False


def test_non_integer_id_is_400(client):
    response = client.patch("/api/todos/abc/toggle")
    assert response.status_code == 400


def test_startup_logs_unreadable_storage(caplog):
    with patch("todo_app.main.KeyValueStorage", side_effect=PersistenceError("database is locked")):
        with caplog.at_level(logging.ERROR, logger="todo_app.main"):
            with pytest.raises(PersistenceError):
                on_startup()

    assert "Cannot read todo storage" in caplog.text
    assert "database is locked" in caplog.text


def test_startup_builds_controller(monkeypatch):
    monkeypatch.setattr("todo_app.main.engine", make_engine("sqlite://"))

    on_startup()

    assert isinstance(app.state.controller, TodoController)
    assert app.state.controller.todos == []

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from todo_app.controller import TodoController
from todo_app.database import make_engine
from todo_app.main import app
from todo_app.routers.ai import get_openai_client
from todo_app.routers.todos import get_controller
from todo_app.storage import KeyValueStorage, TodoStorage
from todo_app.store import TodoStore


def completion(content):
    """Build a fake chat completion whose first choice carries ``content``."""
    message = Mock()
    message.content = content
    choice = Mock()
    choice.message = message
    response = Mock()
    response.choices = [choice]
    return response


@pytest.fixture()
def engine():
    return make_engine("sqlite://")


@pytest.fixture()
def kv(engine):
    return KeyValueStorage(engine)


@pytest.fixture()
def storage(kv):
    return TodoStorage(kv, key="todos")


@pytest.fixture()
def store(storage):
    return TodoStore(storage)


@pytest.fixture()
def controller(store):
    return TodoController(store)


@pytest.fixture()
def fake_openai():
    return Mock()


@pytest.fixture()
def client(controller, fake_openai, monkeypatch):
    """TestClient with the controller and OpenAI client swapped for test doubles."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    app.dependency_overrides[get_controller] = lambda: controller
    app.dependency_overrides[get_openai_client] = lambda: fake_openai
    yield TestClient(app)
    app.dependency_overrides.clear()

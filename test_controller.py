import logging
from unittest.mock import Mock

import pytest

from todo_app.controller import TodoController
from todo_app.errors import BlankTitleError, PersistenceError
from todo_app.schemas.todo import FilterType
from todo_app.store import TodoStore


@pytest.fixture()
def populated(controller):
    controller.on_add("one")
    controller.on_add("two")
    controller.on_add("three")
    two = next(t for t in controller.todos if t.title == "two")
    controller.on_toggle(two.id)
    return controller


def test_starts_with_all_filter_and_loaded_state(store):
    store.add("already there")

    controller = TodoController(store)

    assert controller.filter == FilterType.ALL
    assert [t.title for t in controller.todos] == ["already there"]
    assert controller.stats.total == 1


@pytest.mark.parametrize(
    "value, expected",
    [
        (FilterType.ALL, ["three", "two", "one"]),
        (FilterType.ACTIVE, ["three", "one"]),
        (FilterType.COMPLETED, ["two"]),
    ],
)
def test_filtered(populated, value, expected):
    populated.set_filter(value)

    assert [t.title for t in populated.filtered] == expected
    # Filtering never touches the underlying list
    assert populated.stats.total == 3


def test_set_filter_accepts_plain_strings(controller):
    controller.set_filter("completed")
    assert controller.filter is FilterType.COMPLETED


def test_each_action_refreshes_state(populated):
    assert (populated.stats.completed, populated.stats.active) == (1, 2)

    populated.on_clear_completed()
    assert [t.title for t in populated.todos] == ["three", "one"]
    assert populated.stats.completed == 0

    one = populated.todos[-1]
    populated.on_update(one.id, "uno")
    assert populated.todos[-1].title == "uno"

    populated.on_delete(one.id)
    assert [t.title for t in populated.todos] == ["three"]


def test_view_reflects_filter(populated):
    populated.set_filter(FilterType.ACTIVE)

    view = populated.view()

    assert view.filter == FilterType.ACTIVE
    assert [t.title for t in view.todos] == ["three", "one"]
    assert view.stats.total == 3


def test_blank_title_propagates(controller):
    with pytest.raises(BlankTitleError):
        controller.on_add("   ")
    assert controller.todos == []


def test_persistence_failure_is_logged_not_raised(caplog):
    storage = Mock()
    storage.load.return_value = []
    storage.save.side_effect = PersistenceError("disk full")
    controller = TodoController(TodoStore(storage))

    with caplog.at_level(logging.ERROR, logger="todo_app.controller"):
        controller.on_add("kept in memory")

    assert [t.title for t in controller.todos] == ["kept in memory"]
    assert "disk full" in caplog.text


def test_filtered_is_a_copy_under_all(populated):
    populated.set_filter(FilterType.ALL)

    shown = populated.filtered
    shown.clear()

    assert shown is not populated.todos
    assert len(populated.todos) == 3

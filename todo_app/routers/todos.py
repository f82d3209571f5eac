from fastapi import APIRouter, Depends, Request, status

from ..controller import TodoController
from ..schemas.todo import FilterUpdate, TodoCreate, TodoStats, TodoUpdate, TodoView

router = APIRouter()


def get_controller(request: Request) -> TodoController:
    """Dependency: the controller built at application startup."""
    return request.app.state.controller


@router.get("/todos", response_model=TodoView)
def get_todos(controller: TodoController = Depends(get_controller)):
    """Current view: filtered todos, newest first, plus stats."""
    return controller.view()


@router.get("/todos/stats", response_model=TodoStats)
def get_stats(controller: TodoController = Depends(get_controller)):
    return controller.stats


@router.post("/todos", response_model=TodoView, status_code=status.HTTP_201_CREATED)
def add_todo(
    todo: TodoCreate,
    controller: TodoController = Depends(get_controller),
):
    controller.on_add(todo.title)
    return controller.view()


@router.put("/todos/filter", response_model=TodoView)
def set_filter(
    payload: FilterUpdate,
    controller: TodoController = Depends(get_controller),
):
    controller.set_filter(payload.filter)
    return controller.view()


@router.post("/todos/clear-completed", response_model=TodoView)
def clear_completed(controller: TodoController = Depends(get_controller)):
    controller.on_clear_completed()
    return controller.view()


@router.patch("/todos/{todo_id}/toggle", response_model=TodoView)
def toggle_todo(
    todo_id: int,
    controller: TodoController = Depends(get_controller),
):
    controller.on_toggle(todo_id)
    return controller.view()


@router.put("/todos/{todo_id}", response_model=TodoView)
def update_todo(
    todo_id: int,
    todo_update: TodoUpdate,
    controller: TodoController = Depends(get_controller),
):
    controller.on_update(todo_id, todo_update.title)
    return controller.view()


@router.delete("/todos/{todo_id}", response_model=TodoView)
def delete_todo(
    todo_id: int,
    controller: TodoController = Depends(get_controller),
):
    controller.on_delete(todo_id)
    return controller.view()

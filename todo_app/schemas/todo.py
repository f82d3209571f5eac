from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FilterType(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Todo(BaseModel):
    """A single task record, serialized with camelCase ``createdAt``."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: int
    title: str = Field(min_length=1)
    completed: bool = False
    created_at: datetime = Field(alias="createdAt")


class TodoStats(BaseModel):
    total: int = 0
    completed: int = 0
    active: int = 0


class TodoCreate(BaseModel):
    """Schema for adding a task."""
    title: str


class TodoUpdate(BaseModel):
    """Schema for renaming a task."""
    title: str


class FilterUpdate(BaseModel):
    filter: FilterType


class TodoView(BaseModel):
    """What the controller renders after every action."""

    filter: FilterType
    todos: List[Todo]
    stats: TodoStats

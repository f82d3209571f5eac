from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class SuggestRequest(BaseModel):
    """Body of ``POST /api/ai/suggest``. Blank titles are rejected by the route."""
    title: Optional[str] = None


class SubtaskSuggestion(BaseModel):
    subtasks: List[str] = []


class PrioritiseRequest(BaseModel):
    """Body of ``POST /api/ai/prioritise``."""
    todos: Optional[List[str]] = None


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PrioritisedTodo(BaseModel):
    title: str
    priority: Priority
    reason: str


class PrioritiseResult(BaseModel):
    prioritised: List[PrioritisedTodo] = []

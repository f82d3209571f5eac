"""Prompt templates and the two OpenAI-backed generation flows."""

import logging
from typing import List, Optional, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel

from ..config import OPENAI_MODEL
from ..schemas.ai import PrioritiseResult, SubtaskSuggestion

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SYSTEM_PROMPT = "You are a productivity assistant. You always answer with a single JSON object."

SUGGEST_PROMPT = """Given the following task title, suggest 3 to 5 clear and actionable subtasks that would help someone complete it.

Task: "{title}"

Return ONLY a JSON object in this format (no markdown, no explanation):
{{"subtasks": ["subtask 1", "subtask 2", "subtask 3"]}}"""

PRIORITISE_PROMPT = """Given the following list of tasks, assign each a priority level (high, medium, or low) and give a one-sentence reason.

Tasks:
{tasks}

Return ONLY a JSON object (no markdown, no explanation):
{{"prioritised": [{{"title": "...", "priority": "high|medium|low", "reason": "..."}}]}}"""


def _generate(client: OpenAI, prompt: str, schema: Type[T]) -> Optional[T]:
    """Run one completion and validate its JSON content against ``schema``.

    Returns None when the model produced no content. Invalid JSON or a shape
    mismatch raises pydantic.ValidationError.
    """
    response = client.chat.completions.create(
        model=OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        response_format={"type": "json_object"},
    )

    if not response.choices:
        return None
    content = response.choices[0].message.content
    if not content or not content.strip():
        return None
    return schema.model_validate_json(content)


def suggest_subtasks(client: OpenAI, title: str) -> SubtaskSuggestion:
    result = _generate(client, SUGGEST_PROMPT.format(title=title), SubtaskSuggestion)
    if result is None:
        logger.info("Model returned no subtasks for %r", title)
        return SubtaskSuggestion(subtasks=[])
    return result


def prioritise_todos(client: OpenAI, todos: List[str]) -> PrioritiseResult:
    tasks = "\n".join(f"{i}. {t}" for i, t in enumerate(todos, start=1))
    result = _generate(client, PRIORITISE_PROMPT.format(tasks=tasks), PrioritiseResult)
    if result is None:
        logger.info("Model returned no priorities for %d todos", len(todos))
        return PrioritiseResult(prioritised=[])
    return result

import logging
from typing import List, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..schemas.ai import PrioritiseResult, SubtaskSuggestion

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class AiClient:
    """
    Caller-side access to the AI routes.

    Both methods degrade gracefully: if the server is unreachable, answers
    with an error status (for example 503 when no API key is configured) or
    sends an unexpected body, they return an empty result instead of raising.
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    def _post(self, path: str, body: dict, schema: Type[T], empty: T) -> T:
        try:
            response = self.http.post(path, json=body)
        except httpx.HTTPError as e:
            logger.warning("AI request %s failed, using empty result: %s", path, e)
            return empty

        # Checked on the response itself so any httpx-compatible client works
        if response.is_error:
            logger.warning("AI request %s answered %s, using empty result", path, response.status_code)
            return empty

        try:
            return schema.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("AI request %s returned an unexpected body, using empty result: %s", path, e)
            return empty

    def suggest_subtasks(self, title: str) -> SubtaskSuggestion:
        """Ask for 3-5 actionable subtasks of ``title``."""
        return self._post(
            "/api/ai/suggest",
            {"title": title},
            SubtaskSuggestion,
            SubtaskSuggestion(subtasks=[]),
        )

    def prioritise_todos(self, todos: List[str]) -> PrioritiseResult:
        """Ask for a high/medium/low priority and a short reason per title."""
        return self._post(
            "/api/ai/prioritise",
            {"todos": todos},
            PrioritiseResult,
            PrioritiseResult(prioritised=[]),
        )

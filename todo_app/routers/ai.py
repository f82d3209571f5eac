import logging

from fastapi import APIRouter, Depends
from openai import OpenAI
from pydantic import ValidationError

from ..ai.flows import prioritise_todos, suggest_subtasks
from ..config import AI_TIMEOUT_SECONDS, OPENAI_API_KEY_ENV, get_openai_api_key
from ..errors import ConfigurationMissing, UpstreamFailure, ValidationFailed
from ..schemas.ai import PrioritiseRequest, PrioritiseResult, SubtaskSuggestion, SuggestRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def get_openai_client() -> OpenAI:
    """Dependency: an OpenAI client, or 503 when no API key is configured.

    Resolved before the request body is validated, so a missing key wins
    over bad input.
    """
    api_key = get_openai_api_key()
    if not api_key:
        raise ConfigurationMissing(f"{OPENAI_API_KEY_ENV} environment variable is not set.")
    return OpenAI(api_key=api_key, timeout=AI_TIMEOUT_SECONDS)


def _upstream_message(e: Exception) -> str:
    if isinstance(e, ValidationError):
        return "AI returned an unexpected response shape"
    return str(e) or "AI request failed"


@router.post("/suggest", response_model=SubtaskSuggestion)
def suggest(
    payload: SuggestRequest,
    client: OpenAI = Depends(get_openai_client),
):
    """Given a todo title, return 3-5 actionable subtasks."""
    title = (payload.title or "").strip()
    if not title:
        raise ValidationFailed("title is required")

    try:
        return suggest_subtasks(client, title)
    except Exception as e:
        logger.exception("Subtask suggestion failed")
        raise UpstreamFailure(_upstream_message(e)) from e


@router.post("/prioritise", response_model=PrioritiseResult)
def prioritise(
    payload: PrioritiseRequest,
    client: OpenAI = Depends(get_openai_client),
):
    """Given a list of todo titles, label each high/medium/low with a reason."""
    if not payload.todos:
        raise ValidationFailed("todos array is required and must not be empty")

    try:
        return prioritise_todos(client, payload.todos)
    except Exception as e:
        logger.exception("Prioritisation failed")
        raise UpstreamFailure(_upstream_message(e)) from e

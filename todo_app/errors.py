from fastapi import status


class TodoAppError(Exception):
    """Base error rendered by the API as ``{"error": message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationMissing(TodoAppError):
    """A required credential or setting is absent. Fixed by the operator."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ValidationFailed(TodoAppError):
    """The caller sent malformed or empty input."""

    status_code = status.HTTP_400_BAD_REQUEST


class BlankTitleError(ValidationFailed):
    def __init__(self, message: str = "title must not be blank"):
        super().__init__(message)


class UpstreamFailure(TodoAppError):
    """The external AI provider call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PersistenceError(TodoAppError):
    """Reading or writing the key/value storage failed."""

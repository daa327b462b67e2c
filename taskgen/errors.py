from typing import Optional


class TaskGenError(Exception):
    """Base class for every error raised by taskgen."""


class ValidationError(TaskGenError):
    """Missing or malformed input from the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GenerationError(TaskGenError):
    """The model client could not produce a list of steps."""


class ConfigurationError(GenerationError):
    pass


class EmptyResponseError(GenerationError):
    pass


class UpstreamError(GenerationError):
    """Network failure or non-success status from the model API."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GenerationFailed(TaskGenError):
    """Raised by the task service when the model client fails."""


class TaskNotFoundError(TaskGenError):
    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreError(TaskGenError):
    """Connection or constraint failure in the task table."""

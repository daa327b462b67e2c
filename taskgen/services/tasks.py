import logging
from typing import List, Optional, Protocol

from ..errors import GenerationError, GenerationFailed, ValidationError
from ..models import Task
from ..store import TaskStore
from .grouping import STATUS_FILTERS, build_groups, unique_headings

logger = logging.getLogger(__name__)

ANONYMOUS_USER_ID = "anonymous"


class StepGenerator(Protocol):
    def generate_steps(self, topic: str) -> List[str]: ...


class TaskService:
    """Composes the model client and the task store.

    ``generate_tasks`` is the only multi-step operation: generation first,
    then a single bulk insert. There is no compensation if the insert fails
    after generation succeeded; the caller retries the whole request.
    """

    def __init__(self, store: TaskStore, model_client: StepGenerator):
        self.store = store
        self.model_client = model_client

    def list_tasks(self, user_id: str) -> List[Task]:
        if not user_id:
            raise ValidationError("User ID is required")
        return self.store.list_by_user(user_id)

    def generate_tasks(self, topic: Optional[str], user_id: Optional[str] = None) -> List[Task]:
        if not topic:
            raise ValidationError("Topic is required")
        user_id = user_id or ANONYMOUS_USER_ID

        try:
            steps = self.model_client.generate_steps(topic)
        except GenerationError as e:
            raise GenerationFailed(f"Failed to generate tasks for {topic!r}") from e

        rows = [
            {"user_id": user_id, "content": step, "completed": False, "heading": topic}
            for step in steps
        ]
        tasks = self.store.insert_many(rows)
        logger.info("Stored %d tasks for user %s under %r", len(tasks), user_id, topic)
        return tasks

    def update_status(self, task_id: str, completed) -> Task:
        # bool only; "true" and 1 are rejected
        if not isinstance(completed, bool):
            raise ValidationError("Invalid completed status")
        return self.store.update_completed(task_id, completed)

    def headings(self, user_id: str) -> List[str]:
        return unique_headings(self.list_tasks(user_id))

    def task_groups(self, user_id: str, heading: Optional[str] = None, status: str = "all") -> List[dict]:
        if status not in STATUS_FILTERS:
            raise ValidationError("Invalid status filter")
        return build_groups(self.list_tasks(user_id), heading=heading, status=status)

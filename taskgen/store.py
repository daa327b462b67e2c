from typing import Iterable, List, Mapping
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .errors import StoreError, TaskNotFoundError
from .models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Task table operations over a single session."""

    def __init__(self, session: Session):
        self.session = session

    def list_by_user(self, user_id: str) -> List[Task]:
        """Every task owned by ``user_id``, in store-native order."""
        try:
            return list(self.session.exec(select(Task).where(Task.user_id == user_id)).all())
        except SQLAlchemyError as e:
            raise StoreError("Failed to list tasks") from e

    def insert_many(self, rows: Iterable[Mapping]) -> List[Task]:
        """Insert all rows in one transaction; nothing is kept if any row fails."""
        tasks = [
            Task(
                user_id=row["user_id"],
                content=row["content"],
                completed=row.get("completed", False),
                heading=row.get("heading"),
            )
            for row in rows
        ]
        try:
            self.session.add_all(tasks)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning("Rolled back insert of %d tasks", len(tasks))
            raise StoreError("Failed to insert tasks") from e
        return tasks

    def update_completed(self, task_id: str, completed: bool) -> Task:
        try:
            task = self.session.get(Task, task_id)
            if task is None:
                raise TaskNotFoundError(task_id)

            task.completed = completed
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to update task") from e
        return task

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from ..database import get_db
from ..errors import GenerationFailed, StoreError, TaskNotFoundError, ValidationError
from ..schemas.task import (
    HeadingList,
    TaskGenerate,
    TaskGroupList,
    TaskList,
    TaskResponse,
    TaskStatusUpdate,
)
from ..services.tasks import TaskService
from ..store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter()

FETCH_FAILED = "Failed to fetch tasks"
GENERATE_FAILED = "Failed to generate tasks"
UPDATE_FAILED = "Failed to update task status"


def get_task_service(request: Request, db: Session = Depends(get_db)) -> TaskService:
    return TaskService(TaskStore(db), request.app.state.model_client)


def _bad_request(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("/tasks", response_model=TaskList)
def list_tasks(
    user_id: Optional[str] = Query(None, alias="userId"),
    service: TaskService = Depends(get_task_service),
):
    """List every task owned by ``userId``."""
    try:
        tasks = service.list_tasks(user_id)
    except ValidationError as e:
        raise _bad_request(e)
    except StoreError:
        logger.exception("Fetch tasks error")
        raise _server_error(FETCH_FAILED)
    return {"tasks": tasks}


@router.post("/tasks", response_model=TaskList)
def generate_tasks(
    payload: Optional[TaskGenerate] = None,
    service: TaskService = Depends(get_task_service),
):
    """Generate steps for a topic and store them as tasks.

    ``userId`` falls back to ``"anonymous"`` when the caller sends none.
    """
    topic = payload.topic if payload else None
    user_id = payload.user_id if payload else None
    try:
        tasks = service.generate_tasks(topic, user_id)
    except ValidationError as e:
        raise _bad_request(e)
    except (GenerationFailed, StoreError):
        logger.exception("Task generation error")
        raise _server_error(GENERATE_FAILED)
    return {"tasks": tasks}


@router.get("/tasks/headings", response_model=HeadingList)
def list_headings(
    user_id: Optional[str] = Query(None, alias="userId"),
    service: TaskService = Depends(get_task_service),
):
    """Distinct topics the user has generated tasks for."""
    try:
        headings = service.headings(user_id)
    except ValidationError as e:
        raise _bad_request(e)
    except StoreError:
        logger.exception("Fetch headings error")
        raise _server_error(FETCH_FAILED)
    return {"headings": headings}


@router.get("/tasks/groups", response_model=TaskGroupList)
def list_task_groups(
    user_id: Optional[str] = Query(None, alias="userId"),
    heading: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    service: TaskService = Depends(get_task_service),
):
    """Tasks grouped by heading with per-group progress."""
    try:
        groups = service.task_groups(user_id, heading=heading, status=status_filter)
    except ValidationError as e:
        raise _bad_request(e)
    except StoreError:
        logger.exception("Fetch task groups error")
        raise _server_error(FETCH_FAILED)
    return {"groups": groups}


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task_status(
    task_id: str,
    payload: Optional[TaskStatusUpdate] = None,
    service: TaskService = Depends(get_task_service),
):
    """Set the completed flag of one task."""
    try:
        task = service.update_status(task_id, payload.completed if payload else None)
    except ValidationError as e:
        raise _bad_request(e)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except StoreError:
        logger.exception("Update task error")
        raise _server_error(UPDATE_FAILED)
    return {"task": task}

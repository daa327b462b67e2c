from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from typing import List, Optional

class Task(BaseModel):
    """Task as it goes over the wire (camelCase ``userId``)."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    content: str
    completed: bool = False
    heading: Optional[str] = None

class TaskGenerate(BaseModel):
    """Body of ``POST /api/tasks``."""
    topic: StrictStr = Field(min_length=1, max_length=256)
    user_id: Optional[StrictStr] = Field(default=None, alias="userId", max_length=256)

class TaskStatusUpdate(BaseModel):
    """Body of ``PATCH /api/tasks/{id}``."""
    completed: StrictBool

class TaskList(BaseModel):
    tasks: List[Task]

class TaskResponse(BaseModel):
    task: Task

class HeadingList(BaseModel):
    headings: List[str]

class TaskGroup(BaseModel):
    heading: str
    tasks: List[Task]
    total: int
    completed: int
    progress: int

class TaskGroupList(BaseModel):
    groups: List[TaskGroup]

class ErrorResponse(BaseModel):
    error: str

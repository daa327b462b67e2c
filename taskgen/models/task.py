from sqlmodel import SQLModel, Field
from typing import Optional
from uuid import uuid4

class Task(SQLModel, table=True):
    """One actionable step generated for a user.

    ``heading`` is a copy of the topic the step was generated from; tasks
    produced by one generation call share it.
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(max_length=256, index=True)
    content: str = Field(max_length=1024)
    completed: bool = Field(default=False)
    heading: Optional[str] = Field(default=None, max_length=256)

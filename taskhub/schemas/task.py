from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from taskhub.models.project import ProjectPriority
from taskhub.models.task import TaskStatus
from taskhub.models.user import UserRole
from taskhub.schemas.base import ReadModel, RequestModel, future_deadline


class TaskCreate(RequestModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    assignee: str = Field(min_length=1)  # user id
    project_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    deadline: datetime
    image_url: Optional[str] = None

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, v):
        return future_deadline(v)


class TaskStatusUpdate(RequestModel):
    status: TaskStatus


class TaskRead(ReadModel):
    """A task with the assignee, creator and project names filled in."""
    id: int
    name: str
    description: str
    assignee: str
    assignee_name: Optional[str] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    tags: List[str] = []
    deadline: datetime
    image_url: Optional[str] = None
    status: TaskStatus
    created_by: str
    created_by_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Dashboard aggregation

class TaskCounts(BaseModel):
    total: int
    completed: int
    in_progress: int
    new_tasks: int
    today_tasks: List[TaskRead]
    recent_tasks: List[TaskRead]


class ProjectWorkload(BaseModel):
    project_id: int
    project_name: str
    total_tasks: int
    completed_tasks: int
    progress_percentage: int
    deadline: datetime
    priority: ProjectPriority


class ProjectSummary(BaseModel):
    total: int
    workload: List[ProjectWorkload]


class Dashboard(BaseModel):
    user_role: UserRole
    tasks: TaskCounts
    projects: ProjectSummary

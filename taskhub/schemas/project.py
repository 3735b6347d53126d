from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from taskhub.models.project import ProjectPriority
from taskhub.schemas.base import ReadModel, RequestModel, future_deadline, not_null


class ProjectCreate(RequestModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)
    project_manager: str = Field(min_length=1)  # user id of the owning manager
    deadline: datetime
    priority: ProjectPriority
    image_url: Optional[str] = None
    completion_percentage: int = Field(default=0, ge=0, le=100)

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, v):
        return future_deadline(v)


class ProjectUpdate(RequestModel):
    """Partial update; only fields present in the body are applied."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[List[str]] = None
    deadline: Optional[datetime] = None
    priority: Optional[ProjectPriority] = None
    image_url: Optional[str] = None
    completion_percentage: Optional[int] = Field(default=None, ge=0, le=100)

    @field_validator("name", "description", "tags", "deadline", "priority", "completion_percentage", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return not_null(v)

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, v):
        return future_deadline(v)


class ProjectRead(ReadModel):
    id: int
    name: str
    description: str
    tags: List[str] = []
    project_manager: str
    project_manager_name: Optional[str] = None
    deadline: datetime
    priority: ProjectPriority
    image_url: Optional[str] = None
    completion_percentage: int = 0
    created_at: datetime
    updated_at: datetime

"""
Task Model Module

This module defines the Task model and the TaskStatus workflow states. Each
task has exactly one assignee and one creator (a project manager), and may
belong to a project.
"""
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column, AutoString
from datetime import datetime

from taskhub.core.timeutil import utcnow


class TaskStatus(str, Enum):
    """
    Workflow states, in order. A task only ever moves forward one step at a
    time and APPROVED is terminal (see taskhub.core.workflow).
    """
    NEW_TASK = "new_task"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    APPROVED = "approved"


class Task(SQLModel, table=True):
    """
    Task table model.

    Attributes:
        id: Auto-incrementing primary key
        name: Task name (required)
        description: Task description (required)
        assignee: Foreign key to the user the task is delegated to
        project_id: Optional project; cleared (not cascaded) when the project is deleted
        tags: Ordered list of string tags, stored as a JSON array
        deadline: UTC due date
        image_url: Optional image
        status: Current TaskStatus value
        created_by: Foreign key to the project manager who created the task
        created_at / updated_at: UTC audit timestamps
    """
    __tablename__ = "tasks"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic task information
    name: str = Field(nullable=False)
    description: str = Field(nullable=False)

    # Assignment
    assignee: str = Field(foreign_key="users.id", index=True, nullable=False)
    created_by: str = Field(foreign_key="users.id", index=True, nullable=False)

    # Project association (weak reference)
    project_id: Optional[int] = Field(default=None, foreign_key="projects.id", index=True)

    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    deadline: datetime = Field(nullable=False)
    image_url: Optional[str] = None

    status: TaskStatus = Field(default=TaskStatus.NEW_TASK, sa_type=AutoString, nullable=False)

    # Audit timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

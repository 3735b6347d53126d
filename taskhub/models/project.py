"""
Project Model Module

This module defines the Project model. Every project is owned by exactly one
project manager, who is the only user allowed to modify or delete it.
"""
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column, AutoString
from datetime import datetime

from taskhub.core.timeutil import utcnow


class ProjectPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Project(SQLModel, table=True):
    """
    Project model representing a unit of work owned by a project manager.

    Ownership rules:
    - Any authenticated user can list and read projects
    - Only the manager referenced by project_manager can update or delete it

    Attributes:
        id: Auto-incrementing primary key
        name: Project name/title (required)
        description: Detailed project description (required)
        tags: Ordered list of string tags, stored as a JSON array
        project_manager: Foreign key to the owning User (role project_manager)
        deadline: UTC deadline, always in the future when set through the API
        priority: One of "low", "medium", "high"
        completion_percentage: Progress from 0 to 100
        image_url: Optional cover image
        created_at: UTC timestamp when the project was created
        updated_at: UTC timestamp when the project was last modified
    """
    __tablename__ = "projects"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic project information
    name: str = Field(nullable=False)
    description: str = Field(nullable=False)

    # Tags stored as JSON array, order preserved
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Ownership
    project_manager: str = Field(foreign_key="users.id", index=True, nullable=False)

    # Scheduling
    deadline: datetime = Field(nullable=False)
    priority: ProjectPriority = Field(default=ProjectPriority.MEDIUM, sa_type=AutoString, nullable=False)
    completion_percentage: int = Field(default=0, ge=0, le=100)

    image_url: Optional[str] = None

    # Audit timestamps - automatically managed
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

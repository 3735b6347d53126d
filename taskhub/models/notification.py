"""
Notification Model Module

Notifications are addressed to a single recipient and may point at a project
or task. The API never lets employees create them directly.
"""
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field, AutoString
from datetime import datetime

from taskhub.core.timeutil import utcnow
from taskhub.models.related import RelatedType, make_ref


class NotificationType(str, Enum):
    TASK_ASSIGNED = "task_assigned"
    TASK_COMPLETED = "task_completed"
    TASK_APPROVED = "task_approved"
    PROJECT_CREATED = "project_created"
    DEADLINE_REMINDER = "deadline_reminder"


class Notification(SQLModel, table=True):
    """
    Attributes:
        id: Auto-incrementing primary key, also the polling checkpoint
        user_id: Recipient
        type: NotificationType value
        title / message: Display text
        related_type / related_id: Optional tagged reference
        is_read: Whether the recipient has marked it read
    """
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    type: NotificationType = Field(sa_type=AutoString, nullable=False)
    title: str = Field(nullable=False)
    message: str = Field(nullable=False)

    related_type: Optional[RelatedType] = Field(default=None, sa_type=AutoString)
    related_id: Optional[int] = None

    is_read: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def related(self):
        return make_ref(self.related_type, self.related_id)

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from taskhub.models.notification import NotificationType
from taskhub.models.related import RelatedRef
from taskhub.schemas.base import ReadModel, RequestModel


class NotificationCreate(RequestModel):
    user_id: str = Field(min_length=1)
    type: NotificationType
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    related: Optional[RelatedRef] = None


class NotificationRead(ReadModel):
    id: int
    user_id: str
    type: NotificationType
    title: str
    message: str
    related: Optional[RelatedRef] = None
    is_read: bool
    created_at: datetime
    updated_at: datetime


class NotificationList(BaseModel):
    notifications: List[NotificationRead]
    unread_count: int
    # Highest notification id the caller has now seen; pass back as since_id
    checkpoint: Optional[int] = None


class UnreadCount(BaseModel):
    unread_count: int


class MarkedRead(BaseModel):
    updated_count: int

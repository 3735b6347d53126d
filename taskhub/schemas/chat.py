from datetime import datetime
from typing import Optional

from pydantic import Field

from taskhub.models.user import UserRole
from taskhub.schemas.base import ReadModel, RequestModel


class ChatMessageCreate(RequestModel):
    content: str = Field(min_length=1)


class ChatMessageRead(ReadModel):
    id: int
    content: str
    sender_id: str
    sender_name: Optional[str] = None
    sender_role: Optional[UserRole] = None
    created_at: datetime
    updated_at: datetime

"""
Chat Models Module

A single global chat channel: messages and the files attached to them.
"""
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from taskhub.core.timeutil import utcnow
from taskhub.models.attachment import FileMetadata


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str = Field(nullable=False)
    sender_id: str = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ChatFileAttachment(FileMetadata, table=True):
    __tablename__ = "chat_file_attachments"

    id: Optional[int] = Field(default=None, primary_key=True)
    message_id: int = Field(foreign_key="chat_messages.id", index=True, nullable=False)
    uploaded_by: str = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(default_factory=utcnow)

"""
File Attachment Model Module

Attachment metadata only: the file itself lives at file_url. Task attachments
and chat attachments share the FileMetadata fields.
"""
from typing import Optional
from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field
from datetime import datetime

from taskhub.core.timeutil import utcnow


class FileMetadata(SQLModel):
    """Fields common to every uploaded file record."""
    file_name: str = Field(nullable=False)
    file_url: str = Field(nullable=False)
    file_size: int = Field(sa_type=BigInteger, nullable=False)  # bytes
    mime_type: str = Field(nullable=False)


class FileAttachment(FileMetadata, table=True):
    """A file uploaded to a task by its assignee."""
    __tablename__ = "file_attachments"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", index=True, nullable=False)
    uploaded_by: str = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(default_factory=utcnow)

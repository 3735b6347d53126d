from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskhub.schemas.base import ReadModel, RequestModel, within_upload_limit


class FileAttachmentCreate(RequestModel):
    """Metadata of an uploaded file. All four fields are required."""
    file_name: str = Field(min_length=1)
    file_url: str = Field(min_length=1)
    file_size: int
    mime_type: str = Field(min_length=1)

    @field_validator("file_size")
    @classmethod
    def check_size(cls, v):
        return within_upload_limit(v)


class FileAttachmentRead(ReadModel):
    id: int
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    task_id: int
    uploaded_by: str
    uploaded_by_name: Optional[str] = None
    created_at: datetime


class ChatFileAttachmentRead(ReadModel):
    id: int
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    message_id: int
    uploaded_by: str
    uploaded_by_name: Optional[str] = None
    created_at: datetime

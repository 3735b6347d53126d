from datetime import datetime
from typing import Optional

from pydantic import Field

from taskhub.models.related import RelatedRef
from taskhub.schemas.base import ReadModel, RequestModel


class CommentCreate(RequestModel):
    content: str = Field(min_length=1)


class CommentRead(ReadModel):
    id: int
    content: str
    author_id: str
    author_name: Optional[str] = None
    related: RelatedRef
    created_at: datetime
    updated_at: datetime

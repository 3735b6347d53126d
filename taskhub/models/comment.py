"""
Comment Model Module

Comments belong to exactly one project or one task. The parent is stored as a
(related_type, related_id) pair and exposed as a RelatedRef.
"""
from typing import Optional
from sqlmodel import SQLModel, Field, AutoString
from datetime import datetime

from taskhub.core.timeutil import utcnow
from taskhub.models.related import RelatedType, make_ref


class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str = Field(nullable=False)
    author_id: str = Field(foreign_key="users.id", nullable=False)

    # Tagged reference to the parent entity
    related_type: RelatedType = Field(sa_type=AutoString, nullable=False)
    related_id: int = Field(index=True, nullable=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def related(self):
        return make_ref(self.related_type, self.related_id)

"""
Comment helpers shared by the project and task endpoints.

Access to comments is exactly access to the parent entity, so callers check
the parent first and then use these.
"""
from typing import List, Union

from sqlmodel import Session, select

from taskhub.api.readers import comment_reads
from taskhub.models.comment import Comment
from taskhub.models.related import ProjectRef, TaskRef, ref_columns
from taskhub.models.user import User
from taskhub.schemas.comment import CommentRead


def list_comments(db: Session, ref: Union[ProjectRef, TaskRef]) -> List[CommentRead]:
    related_type, related_id = ref_columns(ref)
    statement = (
        select(Comment)
        .where(Comment.related_type == related_type, Comment.related_id == related_id)
        .order_by(Comment.created_at, Comment.id)
    )
    return comment_reads(db, db.exec(statement).all())


def add_comment(db: Session, ref: Union[ProjectRef, TaskRef], author: User, content: str) -> CommentRead:
    related_type, related_id = ref_columns(ref)
    comment = Comment(
        content=content,
        author_id=author.id,
        related_type=related_type,
        related_id=related_id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment_reads(db, [comment])[0]

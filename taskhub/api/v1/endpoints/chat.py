"""
Chat Endpoints Module

One global chat room shared by every authenticated user.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.api.readers import chat_file_reads, chat_message_reads
from taskhub.core.errors import NotFoundError
from taskhub.db.session import get_db
from taskhub.models.chat import ChatFileAttachment, ChatMessage
from taskhub.models.user import User
from taskhub.schemas.attachment import ChatFileAttachmentRead, FileAttachmentCreate
from taskhub.schemas.chat import ChatMessageCreate, ChatMessageRead

router = APIRouter()


def _get_message(db: Session, message_id: int) -> ChatMessage:
    message = db.get(ChatMessage, message_id)
    if not message:
        raise NotFoundError("Chat message not found")
    return message


@router.get("/messages", response_model=List[ChatMessageRead])
def list_messages(
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """The latest `limit` messages, returned oldest first."""
    statement = select(ChatMessage).order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc()).limit(limit)
    messages = list(db.exec(statement).all())
    messages.reverse()
    return chat_message_reads(db, messages)


@router.post("/messages", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED)
def create_message(
    message_in: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    message = ChatMessage(content=message_in.content, sender_id=current_user.id)
    db.add(message)
    db.commit()
    db.refresh(message)
    return chat_message_reads(db, [message])[0]


@router.get("/messages/{message_id}/attachments", response_model=List[ChatFileAttachmentRead])
def list_message_attachments(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    _get_message(db, message_id)
    statement = (
        select(ChatFileAttachment)
        .where(ChatFileAttachment.message_id == message_id)
        .order_by(ChatFileAttachment.created_at, ChatFileAttachment.id)
    )
    return chat_file_reads(db, db.exec(statement).all())


@router.post(
    "/messages/{message_id}/attachments",
    response_model=ChatFileAttachmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_message_attachment(
    message_id: int,
    file_in: FileAttachmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Attach a file (same field and size rules as task files) to a chat message."""
    _get_message(db, message_id)
    attachment = ChatFileAttachment(**file_in.model_dump(), message_id=message_id, uploaded_by=current_user.id)
    db.add(attachment)
    db.commit()
    db.refresh(attachment)
    return chat_file_reads(db, [attachment])[0]

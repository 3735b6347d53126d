"""
Response Builders

Helpers that turn table rows into response schemas with the related display
names (assignee, creator, project, author...) filled in. Names are looked up
in one query per entity type rather than one per row.
"""
from typing import Dict, Iterable, List, Optional

from sqlmodel import Session, select

from taskhub.models.chat import ChatFileAttachment, ChatMessage
from taskhub.models.comment import Comment
from taskhub.models.attachment import FileAttachment
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.timelog import TimeLog
from taskhub.models.user import User, UserRole
from taskhub.schemas.attachment import ChatFileAttachmentRead, FileAttachmentRead
from taskhub.schemas.chat import ChatMessageRead
from taskhub.schemas.comment import CommentRead
from taskhub.schemas.project import ProjectRead
from taskhub.schemas.task import TaskRead
from taskhub.schemas.timelog import TimeLogRead


def users_by_id(db: Session, user_ids: Iterable[Optional[str]]) -> Dict[str, User]:
    ids = {user_id for user_id in user_ids if user_id}
    if not ids:
        return {}
    return {user.id: user for user in db.exec(select(User).where(User.id.in_(ids))).all()}


def project_names(db: Session, project_ids: Iterable[Optional[int]]) -> Dict[int, str]:
    ids = {project_id for project_id in project_ids if project_id is not None}
    if not ids:
        return {}
    rows = db.exec(select(Project.id, Project.name).where(Project.id.in_(ids))).all()
    return {project_id: name for project_id, name in rows}


def _name(users: Dict[str, User], user_id: Optional[str]) -> Optional[str]:
    user = users.get(user_id) if user_id else None
    return user.name if user else None


def task_reads(db: Session, tasks: List[Task]) -> List[TaskRead]:
    users = users_by_id(db, [t.assignee for t in tasks] + [t.created_by for t in tasks])
    projects = project_names(db, [t.project_id for t in tasks])
    return [
        TaskRead.model_validate(task).model_copy(update={
            "assignee_name": _name(users, task.assignee),
            "created_by_name": _name(users, task.created_by),
            "project_name": projects.get(task.project_id),
        })
        for task in tasks
    ]


def task_read(db: Session, task: Task) -> TaskRead:
    return task_reads(db, [task])[0]


def project_reads(db: Session, projects: List[Project]) -> List[ProjectRead]:
    users = users_by_id(db, [p.project_manager for p in projects])
    return [
        ProjectRead.model_validate(project).model_copy(update={
            "project_manager_name": _name(users, project.project_manager),
        })
        for project in projects
    ]


def project_read(db: Session, project: Project) -> ProjectRead:
    return project_reads(db, [project])[0]


def comment_reads(db: Session, comments: List[Comment]) -> List[CommentRead]:
    users = users_by_id(db, [c.author_id for c in comments])
    return [
        CommentRead.model_validate(comment).model_copy(update={
            "author_name": _name(users, comment.author_id),
        })
        for comment in comments
    ]


def file_reads(db: Session, files: List[FileAttachment]) -> List[FileAttachmentRead]:
    users = users_by_id(db, [f.uploaded_by for f in files])
    return [
        FileAttachmentRead.model_validate(f).model_copy(update={
            "uploaded_by_name": _name(users, f.uploaded_by),
        })
        for f in files
    ]


def chat_file_reads(db: Session, files: List[ChatFileAttachment]) -> List[ChatFileAttachmentRead]:
    users = users_by_id(db, [f.uploaded_by for f in files])
    return [
        ChatFileAttachmentRead.model_validate(f).model_copy(update={
            "uploaded_by_name": _name(users, f.uploaded_by),
        })
        for f in files
    ]


def chat_message_reads(db: Session, messages: List[ChatMessage]) -> List[ChatMessageRead]:
    users = users_by_id(db, [m.sender_id for m in messages])
    reads = []
    for message in messages:
        sender = users.get(message.sender_id)
        reads.append(ChatMessageRead.model_validate(message).model_copy(update={
            "sender_name": sender.name if sender else None,
            "sender_role": UserRole(sender.role) if sender else None,
        }))
    return reads


def timelog_reads(db: Session, logs: List[TimeLog]) -> List[TimeLogRead]:
    users = users_by_id(db, [log.user_id for log in logs])
    reads = []
    for log in logs:
        user = users.get(log.user_id)
        reads.append(TimeLogRead.model_validate(log).model_copy(update={
            "user_name": user.name if user else None,
            "user_email": user.email if user else None,
        }))
    return reads

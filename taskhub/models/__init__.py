from .user import User, UserRole
from .project import Project, ProjectPriority
from .task import Task, TaskStatus
from .related import RelatedType, ProjectRef, TaskRef, RelatedRef
from .comment import Comment
from .attachment import FileAttachment
from .notification import Notification, NotificationType
from .chat import ChatMessage, ChatFileAttachment
from .timelog import TimeLog

__all__ = [
    "User", "UserRole",
    "Project", "ProjectPriority",
    "Task", "TaskStatus",
    "RelatedType", "ProjectRef", "TaskRef", "RelatedRef",
    "Comment",
    "FileAttachment",
    "Notification", "NotificationType",
    "ChatMessage", "ChatFileAttachment",
    "TimeLog",
]

"""
Notification Side Effects

Notifications written as a consequence of another operation. They are
at-most-once and fire-and-forget: the primary operation has already been
committed when these run, and a failure here is logged and rolled back
without being reported to the caller.
"""
from typing import Optional

from sqlmodel import Session

from taskhub.core.logging import get_logger
from taskhub.models.notification import Notification, NotificationType
from taskhub.models.related import RelatedType
from taskhub.models.task import Task

logger = get_logger(__name__)


def build_task_assigned(task: Task) -> Notification:
    return Notification(
        user_id=task.assignee,
        type=NotificationType.TASK_ASSIGNED,
        title="New Task Assigned",
        message=(
            f'You have been assigned a new task: "{task.name}". '
            f"Due date: {task.deadline:%Y-%m-%d}."
        ),
        related_type=RelatedType.TASK,
        related_id=task.id,
    )


def notify_task_assigned(db: Session, task: Task) -> Optional[Notification]:
    """
    Tell the assignee about a newly created task.

    Returns the stored notification, or None when writing it failed.
    """
    try:
        notification = build_task_assigned(task)
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except Exception:
        db.rollback()
        logger.exception("Failed to create task_assigned notification for task %s", task.id)
        return None

    logger.info("Notified user %s of assignment to task %s", task.assignee, task.id)
    return notification

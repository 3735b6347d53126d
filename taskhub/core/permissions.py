"""
Visibility and Ownership Rules

Per-resource access checks shared by the endpoint modules. Checks that fail
raise immediately; none of them narrow a result set silently.
"""
from sqlmodel import select

from taskhub.core.errors import AuthorizationError, NotFoundError
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.user import User


def task_list_statement(user: User):
    """
    Tasks visible in a user's task list.

    Managers see the tasks they created, employees the tasks assigned to them.
    The two views are disjoint; neither role lists every task.
    """
    if user.is_manager:
        return select(Task).where(Task.created_by == user.id)
    return select(Task).where(Task.assignee == user.id)


def can_read_task(user: User, task: Task) -> bool:
    # Broader than the list view: any manager may open any task
    return task.assignee == user.id or task.created_by == user.id or user.is_manager


def ensure_task_readable(user: User, task: Task) -> None:
    """Raise NotFoundError so hidden tasks look the same as missing ones."""
    if not can_read_task(user, task):
        raise NotFoundError("Task not found")


def ensure_project_owner(user: User, project: Project) -> None:
    if not user.is_manager or project.project_manager != user.id:
        raise AuthorizationError("Only the project's manager can modify it")


def ensure_profile_access(user: User, target_user_id: str, action: str = "view") -> None:
    """Users can see and edit their own profile; project managers can see and edit anyone's."""
    if user.id != target_user_id and not user.is_manager:
        raise AuthorizationError(f"Unauthorized to {action} this profile")

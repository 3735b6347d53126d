"""
Task Status Workflow

Tasks move strictly forward through::

    new_task -> in_progress -> completed -> approved

and ``approved`` is terminal. Each allowed step belongs to exactly one party:

====================  ====================  ==========================
From                  To                    Who may invoke
====================  ====================  ==========================
new_task              in_progress           the task's assignee
in_progress           completed             the task's assignee
completed             approved              the manager who created it
====================  ====================  ==========================

Every other (from, to) pair is rejected. The functions here only decide;
persisting the change is a conditional UPDATE done by the tasks endpoint.
"""
from enum import Enum
from typing import Dict, Tuple

from taskhub.core.errors import AuthorizationError, InvalidTransitionError
from taskhub.models.task import Task, TaskStatus
from taskhub.models.user import User


class Authority(str, Enum):
    """Which party of a task may perform a given transition."""
    ASSIGNEE = "assignee"
    CREATOR = "creator"


TRANSITIONS: Dict[Tuple[TaskStatus, TaskStatus], Authority] = {
    (TaskStatus.NEW_TASK, TaskStatus.IN_PROGRESS): Authority.ASSIGNEE,
    (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED): Authority.ASSIGNEE,
    (TaskStatus.COMPLETED, TaskStatus.APPROVED): Authority.CREATOR,
}

TERMINAL_STATES = frozenset({TaskStatus.APPROVED})


def required_authority(current: TaskStatus, target: TaskStatus) -> Authority:
    """
    Return who may move a task from `current` to `target`.

    Raises:
        InvalidTransitionError: If the pair is not a forward single step
    """
    try:
        return TRANSITIONS[(TaskStatus(current), TaskStatus(target))]
    except KeyError:
        if TaskStatus(current) in TERMINAL_STATES:
            message = f"Task is already {TaskStatus(current).value}; no further transitions are allowed"
        else:
            message = (
                f"Cannot move a task from {TaskStatus(current).value} "
                f"to {TaskStatus(target).value}"
            )
        raise InvalidTransitionError(message) from None


def holds_authority(task: Task, user: User, authority: Authority) -> bool:
    if authority == Authority.ASSIGNEE:
        return task.assignee == user.id
    # Approval needs both the creator relation and the manager role
    return task.created_by == user.id and user.is_manager


def check_transition(task: Task, user: User, target: TaskStatus) -> Authority:
    """
    Validate that `user` may move `task` to `target`.

    Checks, in order:
    1. the user is the task's assignee or creator (AuthorizationError)
    2. the step is in the transition table (InvalidTransitionError)
    3. the user is the party that owns that step (AuthorizationError)

    Returns:
        Authority: The party the transition was authorized as, which decides
        the ownership guard used by the conditional update.
    """
    if user.id not in (task.assignee, task.created_by):
        raise AuthorizationError("You can only update the status of tasks assigned to you")

    authority = required_authority(task.status, target)

    if not holds_authority(task, user, authority):
        if authority == Authority.CREATOR:
            raise AuthorizationError("Only the project manager who created this task can approve it")
        raise AuthorizationError("Only the task assignee can move it to " + TaskStatus(target).value)

    return authority

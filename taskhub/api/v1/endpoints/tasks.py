"""
Task Endpoints Module

This module provides endpoints for creating, listing and reading tasks, for the
task status workflow, and for task comments and file attachments.

Tasks have exactly one assignee and one creator. The creator is always a
project manager; status changes follow taskhub.core.workflow.
"""
from datetime import datetime, time
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy import update
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.api.comments import add_comment, list_comments
from taskhub.api.readers import file_reads, task_read, task_reads
from taskhub.core import workflow
from taskhub.core.errors import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from taskhub.core.logging import get_logger
from taskhub.core.notifications import notify_task_assigned
from taskhub.core.permissions import ensure_task_readable, task_list_statement
from taskhub.core.timeutil import utcnow
from taskhub.db.session import get_db
from taskhub.models.attachment import FileAttachment
from taskhub.models.project import Project
from taskhub.models.related import TaskRef
from taskhub.models.task import Task, TaskStatus
from taskhub.models.user import User
from taskhub.schemas.attachment import FileAttachmentCreate, FileAttachmentRead
from taskhub.schemas.comment import CommentCreate, CommentRead
from taskhub.schemas.task import (
    Dashboard, ProjectSummary, ProjectWorkload, TaskCounts, TaskCreate, TaskRead, TaskStatusUpdate,
)

router = APIRouter()
logger = get_logger(__name__)

DONE_STATES = (TaskStatus.COMPLETED, TaskStatus.APPROVED)


def _get_readable_task(db: Session, task_id: int, user: User) -> Task:
    """Load a task the user may see; hidden and missing tasks both raise NotFoundError."""
    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task not found")
    ensure_task_readable(user, task)
    return task


@router.get("/dashboard", response_model=Dashboard)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Task and project statistics for the current user's own view.

    Managers get the tasks they created and the projects they own; employees
    get the tasks assigned to them and the projects those tasks belong to.
    """
    statement = task_list_statement(current_user).order_by(Task.created_at.desc(), Task.id.desc())
    tasks = db.exec(statement).all()

    if current_user.is_manager:
        projects = db.exec(
            select(Project).where(Project.project_manager == current_user.id)
        ).all()
    else:
        project_ids = {task.project_id for task in tasks if task.project_id is not None}
        projects = db.exec(select(Project).where(Project.id.in_(project_ids))).all() if project_ids else []

    end_of_today = datetime.combine(utcnow().date(), time.max)

    workload = []
    for project in projects:
        project_tasks = [task for task in tasks if task.project_id == project.id]
        done = sum(1 for task in project_tasks if task.status in DONE_STATES)
        workload.append(ProjectWorkload(
            project_id=project.id,
            project_name=project.name,
            total_tasks=len(project_tasks),
            completed_tasks=done,
            progress_percentage=round(done / len(project_tasks) * 100) if project_tasks else 0,
            deadline=project.deadline,
            priority=project.priority,
        ))

    reads = task_reads(db, tasks)
    return Dashboard(
        user_role=current_user.role,
        tasks=TaskCounts(
            total=len(tasks),
            completed=sum(1 for task in tasks if task.status in DONE_STATES),
            in_progress=sum(1 for task in tasks if task.status == TaskStatus.IN_PROGRESS),
            new_tasks=sum(1 for task in tasks if task.status == TaskStatus.NEW_TASK),
            today_tasks=[read for read in reads if read.deadline <= end_of_today],
            recent_tasks=reads[:10],
        ),
        projects=ProjectSummary(total=len(projects), workload=workload),
    )


@router.get("", response_model=List[TaskRead])
def list_tasks(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Retrieve a paginated list of tasks, newest first.

    Project managers see the tasks they created. Employees see the tasks
    assigned to them.
    """
    statement = (
        task_list_statement(current_user)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return task_reads(db, db.exec(statement).all())


@router.get("/project/{project_id}", response_model=List[TaskRead])
def list_project_tasks(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Tasks belonging to one project.

    The project's own manager sees all of them; anyone else sees only the
    ones assigned to them.
    """
    project = db.get(Project, project_id)
    if not project:
        raise NotFoundError("Project not found")

    statement = select(Task).where(Task.project_id == project_id)
    if not (current_user.is_manager and project.project_manager == current_user.id):
        statement = statement.where(Task.assignee == current_user.id)

    statement = statement.order_by(Task.created_at.desc(), Task.id.desc())
    return task_reads(db, db.exec(statement).all())


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Get a specific task by ID.

    Readable by its assignee, its creator, and any project manager.
    """
    task = _get_readable_task(db, task_id, current_user)
    return task_read(db, task)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
):
    """
    Create a new task and notify its assignee.

    Only project managers can create tasks. When project_id is given the
    project must exist and be managed by the current user.

    The assignee notification is best-effort: if writing it fails the task is
    still created and the failure is only logged.

    Raises:
        ValidationError: If the assignee or project does not exist
        AuthorizationError: If the project belongs to another manager
    """
    if not db.get(User, task_in.assignee):
        raise ValidationError("Assignee not found", fields=["assignee"])

    if task_in.project_id is not None:
        project = db.get(Project, task_in.project_id)
        if not project:
            raise ValidationError("Project not found", fields=["project_id"])
        if project.project_manager != current_user.id:
            raise AuthorizationError("You can only create tasks for projects you manage")

    task = Task(**task_in.model_dump(), created_by=current_user.id)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task %s created by %s for %s", task.id, current_user.id, task.assignee)

    notify_task_assigned(db, task)

    return task_read(db, task)


@router.patch("/{task_id}/status", response_model=TaskRead)
def update_task_status(
    task_id: int,
    status_in: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Move a task one step along its workflow.

    The assignee moves new_task -> in_progress -> completed; the manager who
    created the task moves completed -> approved. Everything else is rejected.

    The write is a single conditional UPDATE keyed on the task id, the status
    the decision was made against, and the acting user's relation to the task
    (assignee or creator). If another request changed the task in between, no
    row matches and the request fails as an invalid transition.

    Raises:
        NotFoundError: If the task does not exist
        AuthorizationError: If the current user may not perform this step
        InvalidTransitionError: If the step is not allowed from the current status
    """
    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task not found")

    target = status_in.status
    current = TaskStatus(task.status)
    try:
        authority = workflow.check_transition(task, current_user, target)
    except (AuthorizationError, InvalidTransitionError) as exc:
        logger.info(
            "Rejected transition of task %s from %s to %s by %s: %s",
            task_id, current.value, target.value, current_user.id, exc.message,
        )
        raise

    if authority == workflow.Authority.ASSIGNEE:
        ownership_guard = Task.assignee == current_user.id
    else:
        ownership_guard = Task.created_by == current_user.id

    statement = (
        update(Task)
        .where(Task.id == task_id, Task.status == current.value, ownership_guard)
        .values(status=target.value, updated_at=utcnow())
    )
    result = db.exec(statement)
    if result.rowcount != 1:
        db.rollback()
        raise InvalidTransitionError("Task status was changed by another request; reload and retry")
    db.commit()

    db.refresh(task)
    logger.info("Task %s moved from %s to %s by %s", task_id, current.value, target.value, current_user.id)
    return task_read(db, task)


@router.get("/{task_id}/comments", response_model=List[CommentRead])
def list_task_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Comments on a task, oldest first. Same access as reading the task."""
    _get_readable_task(db, task_id, current_user)
    return list_comments(db, TaskRef(id=task_id))


@router.post("/{task_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def create_task_comment(
    task_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    _get_readable_task(db, task_id, current_user)
    return add_comment(db, TaskRef(id=task_id), current_user, comment_in.content)


@router.get("/{task_id}/files", response_model=List[FileAttachmentRead])
def list_task_files(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    _get_readable_task(db, task_id, current_user)
    statement = (
        select(FileAttachment)
        .where(FileAttachment.task_id == task_id)
        .order_by(FileAttachment.created_at, FileAttachment.id)
    )
    return file_reads(db, db.exec(statement).all())


@router.post("/{task_id}/files", response_model=FileAttachmentRead, status_code=status.HTTP_201_CREATED)
def upload_task_file(
    task_id: int,
    file_in: FileAttachmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Attach a file to a task.

    Only the task's assignee can upload. The metadata body is validated
    (required fields, 10 MiB size limit) before anything is stored.
    """
    task = _get_readable_task(db, task_id, current_user)
    if task.assignee != current_user.id:
        logger.info("Upload to task %s refused for non-assignee %s", task_id, current_user.id)
        raise AuthorizationError("Only the task assignee can upload files")

    attachment = FileAttachment(**file_in.model_dump(), task_id=task_id, uploaded_by=current_user.id)
    db.add(attachment)
    db.commit()
    db.refresh(attachment)
    logger.info("File %s (%s bytes) attached to task %s", attachment.file_name, attachment.file_size, task_id)
    return file_reads(db, [attachment])[0]

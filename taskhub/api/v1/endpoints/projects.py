"""
Project Endpoints Module

This module provides CRUD endpoints for managing projects. Every authenticated
user can list and read projects; only the owning project manager can modify
or delete one.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy import update
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.api.comments import add_comment, list_comments
from taskhub.api.readers import project_read, project_reads
from taskhub.core.errors import NotFoundError, ValidationError
from taskhub.core.logging import get_logger
from taskhub.core.permissions import ensure_project_owner
from taskhub.core.timeutil import utcnow
from taskhub.db.session import get_db
from taskhub.models.project import Project
from taskhub.models.related import ProjectRef
from taskhub.models.task import Task
from taskhub.models.user import User, UserRole
from taskhub.schemas.comment import CommentCreate, CommentRead
from taskhub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter()
logger = get_logger(__name__)


def _get_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


@router.get("", response_model=List[ProjectRead])
def list_projects(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Retrieve a paginated list of projects, newest first.

    All authenticated users see all projects; clients narrow the view.

    Args:
        skip: Number of records to skip (for pagination)
        limit: Maximum number of records to return
        db: Database session
        current_user: Currently authenticated user

    Returns:
        List[ProjectRead]: Projects with the manager's name filled in
    """
    statement = (
        select(Project)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return project_reads(db, db.exec(statement).all())


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Get a specific project by ID.

    Raises:
        NotFoundError: If the project doesn't exist
    """
    return project_read(db, _get_project(db, project_id))


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
):
    """
    Create a new project.

    Only project managers can create projects. The project_manager field is
    checked against the users table: it must name an existing user with the
    project_manager role. It does not have to be the caller.

    Raises:
        ValidationError: If project_manager is not an existing project manager
    """
    owner = db.get(User, project_in.project_manager)
    if not owner or owner.role != UserRole.PROJECT_MANAGER:
        raise ValidationError("Invalid project manager", fields=["project_manager"])

    if owner.id != current_user.id:
        logger.warning(
            "Manager %s created a project on behalf of manager %s", current_user.id, owner.id
        )

    project = Project(**project_in.model_dump())
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s created by %s", project.id, current_user.id)
    return project_read(db, project)


@router.put("/{project_id}", response_model=ProjectRead)
@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Update an existing project.

    Only the owning project manager can update it. Only fields present in the
    body are changed, and all of them are written in one statement.

    Raises:
        NotFoundError: If the project doesn't exist
        AuthorizationError: If the user is not the project's manager
    """
    project = _get_project(db, project_id)
    ensure_project_owner(current_user, project)

    update_data = project_in.model_dump(exclude_unset=True)
    if not update_data:
        return project_read(db, project)

    statement = (
        update(Project)
        .where(Project.id == project_id, Project.project_manager == current_user.id)
        .values(**update_data, updated_at=utcnow())
    )
    result = db.exec(statement)
    if result.rowcount != 1:
        # Ownership changed or the project vanished since it was read
        db.rollback()
        raise NotFoundError("Project not found")
    db.commit()

    db.refresh(project)
    return project_read(db, project)


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Delete a project.

    Only the owning project manager can delete it. Tasks in the project are
    kept and detached (their project_id is cleared) in the same transaction.

    Returns:
        dict: Success message
    """
    project = _get_project(db, project_id)
    ensure_project_owner(current_user, project)

    db.exec(update(Task).where(Task.project_id == project_id).values(project_id=None))
    db.delete(project)
    db.commit()
    logger.info("Project %s deleted by %s", project_id, current_user.id)
    return {"status": "success", "detail": "Project deleted"}


@router.get("/{project_id}/comments", response_model=List[CommentRead])
def list_project_comments(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Comments on a project, oldest first."""
    _get_project(db, project_id)
    return list_comments(db, ProjectRef(id=project_id))


@router.post("/{project_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def create_project_comment(
    project_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    _get_project(db, project_id)
    return add_comment(db, ProjectRef(id=project_id), current_user, comment_in.content)

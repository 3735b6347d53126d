"""
User Management Endpoints Module

Profile reads and edits are allowed on your own profile, or on anyone's when
you are a project manager. Listing users and the per-user project/task views
are for project managers only.
"""
from typing import Any, List
from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.api.readers import project_reads, task_reads
from taskhub.core.errors import NotFoundError, ValidationError
from taskhub.core.permissions import ensure_profile_access
from taskhub.db.session import get_db
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.user import User
from taskhub.schemas.project import ProjectRead
from taskhub.schemas.task import TaskRead
from taskhub.schemas.user import UserRead, UserUpdate

router = APIRouter()


def _get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("", response_model=List[UserRead])
def read_users(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(deps.get_current_manager),
) -> Any:
    """
    Retrieve a paginated list of all users.

    Only project managers can access this endpoint.
    """
    statement = select(User).order_by(User.created_at, User.id).offset(skip).limit(limit)
    return db.exec(statement).all()


@router.get("/me", response_model=UserRead)
def read_user_me(
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Get the current authenticated user's profile.
    """
    return current_user


@router.get("/{user_id}", response_model=UserRead)
def read_user_by_id(
    user_id: str,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(get_db),
) -> Any:
    """
    Get a specific user by ID.

    Users can retrieve their own profile. Project managers can retrieve any
    profile.

    Raises:
        AuthorizationError: If the caller may not view this profile
        NotFoundError: If the user doesn't exist
    """
    ensure_profile_access(current_user, user_id, "view")
    return _get_user(db, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    user_in: UserUpdate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Update a user's profile.

    Users can edit their own profile; project managers can edit anyone's.
    Role cannot be changed here. A new email must not belong to any other user.

    Raises:
        AuthorizationError: If the caller may not edit this profile
        NotFoundError: If the user doesn't exist
        ValidationError: If the email is already in use
    """
    ensure_profile_access(current_user, user_id, "edit")
    db_user = _get_user(db, user_id)

    # Get update data, excluding unset fields
    update_data = user_in.model_dump(exclude_unset=True)

    new_email = update_data.get("email")
    if new_email is not None and new_email != db_user.email:
        taken = db.exec(
            select(User).where(User.email == new_email, User.id != db_user.id)
        ).first()
        if taken:
            raise ValidationError("Email is already in use by another user", fields=["email"])

    for field, value in update_data.items():
        setattr(db_user, field, value)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("/{user_id}/projects", response_model=List[ProjectRead])
def read_user_projects(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
) -> Any:
    """
    Projects related to a user.

    For a project manager, the projects they own. For an employee, the
    projects that contain tasks assigned to them.
    """
    target = _get_user(db, user_id)

    if target.is_manager:
        statement = select(Project).where(Project.project_manager == target.id)
    else:
        assigned_project_ids = select(Task.project_id).where(
            Task.assignee == target.id, Task.project_id.is_not(None)
        )
        statement = select(Project).where(Project.id.in_(assigned_project_ids))

    statement = statement.order_by(Project.created_at.desc(), Project.id.desc())
    return project_reads(db, db.exec(statement).all())


@router.get("/{user_id}/tasks", response_model=List[TaskRead])
def read_user_tasks(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
) -> Any:
    """
    Tasks related to a user: created by them if they are a project manager,
    assigned to them otherwise.
    """
    target = _get_user(db, user_id)

    if target.is_manager:
        statement = select(Task).where(Task.created_by == target.id)
    else:
        statement = select(Task).where(Task.assignee == target.id)

    statement = statement.order_by(Task.created_at.desc(), Task.id.desc())
    return task_reads(db, db.exec(statement).all())

"""
Time Log Endpoints Module

Read-only access to the login records written by /auth/login.
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.api.readers import timelog_reads
from taskhub.db.session import get_db
from taskhub.models.timelog import TimeLog
from taskhub.models.user import User
from taskhub.schemas.timelog import TimeLogRead

router = APIRouter()


@router.get("/user", response_model=List[TimeLogRead])
def read_own_time_logs(
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """The current user's logins, newest first."""
    statement = (
        select(TimeLog)
        .where(TimeLog.user_id == current_user.id)
        .order_by(TimeLog.login_timestamp.desc(), TimeLog.id.desc())
        .limit(limit)
    )
    return timelog_reads(db, db.exec(statement).all())


@router.get("/all", response_model=List[TimeLogRead])
def read_all_time_logs(
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_manager),
):
    """Everyone's logins, newest first. Project managers only."""
    statement = (
        select(TimeLog)
        .order_by(TimeLog.login_timestamp.desc(), TimeLog.id.desc())
        .limit(limit)
    )
    return timelog_reads(db, db.exec(statement).all())

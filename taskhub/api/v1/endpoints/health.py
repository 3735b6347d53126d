from fastapi import APIRouter, Depends
from typing import Any
from sqlalchemy import text
from sqlmodel import Session

from taskhub.db.session import get_db

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint. Runs a trivial query so an unreachable database
    shows up as a 503 here.
    """
    db.exec(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}

from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from taskhub.core.timeutil import utcnow


class TimeLog(SQLModel, table=True):
    """Append-only record of a successful login. Never updated."""
    __tablename__ = "login_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    login_timestamp: datetime = Field(default_factory=utcnow, index=True)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

from datetime import datetime
from typing import Optional

from taskhub.schemas.base import ReadModel


class TimeLogRead(ReadModel):
    id: int
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    login_timestamp: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

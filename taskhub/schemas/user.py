from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from taskhub.models.user import UserRole
from taskhub.schemas.base import ReadModel, RequestModel, not_null


# Properties to receive via API on update. Role is not editable.
class UserUpdate(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def check_not_null(cls, v):
        return not_null(v)


# Properties to return to client
class UserRead(ReadModel):
    id: str
    email: EmailStr
    name: str
    role: UserRole
    phone: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from taskhub.models.user import UserRole
from taskhub.schemas.base import RequestModel
from taskhub.schemas.user import UserRead


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    sub: Optional[str] = None  # user id


class UserRegister(RequestModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: UserRole = UserRole.EMPLOYEE


class AuthResponse(Token):
    user: UserRead

"""
User Model Module

This module defines the User model and UserRole enumeration for authentication
and authorization throughout the application.
"""
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field, AutoString
import uuid
from datetime import datetime

from taskhub.core.timeutil import utcnow


class UserRole(str, Enum):
    """
    The two roles a user can hold. Closed set: anything else is rejected at
    the API boundary.

    - EMPLOYEE: works on tasks assigned to them (default role)
    - PROJECT_MANAGER: owns projects, creates and approves tasks, and can
      read and edit any user profile
    """
    EMPLOYEE = "employee"
    PROJECT_MANAGER = "project_manager"


class User(SQLModel, table=True):
    """
    User model representing authenticated users in the system.

    Users are identified by UUID and authenticated via email/password. The role
    is fixed at signup and drives every permission check in the API.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each user
        email: User's email address, used for authentication (required, unique, indexed)
        password: Hashed password for authentication
        name: Display name
        role: UserRole assigned at signup (default: EMPLOYEE)
        phone, department, bio, avatar_url: Optional profile fields
        created_at: UTC timestamp when the user account was created
    """
    __tablename__ = "users"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Authentication fields
    email: str = Field(unique=True, index=True, nullable=False)
    password: Optional[str] = None  # Hashed password

    # Profile information
    name: str = Field(nullable=False)
    phone: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    # Authorization - stored as its string value
    role: UserRole = Field(default=UserRole.EMPLOYEE, sa_type=AutoString, nullable=False)

    # Audit timestamp
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_manager(self) -> bool:
        """Helper to check if user holds the project manager role."""
        return self.role == UserRole.PROJECT_MANAGER

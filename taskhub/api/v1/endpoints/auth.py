"""
Authentication Endpoints Module

This module provides signup, login and token verification. Tokens are JWT
bearer tokens whose subject is the user id. Every successful login appends a
TimeLog entry.
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from taskhub.api import deps
from taskhub.core.errors import AuthenticationError, ValidationError
from taskhub.core.logging import get_logger
from taskhub.core.security import create_access_token, get_password_hash, verify_password
from taskhub.db.session import get_db
from taskhub.models.timelog import TimeLog
from taskhub.models.user import User
from taskhub.schemas.auth import AuthResponse, Token, UserRegister
from taskhub.schemas.user import UserRead

router = APIRouter()
logger = get_logger(__name__)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(user_in: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account and return an access token for it.

    The role is chosen at signup (employee by default) and cannot be changed
    afterwards.

    Raises:
        ValidationError: If a user with this email already exists
    """
    # Check if email is already registered
    existing = db.exec(select(User).where(User.email == user_in.email)).first()
    if existing:
        raise ValidationError("User with this email already exists.", fields=["email"])

    # Create new user with hashed password
    db_user = User(
        email=user_in.email,
        password=get_password_hash(user_in.password),
        name=user_in.name,
        role=user_in.role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Registered user %s as %s", db_user.id, db_user.role)

    return {
        "access_token": create_access_token(subject=db_user.id),
        "token_type": "bearer",
        "user": db_user,
    }


@router.post("/login", response_model=Token)
def login(request: Request, db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Authenticate a user and issue an access token.

    Note: OAuth2PasswordRequestForm uses 'username' field, but we treat it as email.

    Returns:
        Token: Object containing the access_token and token_type

    Raises:
        AuthenticationError: If credentials are invalid
    """
    # Look up user by email (form_data.username contains the email)
    user = db.exec(select(User).where(User.email == form_data.username)).first()

    # Verify user exists and password is correct
    if not user or not verify_password(form_data.password, user.password):
        logger.info("Failed login attempt for %s", form_data.username)
        raise AuthenticationError("Incorrect email or password")

    # Append-only login record
    db.add(TimeLog(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    ))
    db.commit()

    return {"access_token": create_access_token(subject=user.id), "token_type": "bearer"}


@router.get("/verify", response_model=UserRead)
def verify(current_user: User = Depends(deps.get_current_user)):
    """Return the user the presented token belongs to."""
    return current_user

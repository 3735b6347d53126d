"""
API Dependencies Module

This module provides FastAPI dependency functions for authentication and authorization.
Every protected route resolves the caller from a bearer token before its handler runs.
"""
from typing import List, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from taskhub.core.config import settings
from taskhub.core.errors import AuthenticationError, AuthorizationError
from taskhub.core.logging import get_logger
from taskhub.db.session import get_db
from taskhub.models.user import User, UserRole
from taskhub.schemas.auth import TokenData

logger = get_logger(__name__)

# Configure OAuth2 scheme to use the login endpoint
# auto_error=False so a missing header goes through the same AuthenticationError path
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)


def get_current_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2)
) -> User:
    """
    Dependency that retrieves and validates the current authenticated user.

    The token subject is the user id. Missing tokens, bad signatures, expired
    tokens and tokens for users that no longer exist all produce the same
    401 response, so callers learn nothing about which check failed.

    Args:
        db: Database session
        token: Optional bearer token from Authorization header

    Returns:
        User: The authenticated user object

    Raises:
        AuthenticationError: If no valid authentication token is provided
    """
    if not token:
        raise AuthenticationError()

    # Decode and validate the JWT token
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        token_data = TokenData(sub=payload.get("sub"))
    except (JWTError, PydanticValidationError):
        logger.debug("Rejected token that failed to decode")
        raise AuthenticationError("Could not validate credentials")

    if not token_data.sub:
        raise AuthenticationError("Could not validate credentials")

    user = db.get(User, token_data.sub)
    if not user:
        logger.debug("Rejected token for unknown user %s", token_data.sub)
        raise AuthenticationError("Could not validate credentials")
    return user


class RoleChecker:
    """
    Dependency factory for checking user roles.

    Usage: Depends(RoleChecker([UserRole.PROJECT_MANAGER]))
    """
    def __init__(self, allowed_roles: List[UserRole], message: Optional[str] = None):
        self.allowed_roles = allowed_roles
        self.message = message

    def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in self.allowed_roles:
            raise AuthorizationError(
                self.message
                or f"The user does not have enough privileges. Required roles: {[r.value for r in self.allowed_roles]}"
            )
        return current_user


# Dependency that requires the current user to be a project manager
get_current_manager = RoleChecker([UserRole.PROJECT_MANAGER], "Project manager access required")

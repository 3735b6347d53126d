"""
API Error Module

Every rule violation in the API is raised as one of these HTTPException
subclasses. Each carries a structured detail of the form
``{"code": ..., "message": ...}`` so clients can tell the cases apart
(for example an invalid status transition from a permission failure)
without parsing messages.
"""
from typing import Dict, List, Optional

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base class for all domain errors raised by endpoints."""
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.code, "message": self.message},
            headers=headers,
        )


class ValidationError(APIError):
    """
    Input was well-formed JSON but failed a domain check.

    ``fields`` names the offending request fields, e.g. ``["assignee"]``.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"
    default_message = "Invalid input"

    def __init__(self, message: Optional[str] = None, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []
        self.detail["fields"] = self.fields


class AuthenticationError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    default_message = "Not authenticated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "not_authorized"
    default_message = "Not authorized"


class NotFoundError(APIError):
    # Also used for entities outside the requester's visibility
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class InvalidTransitionError(APIError):
    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"
    default_message = "Invalid status transition"


class UpstreamUnavailableError(APIError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "upstream_unavailable"
    default_message = "Database temporarily unavailable. Please try again later."

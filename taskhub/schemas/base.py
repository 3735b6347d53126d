"""
Shared pieces for request and response schemas.

Request records forbid unknown fields and strip surrounding whitespace from
strings, so a body made only of blanks fails the same way a missing one does.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from taskhub.core.config import settings
from taskhub.core.timeutil import as_utc_naive, utcnow


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def future_deadline(value: datetime) -> datetime:
    """Normalize to naive UTC and require the instant to be strictly after now."""
    value = as_utc_naive(value)
    if value <= utcnow():
        raise ValueError("Deadline must be in the future")
    return value


def within_upload_limit(value: int) -> int:
    if value <= 0:
        raise ValueError("File size must be greater than 0")
    if value > settings.MAX_UPLOAD_SIZE:
        limit_mib = settings.MAX_UPLOAD_SIZE / (1024 * 1024)
        raise ValueError(f"File size must not exceed {limit_mib:g} MiB")
    return value


def not_null(value):
    """Partial updates may leave a field out, but not clear a required one."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value

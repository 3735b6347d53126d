"""
Related Entity References

Comments and notifications point at exactly one parent entity, either a
project or a task. In the database this is a (related_type, related_id)
column pair; in Python it is the discriminated union ``RelatedRef``.
"""
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class RelatedType(str, Enum):
    PROJECT = "project"
    TASK = "task"


class ProjectRef(BaseModel):
    kind: Literal["project"] = "project"
    id: int


class TaskRef(BaseModel):
    kind: Literal["task"] = "task"
    id: int


RelatedRef = Annotated[Union[ProjectRef, TaskRef], Field(discriminator="kind")]


def make_ref(related_type: Optional[str], related_id: Optional[int]) -> Optional[Union[ProjectRef, TaskRef]]:
    """Rebuild a reference from its stored column pair."""
    if related_type is None or related_id is None:
        return None
    if related_type == RelatedType.PROJECT:
        return ProjectRef(id=related_id)
    if related_type == RelatedType.TASK:
        return TaskRef(id=related_id)
    raise ValueError(f"Unknown related_type: {related_type!r}")


def ref_columns(ref: Union[ProjectRef, TaskRef]):
    """Split a reference into its (related_type, related_id) column pair."""
    return RelatedType(ref.kind), ref.id

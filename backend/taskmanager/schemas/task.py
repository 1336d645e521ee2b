# taskmanager/schemas/task.py
"""
Pydantic schemas for task endpoints.
"""
from typing import Optional

from pydantic import BaseModel, field_validator

from taskmanager.models.task import DESCRIPTION_MAX_LENGTH
from .common import not_blank


def _check_description(value: str) -> str:
    value = not_blank(value, "description")
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"The maximum description length is {DESCRIPTION_MAX_LENGTH} characters.")
    return value


class TaskCreateIn(BaseModel):
    """
    Request model for task creation.
    owner/id keys in the payload are ignored: the owner always comes from
    the authenticated user.
    """
    name: str
    description: str
    notes: str = ""
    priority: str = "Low"
    completed: bool = False

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return not_blank(v, "name")

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return _check_description(v)

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: str) -> str:
        return v.strip()


class TaskUpdateIn(BaseModel):
    """Request model for task update; every supplied field must be non-null."""
    name: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("name", "description", "notes", "priority", "completed")
    @classmethod
    def _checked(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if info.field_name == "name":
            return not_blank(v, "name")
        if info.field_name == "description":
            return _check_description(v)
        if info.field_name == "notes":
            return v.strip()
        return v

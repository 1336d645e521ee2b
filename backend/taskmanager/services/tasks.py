"""
Task ownership model.

Every query goes through _owned(), which filters by the requesting user.
A task owned by someone else is reported exactly like a missing one.
"""
import uuid
from typing import Any

from taskmanager.core.errors import NotFound, ValidationError
from taskmanager.models.task import Task
from taskmanager.models.user import User
from taskmanager.schemas.common import validate_payload
from taskmanager.schemas.task import TaskCreateIn, TaskUpdateIn

ALLOWED_TASK_UPDATES = frozenset({"name", "description", "notes", "priority", "completed"})

# sortBy key -> model field
SORTABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "notes": "notes",
    "priority": "priority",
    "completed": "completed",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


def _parse_id(task_id: Any) -> uuid.UUID:
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        # A malformed id can't match any task
        raise NotFound() from None


def _owned(owner: User):
    return Task.filter(owner=owner)


def parse_sort(sort_by: str | None) -> list[str]:
    """
    Translate "field:desc" / "field:asc" / "field" into order_by arguments.

    Raises:
        ValidationError: Unknown field
    """
    if not sort_by:
        return ["created_at"]
    parts = sort_by.split(":")
    field = SORTABLE_FIELDS.get(parts[0])
    if field is None:
        raise ValidationError(f"Cannot sort by '{parts[0]}'", code="INVALID_SORT")
    direction = parts[1] if len(parts) > 1 else "asc"
    ordering = [f"-{field}" if direction == "desc" else field]
    if field != "created_at":
        ordering.append("created_at")  # stable tie-break
    return ordering


async def create_task(owner: User, data: Any) -> Task:
    body = validate_payload(TaskCreateIn, data)
    # owner always comes from the authenticated user, never from the payload
    return await Task.create(**body.model_dump(), owner=owner)


async def get_task(owner: User, task_id: Any) -> Task:
    task = await _owned(owner).get_or_none(id=_parse_id(task_id))
    if task is None:
        raise NotFound()
    return task


async def list_tasks(
    owner: User,
    completed: str | None = None,
    sort_by: str | None = None,
    limit: int | None = None,
    skip: int | None = None,
) -> list[Task]:
    """
    Tasks of the owner, optionally filtered by completion, sorted and paginated.

    completed: "true" selects done tasks, any other value selects open ones.
    limit: None or 0 means no limit.
    """
    query = _owned(owner)
    if completed:
        query = query.filter(completed=(completed == "true"))
    query = query.order_by(*parse_sort(sort_by))
    if skip:
        query = query.offset(skip)
    if limit:
        query = query.limit(limit)
    return await query


async def update_task(owner: User, task_id: Any, data: Any) -> Task:
    """
    Update allow-listed fields of an owned task.

    All-or-nothing: an unknown key or an invalid value leaves the task as is.
    """
    task = await get_task(owner, task_id)
    if not isinstance(data, dict) or not set(data) <= ALLOWED_TASK_UPDATES:
        raise ValidationError("Invalid updates.", code="INVALID_UPDATES")
    body = validate_payload(TaskUpdateIn, data)
    for field, value in body.model_dump(include=body.model_fields_set).items():
        setattr(task, field, value)
    await task.save()
    return task


async def delete_task(owner: User, task_id: Any) -> Task:
    task = await get_task(owner, task_id)
    await task.delete()
    return task


async def delete_tasks_of(owner: User) -> int:
    """Remove every task of a user. Returns the number of deleted rows."""
    return await _owned(owner).delete()

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from taskmanager.api.v1.deps import get_current_user
from taskmanager.models.user import User
from taskmanager.services import tasks

router = APIRouter(prefix="/tasks", tags=["tasks"])

# ===== Routes =====
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(data: dict[str, Any] = Body(...), user: User = Depends(get_current_user)):
    """
    Create a task owned by the authenticated user.

    Any owner supplied in the payload is ignored.

    Raises:
        ValidationError (400): missing name/description or description > 50 chars
    """
    task = await tasks.create_task(user, data)
    return {"success": True, "data": task.to_dict()}

@router.get("")
async def list_tasks(
    user: User = Depends(get_current_user),
    completed: str | None = Query(default=None),
    sortBy: str | None = Query(default=None, description="field:asc|desc, e.g. createdAt:desc"),
    limit: int | None = Query(default=None, ge=0),
    skip: int | None = Query(default=None, ge=0),
):
    """
    List the authenticated user's tasks.

    Args:
        completed: "true" for done tasks, any other value for open ones
        sortBy: sort key and optional direction separated by ":"
        limit: Maximum number of tasks (0 or absent means no limit)
        skip: Number of tasks to skip
    """
    rows = await tasks.list_tasks(user, completed=completed, sort_by=sortBy, limit=limit, skip=skip)
    return {"success": True, "data": [t.to_dict() for t in rows]}

@router.get("/{task_id}")
async def get_task(task_id: str, user: User = Depends(get_current_user)):
    """
    Raises:
        NotFound (404): task missing or owned by another user
    """
    task = await tasks.get_task(user, task_id)
    return {"success": True, "data": task.to_dict()}

@router.patch("/{task_id}")
async def update_task(task_id: str, data: dict[str, Any] = Body(...), user: User = Depends(get_current_user)):
    """
    Update name, description, notes, priority and/or completed.

    Any other key fails the whole update with 400.
    """
    task = await tasks.update_task(user, task_id, data)
    return {"success": True, "data": task.to_dict()}

@router.delete("/{task_id}")
async def delete_task(task_id: str, user: User = Depends(get_current_user)):
    task = await tasks.delete_task(user, task_id)
    return {"success": True, "data": task.to_dict()}

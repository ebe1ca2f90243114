"""
Task endpoints for API v1.

Tasks are always addressed through their project:
``/projects/{project_id}/tasks[/{task_id}]``.  A task id used under
the wrong project answers 404 exactly like an unknown id.  Malformed
ids in the path answer 400.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from task_tracker_api.app.api.v1.errors import http_error
from task_tracker_api.app.core.errors import DomainError
from task_tracker_api.app.schemas.task import TaskCreate, TaskListParams, TaskRead, TaskUpdate
from task_tracker_api.app.services.task_service import TaskService

router = APIRouter()


@router.get("/projects/{project_id}/tasks", response_model=List[TaskRead])
async def list_tasks(
    project_id: UUID,
    task_status: Optional[str] = Query(None, alias="status", description="TODO, IN_PROGRESS or DONE (any case)"),
    q: Optional[str] = Query(None, description="Substring to look for in task titles"),
    limit: Optional[int] = Query(None, description="Page size, clamped to 1..200; 0 or missing means 50"),
    offset: Optional[int] = Query(None, description="Number of tasks to skip; negative means 0"),
) -> List[TaskRead]:
    """List a project's tasks, most recently updated first.

    - **status**: keep only tasks with this status; an unknown value is a 400.
    - **q**: keep only tasks whose title contains this text.
    - **limit**, **offset**: pagination.
    """
    params = TaskListParams(status=task_status, q=q, limit=limit, offset=offset)
    try:
        return await TaskService.list_tasks(str(project_id), params)
    except DomainError as e:
        raise http_error(e) from e


@router.post("/projects/{project_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(project_id: UUID, task_in: TaskCreate) -> TaskRead:
    """Create a task in the project.

    Returns 400 for a blank or too long title or an unknown status and
    404 if the project does not exist.
    """
    try:
        return await TaskService.create_task(str(project_id), task_in)
    except DomainError as e:
        raise http_error(e) from e


@router.get("/projects/{project_id}/tasks/{task_id}", response_model=TaskRead)
async def get_task(project_id: UUID, task_id: UUID) -> TaskRead:
    """Retrieve a single task.  Raises 404 unless it belongs to the project."""
    try:
        return await TaskService.get_task(str(project_id), str(task_id))
    except DomainError as e:
        raise http_error(e) from e


@router.put("/projects/{project_id}/tasks/{task_id}", response_model=TaskRead)
async def update_task(project_id: UUID, task_id: UUID, updates: Optional[TaskUpdate] = None) -> TaskRead:
    """Update an existing task.

    Partial updates are supported; unspecified fields remain unchanged.
    An empty body returns the task as it is.
    """
    try:
        return await TaskService.update_task(str(project_id), str(task_id), updates)
    except DomainError as e:
        raise http_error(e) from e


@router.delete("/projects/{project_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(project_id: UUID, task_id: UUID) -> None:
    """Delete a task.  A second delete of the same task answers 404."""
    try:
        await TaskService.delete_task(str(project_id), str(task_id))
    except DomainError as e:
        raise http_error(e) from e
    return None

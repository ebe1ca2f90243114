"""
Business logic for tasks.

Every operation follows the same order: validate what can be checked
locally, then confirm the owning project exists, then talk to the
task table.  Single tasks are always addressed by ``(task_id,
project_id)``; a task looked up through the wrong project is reported
exactly like a missing one.

Status has no transition graph: any valid status may replace any
other.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.db import ConstraintViolation
from ..core.errors import InvalidStatus, ProjectNotFound, TaskNotFound
from ..core.timeutil import format_timestamp, utcnow
from ..repositories.query import TaskFilter, UpdateStatement
from ..repositories.task_repository import TaskRepository
from ..schemas.task import TaskCreate, TaskListParams, TaskRead, TaskStatus, TaskUpdate
from .common import storage_failures
from .project_service import ProjectService
from .validation import (
    clamp_pagination_limit,
    normalize_description,
    normalize_offset,
    normalize_status,
    normalize_task_title,
)

logger = logging.getLogger(__name__)


def _require_status(raw: str) -> str:
    status = normalize_status(raw)
    if status is None:
        logger.debug("Rejected task status %r", raw)
        raise InvalidStatus()
    return status


class TaskService:
    """Service for creating, reading, listing, updating and deleting tasks."""

    @classmethod
    async def create_task(cls, project_id: str, data: TaskCreate, now: Optional[datetime] = None) -> TaskRead:
        """Create a task inside ``project_id``.

        Status defaults to ``TODO``; a supplied status is normalised
        case‑insensitively.  A blank description is stored as absent.

        Raises
        ------
        EmptyTitle, TitleTooLong, InvalidStatus
            Before any store access.
        ProjectNotFound
            If the project does not exist (also when it disappears
            between the check and the insert).
        """
        title = normalize_task_title(data.title)
        status = TaskStatus.TODO.value if data.status is None else _require_status(data.status)
        description = normalize_description(data.description)

        await ProjectService.ensure_project_exists(project_id)

        created_at = now or utcnow()
        task = TaskRead(
            id=uuid.uuid4(),
            project_id=project_id,
            title=title,
            description=description,
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        with storage_failures("create task"):
            try:
                await asyncio.to_thread(TaskRepository.create, task)
            except ConstraintViolation as exc:
                if exc.kind == "foreign_key":
                    raise ProjectNotFound() from exc
                raise
        logger.info("Created task %s in project %s", task.id, project_id)
        return task

    @classmethod
    async def get_task(cls, project_id: str, task_id: str) -> TaskRead:
        """Fetch a task by its composite key; ``TaskNotFound`` if it does not match."""
        with storage_failures("get task"):
            task = await asyncio.to_thread(TaskRepository.get, task_id, project_id)
        if task is None:
            logger.debug("Task %s not found in project %s", task_id, project_id)
            raise TaskNotFound()
        return task

    @classmethod
    async def list_tasks(cls, project_id: str, params: Optional[TaskListParams] = None) -> List[TaskRead]:
        """Return a page of the project's tasks, most recently updated first.

        - ``status`` keeps only tasks with that status; an invalid value
          fails the whole call with ``InvalidStatus``.
        - ``q`` keeps tasks whose title contains it; blank means no filter.
        - ``limit`` is clamped to 1..200 (0 or missing selects 50) and a
          negative or missing ``offset`` becomes 0.
        """
        params = params or TaskListParams()
        status = None if params.status is None else _require_status(params.status)
        search = (params.q or "").strip() or None

        await ProjectService.ensure_project_exists(project_id)

        task_filter = TaskFilter(
            project_id=project_id,
            status=status,
            search=search,
            limit=clamp_pagination_limit(params.limit),
            offset=normalize_offset(params.offset),
        )
        with storage_failures("list tasks"):
            return await asyncio.to_thread(TaskRepository.list, task_filter)

    @classmethod
    async def update_task(
        cls,
        project_id: str,
        task_id: str,
        patch: Optional[TaskUpdate] = None,
        now: Optional[datetime] = None,
    ) -> TaskRead:
        """Apply a partial update and return the task.

        Only supplied fields are validated and written, together with a
        fresh ``updated_at``.  An empty patch is a plain read and leaves
        ``updated_at`` untouched.

        Raises
        ------
        EmptyTitle, TitleTooLong, InvalidStatus
            Before any store access.
        ProjectNotFound
            If the project does not exist.
        TaskNotFound
            If no task matches ``(task_id, project_id)``.
        """
        supplied = patch.supplied() if patch is not None else {}
        changes: Dict[str, Any] = {}
        if "title" in supplied:
            changes["title"] = normalize_task_title(supplied["title"])
        if "description" in supplied:
            changes["description"] = normalize_description(supplied["description"])
        if "status" in supplied:
            changes["status"] = _require_status(supplied["status"])

        await ProjectService.ensure_project_exists(project_id)

        if not changes:
            return await cls.get_task(project_id, task_id)

        changes["updated_at"] = format_timestamp(now or utcnow())
        statement = UpdateStatement(task_id=task_id, project_id=project_id, changes=changes)
        with storage_failures("update task"):
            affected = await asyncio.to_thread(TaskRepository.update, statement)
        if affected == 0:
            logger.debug("Task %s not found in project %s", task_id, project_id)
            raise TaskNotFound()
        logger.info("Updated task %s (%s)", task_id, ", ".join(c for c in changes if c != "updated_at"))
        return await cls.get_task(project_id, task_id)

    @classmethod
    async def delete_task(cls, project_id: str, task_id: str) -> None:
        """Delete a task.  Deleting the same task twice raises ``TaskNotFound``."""
        await ProjectService.ensure_project_exists(project_id)
        with storage_failures("delete task"):
            affected = await asyncio.to_thread(TaskRepository.delete, task_id, project_id)
        if affected == 0:
            logger.debug("Task %s not found in project %s", task_id, project_id)
            raise TaskNotFound()
        logger.info("Deleted task %s from project %s", task_id, project_id)

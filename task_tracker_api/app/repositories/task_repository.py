"""
SQL access for the ``tasks`` table.

Every statement that targets one task uses the composite key
``(id, project_id)`` so a task can never be read or changed through
another project's URL.  Update and delete return the affected row
count; ``0`` means no task matched the pair.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from ..core.db import StorageError, get_connection, storage_errors
from ..core.timeutil import format_timestamp, parse_timestamp
from ..schemas.task import TaskRead
from .query import TASK_COLUMNS, SelectQuery, TaskFilter, UpdateStatement

logger = logging.getLogger(__name__)


class TaskRepository:
    """CRUD operations against the ``tasks`` table."""

    @classmethod
    def create(cls, task: TaskRead) -> None:
        conn = get_connection()
        try:
            with storage_errors():
                conn.execute(
                    f"INSERT INTO tasks ({TASK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        str(task.id),
                        str(task.project_id),
                        task.title,
                        task.description,
                        task.status.value,
                        format_timestamp(task.created_at),
                        format_timestamp(task.updated_at),
                    ),
                )
                conn.commit()
        finally:
            conn.close()

    @classmethod
    def get(cls, task_id: str, project_id: str) -> Optional[TaskRead]:
        conn = get_connection()
        try:
            with storage_errors():
                row = conn.execute(
                    f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ? AND project_id = ?",
                    (task_id, project_id),
                ).fetchone()
            return cls._row_to_task(row) if row else None
        finally:
            conn.close()

    @classmethod
    def list(cls, task_filter: TaskFilter) -> List[TaskRead]:
        sql, params = SelectQuery.for_tasks(task_filter).build()
        logger.debug("Listing tasks: %s %s", sql, params)
        conn = get_connection()
        try:
            with storage_errors():
                rows = conn.execute(sql, params).fetchall()
            return [cls._row_to_task(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    def update(cls, statement: UpdateStatement) -> int:
        sql, params = statement.build()
        conn = get_connection()
        try:
            with storage_errors():
                cursor = conn.execute(sql, params)
                affected = cursor.rowcount
                conn.commit()
            return affected
        finally:
            conn.close()

    @classmethod
    def delete(cls, task_id: str, project_id: str) -> int:
        conn = get_connection()
        try:
            with storage_errors():
                cursor = conn.execute(
                    "DELETE FROM tasks WHERE id = ? AND project_id = ?",
                    (task_id, project_id),
                )
                affected = cursor.rowcount
                conn.commit()
            return affected
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> TaskRead:
        """Convert a database row to a TaskRead schema instance.

        Blank descriptions are reported as absent.
        """
        description = row["description"]
        if description is not None and not description.strip():
            description = None
        try:
            return TaskRead(
                id=row["id"],
                project_id=row["project_id"],
                title=row["title"],
                description=description,
                status=row["status"],
                created_at=parse_timestamp(row["created_at"]),
                updated_at=parse_timestamp(row["updated_at"]),
            )
        except ValueError as exc:
            raise StorageError(f"Malformed task row {row['id']!r}: {exc}") from exc

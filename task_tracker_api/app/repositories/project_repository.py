"""
SQL access for the ``projects`` table.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from ..core.db import StorageError, get_connection, storage_errors
from ..core.timeutil import format_timestamp, parse_timestamp
from ..schemas.project import ProjectRead

PROJECT_COLUMNS = "id, name, created_at, updated_at"


class ProjectRepository:
    """CRUD operations against the ``projects`` table."""

    @classmethod
    def create(cls, project: ProjectRead) -> None:
        """Insert ``project``.

        A duplicate name surfaces as ``ConstraintViolation`` with
        ``kind="unique"``, ``table="projects"``, ``column="name"``.
        """
        conn = get_connection()
        try:
            with storage_errors():
                conn.execute(
                    f"INSERT INTO projects ({PROJECT_COLUMNS}) VALUES (?, ?, ?, ?)",
                    (
                        str(project.id),
                        project.name,
                        format_timestamp(project.created_at),
                        format_timestamp(project.updated_at),
                    ),
                )
                conn.commit()
        finally:
            conn.close()

    @classmethod
    def list(cls) -> List[ProjectRead]:
        """Return every project, most recently updated first, then by name."""
        conn = get_connection()
        try:
            with storage_errors():
                rows = conn.execute(
                    f"SELECT {PROJECT_COLUMNS} FROM projects ORDER BY updated_at DESC, name ASC"
                ).fetchall()
            return [cls._row_to_project(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    def get(cls, project_id: str) -> Optional[ProjectRead]:
        conn = get_connection()
        try:
            with storage_errors():
                row = conn.execute(
                    f"SELECT {PROJECT_COLUMNS} FROM projects WHERE id = ?",
                    (project_id,),
                ).fetchone()
            return cls._row_to_project(row) if row else None
        finally:
            conn.close()

    @classmethod
    def exists(cls, project_id: str) -> bool:
        conn = get_connection()
        try:
            with storage_errors():
                row = conn.execute("SELECT 1 FROM projects WHERE id = ?", (project_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    @staticmethod
    def _row_to_project(row: sqlite3.Row) -> ProjectRead:
        """Convert a database row to a ProjectRead schema instance."""
        try:
            return ProjectRead(
                id=row["id"],
                name=row["name"],
                created_at=parse_timestamp(row["created_at"]),
                updated_at=parse_timestamp(row["updated_at"]),
            )
        except ValueError as exc:
            raise StorageError(f"Malformed project row {row['id']!r}: {exc}") from exc

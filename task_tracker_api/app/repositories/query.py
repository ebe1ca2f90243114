"""
Structured construction of the task queries.

Filters are collected as ``Predicate`` objects (a SQL condition plus
its bound parameters) in a fixed order: status, then title search,
then the owning project.  Only column names and placeholders ever
reach the SQL text; user input travels as parameters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

TASK_COLUMNS = "id, project_id, title, description, status, created_at, updated_at"

# Columns a partial update may touch, in the order they appear in SET.
UPDATABLE_TASK_COLUMNS = ("title", "description", "status", "updated_at")


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    return (
        text.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


@dataclass(frozen=True)
class Predicate:
    clause: str
    params: Tuple[Any, ...] = ()


@dataclass
class TaskFilter:
    """Normalised filters for listing one project's tasks.

    ``status`` must already be canonical and ``search`` non‑blank;
    the service is responsible for both.
    """

    project_id: str
    status: Optional[str] = None
    search: Optional[str] = None
    limit: int = 50
    offset: int = 0

    def predicates(self) -> List[Predicate]:
        predicates: List[Predicate] = []
        if self.status is not None:
            predicates.append(Predicate("status = ?", (self.status,)))
        if self.search:
            predicates.append(Predicate("title LIKE ? ESCAPE '\\'", (f"%{escape_like(self.search)}%",)))
        predicates.append(Predicate("project_id = ?", (self.project_id,)))
        return predicates


@dataclass
class SelectQuery:
    table: str
    columns: str
    predicates: List[Predicate] = field(default_factory=list)
    order_by: str = ""
    limit: Optional[int] = None
    offset: Optional[int] = None

    @classmethod
    def for_tasks(cls, task_filter: TaskFilter) -> "SelectQuery":
        return cls(
            table="tasks",
            columns=TASK_COLUMNS,
            predicates=task_filter.predicates(),
            # id breaks ties between equal timestamps so pages are stable
            order_by="updated_at DESC, id ASC",
            limit=task_filter.limit,
            offset=task_filter.offset,
        )

    def build(self) -> Tuple[str, Tuple[Any, ...]]:
        sql = f"SELECT {self.columns} FROM {self.table}"
        params: List[Any] = []
        if self.predicates:
            sql += " WHERE " + " AND ".join(p.clause for p in self.predicates)
            for predicate in self.predicates:
                params.extend(predicate.params)
        if self.order_by:
            sql += f" ORDER BY {self.order_by}"
        if self.limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([self.limit, self.offset or 0])
        return sql, tuple(params)


@dataclass
class UpdateStatement:
    """``UPDATE tasks SET ... WHERE id = ? AND project_id = ?`` for a patch.

    ``changes`` maps column names to new values.  Unknown columns are
    rejected so that mapping keys can never inject SQL.
    """

    task_id: str
    project_id: str
    changes: Dict[str, Any]

    def __post_init__(self) -> None:
        unknown = set(self.changes) - set(UPDATABLE_TASK_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update task columns: {', '.join(sorted(unknown))}")

    def build(self) -> Tuple[str, Tuple[Any, ...]]:
        columns = [c for c in UPDATABLE_TASK_COLUMNS if c in self.changes]
        if not columns:
            raise ValueError("Update statement has no columns to set")
        assignments = ", ".join(f"{column} = ?" for column in columns)
        sql = f"UPDATE tasks SET {assignments} WHERE id = ? AND project_id = ?"
        params = [self.changes[column] for column in columns] + [self.task_id, self.project_id]
        return sql, tuple(params)

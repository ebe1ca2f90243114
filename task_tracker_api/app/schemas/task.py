"""
Pydantic models for tasks.

Status values arrive as free text so that the service can normalise
them case‑insensitively (``"in_progress"`` becomes ``IN_PROGRESS``)
and report ``InvalidStatus`` itself instead of a generic schema error.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskCreate(CamelModel):
    """Schema for creating a task inside a project."""

    title: str = Field(..., examples=["Write release notes"])
    description: Optional[str] = Field(None, examples=["Cover the API changes"])
    status: Optional[str] = Field(None, examples=["TODO"])


class TaskUpdate(CamelModel):
    """Schema for a partial task update.

    All fields are optional.  A field counts as supplied only when it
    carries a non‑null value; an empty ``description`` clears the
    stored description.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None

    def supplied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class TaskListParams(CamelModel):
    """Optional filters for listing a project's tasks."""

    status: Optional[str] = None
    q: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class TaskRead(CamelModel):
    """Schema for reading a task from the API."""

    id: UUID
    project_id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

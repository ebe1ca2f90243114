"""
Pydantic models for projects.

A project is a named container that owns tasks.  Names are unique;
the service trims them and enforces the length limit, so the request
schema accepts any string.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ProjectCreate(CamelModel):
    """Schema for creating a project."""

    name: str = Field(..., examples=["Website relaunch"])


class ProjectRead(CamelModel):
    """Schema for reading a project from the API."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

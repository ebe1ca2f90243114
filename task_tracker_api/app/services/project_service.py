"""
Business logic for projects.

Project names are trimmed and length‑checked before the insert; the
uniqueness of names is left to the ``UNIQUE`` constraint on the
``projects.name`` column, which the repository reports as a structured
``ConstraintViolation``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from ..core.db import ConstraintViolation
from ..core.errors import ProjectNameExists, ProjectNotFound
from ..core.timeutil import utcnow
from ..repositories.project_repository import ProjectRepository
from ..schemas.project import ProjectRead
from .common import storage_failures
from .validation import normalize_project_name

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for creating, listing and checking projects."""

    @classmethod
    async def create_project(cls, name: str, now: Optional[datetime] = None) -> ProjectRead:
        """Create a project named ``name`` (trimmed).

        Parameters
        ----------
        name : str
            Raw project name from the request.
        now : datetime, optional
            Creation time; defaults to the current UTC time.

        Raises
        ------
        EmptyName, NameTooLong
            If the trimmed name is unusable.
        ProjectNameExists
            If another project already has this exact name.
        StorageFailure
            On any other storage error.
        """
        normalized = normalize_project_name(name)
        created_at = now or utcnow()
        project = ProjectRead(id=uuid.uuid4(), name=normalized, created_at=created_at, updated_at=created_at)

        with storage_failures("create project"):
            try:
                await asyncio.to_thread(ProjectRepository.create, project)
            except ConstraintViolation as exc:
                if exc.matches("unique", "projects", "name"):
                    logger.debug("Project name %r already exists", normalized)
                    raise ProjectNameExists() from exc
                raise
        logger.info("Created project %s (%s)", project.id, project.name)
        return project

    @classmethod
    async def list_projects(cls) -> List[ProjectRead]:
        """Return all projects ordered by ``updated_at`` desc, then ``name`` asc."""
        with storage_failures("list projects"):
            return await asyncio.to_thread(ProjectRepository.list)

    @classmethod
    async def get_project(cls, project_id: str) -> ProjectRead:
        with storage_failures("get project"):
            project = await asyncio.to_thread(ProjectRepository.get, project_id)
        if project is None:
            raise ProjectNotFound()
        return project

    @classmethod
    async def ensure_project_exists(cls, project_id: str) -> None:
        """Raise ``ProjectNotFound`` unless a project with ``project_id`` exists.

        This is a point‑in‑time check; nothing holds the project in place
        between this call and the caller's next statement.
        """
        with storage_failures("check project"):
            exists = await asyncio.to_thread(ProjectRepository.exists, project_id)
        if not exists:
            logger.debug("Project %s not found", project_id)
            raise ProjectNotFound()

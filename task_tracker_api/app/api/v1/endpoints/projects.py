"""
Project endpoints for API v1.

Projects can be created, listed and fetched.  There is no update or
delete route; a project lives as long as the database does.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from task_tracker_api.app.api.v1.errors import http_error
from task_tracker_api.app.core.errors import DomainError
from task_tracker_api.app.schemas.project import ProjectCreate, ProjectRead
from task_tracker_api.app.services.project_service import ProjectService

router = APIRouter()


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(project_in: ProjectCreate) -> ProjectRead:
    """Create a project.

    Returns 400 if the trimmed name is empty or longer than 128
    characters and 409 if a project with the same name exists.
    """
    try:
        return await ProjectService.create_project(project_in.name)
    except DomainError as e:
        raise http_error(e) from e


@router.get("", response_model=List[ProjectRead])
async def list_projects() -> List[ProjectRead]:
    """List all projects, most recently updated first, ties by name."""
    try:
        return await ProjectService.list_projects()
    except DomainError as e:
        raise http_error(e) from e


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: UUID) -> ProjectRead:
    """Retrieve a single project.  Raises 404 if it does not exist."""
    try:
        return await ProjectService.get_project(str(project_id))
    except DomainError as e:
        raise http_error(e) from e

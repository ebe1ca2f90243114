"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import health, projects, tasks

router = APIRouter()

router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
# The tasks router spells out "/projects/{project_id}/tasks" itself.
router.include_router(tasks.router, tags=["tasks"])

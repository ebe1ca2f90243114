"""
Domain error taxonomy.

Services raise these exceptions; the API layer maps each family to an
HTTP status code:

* ``ValidationError`` -> 400, detected locally before any store access.
* ``NotFoundError`` -> 404, including cross‑project task lookups.
* ``ConflictError`` -> 409, detected from a storage constraint violation.
* ``StorageFailure`` -> 500, opaque; the original cause is chained.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    message = "domain error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(DomainError):
    message = "invalid input"


class EmptyName(ValidationError):
    message = "project name is required"


class NameTooLong(ValidationError):
    message = "project name is too long (max 128)"


class EmptyTitle(ValidationError):
    message = "title is required"


class TitleTooLong(ValidationError):
    message = "title too long (max 200)"


class InvalidStatus(ValidationError):
    message = "invalid status; use TODO|IN_PROGRESS|DONE"


class NotFoundError(DomainError):
    message = "not found"


class ProjectNotFound(NotFoundError):
    message = "project not found"


class TaskNotFound(NotFoundError):
    message = "task not found"


class ConflictError(DomainError):
    message = "conflict"


class ProjectNameExists(ConflictError):
    message = "project name already exists"


class StorageFailure(DomainError):
    message = "storage failure"

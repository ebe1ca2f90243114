"""
Mapping from domain errors to HTTP responses.
"""

from fastapi import HTTPException, status

from task_tracker_api.app.core.errors import ConflictError, DomainError, NotFoundError, ValidationError

INTERNAL_ERROR_DETAIL = "internal server error"


def http_error(exc: DomainError) -> HTTPException:
    """Return the ``HTTPException`` a handler should raise for ``exc``.

    ``StorageFailure`` and any other domain error become an opaque 500.
    """
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_DETAIL)

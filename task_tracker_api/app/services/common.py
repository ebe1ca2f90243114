"""
Helpers shared by the services.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from ..core.db import StorageError
from ..core.errors import StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def storage_failures(action: str) -> Iterator[None]:
    """Turn any ``StorageError`` escaping the block into ``StorageFailure``.

    The original error is logged with its traceback and chained; it is
    never retried.
    """
    try:
        yield
    except StorageError as exc:
        logger.exception("Storage failure while trying to %s", action)
        raise StorageFailure() from exc

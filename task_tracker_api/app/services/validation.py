"""
Validation and normalisation helpers.

Pure functions with no I/O.  Services call them before touching the
store so that every ``ValidationError`` is raised without a round trip.
"""

from typing import Optional

from ..core.errors import EmptyName, EmptyTitle, NameTooLong, TitleTooLong
from ..schemas.task import TaskStatus

MAX_PROJECT_NAME_LENGTH = 128
MAX_TASK_TITLE_LENGTH = 200

DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 200
# Largest value SQLite accepts for a bound INTEGER.
MAX_OFFSET = 2**63 - 1

VALID_STATUSES = frozenset(status.value for status in TaskStatus)


def normalize_project_name(raw: str) -> str:
    """Trim ``raw`` and check it is a usable project name.

    Raises
    ------
    EmptyName
        If nothing is left after trimming.
    NameTooLong
        If the trimmed name exceeds 128 characters.
    """
    name = (raw or "").strip()
    if not name:
        raise EmptyName()
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise NameTooLong()
    return name


def normalize_task_title(raw: str) -> str:
    """Trim ``raw`` and check it is a usable task title (max 200 characters)."""
    title = (raw or "").strip()
    if not title:
        raise EmptyTitle()
    if len(title) > MAX_TASK_TITLE_LENGTH:
        raise TitleTooLong()
    return title


def normalize_status(raw: str) -> Optional[str]:
    """Return the canonical upper‑case status, or ``None`` if ``raw`` is not one."""
    status = (raw or "").strip().upper()
    if status in VALID_STATUSES:
        return status
    return None


def normalize_description(raw: Optional[str]) -> Optional[str]:
    """Trim ``raw``; blank descriptions are stored as ``NULL``."""
    if raw is None:
        return None
    description = raw.strip()
    return description or None


def clamp_pagination_limit(
    raw: Optional[int],
    minimum: int = MIN_LIMIT,
    maximum: int = MAX_LIMIT,
    default: int = DEFAULT_LIMIT,
) -> int:
    """Clamp a requested page size into ``[minimum, maximum]``.

    ``0`` (or no value at all) selects ``default``.
    """
    if not raw:
        return default
    if raw < minimum:
        return minimum
    if raw > maximum:
        return maximum
    return raw


def normalize_offset(raw: Optional[int]) -> int:
    """Floor ``raw`` at 0 and cap it at the largest SQLite integer.

    Anything past the cap skips every row either way.
    """
    if raw is None or raw < 0:
        return 0
    return min(raw, MAX_OFFSET)

"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and translating driver errors into storage errors the
service layer can branch on (``storage_errors``).  It uses SQLite as a
lightweight embedded database; to switch to another DBMS you would
replace connection logic and the error translation.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .config import settings
from .timeutil import format_timestamp, utcnow

logger = logging.getLogger(__name__)

DEMO_PROJECT_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"
DEMO_PROJECT_NAME = "Demo Project"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: projects and tasks
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS projects (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL UNIQUE,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            project_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            status TEXT NOT NULL DEFAULT 'TODO'
                CHECK (status IN ('TODO', 'IN_PROGRESS', 'DONE')),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY(project_id) REFERENCES projects(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indexes backing the list orderings
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_projects_updated_name ON projects(updated_at DESC, name ASC);
        CREATE INDEX IF NOT EXISTS idx_tasks_project_updated ON tasks(project_id, updated_at DESC, id ASC);
        CREATE INDEX IF NOT EXISTS idx_tasks_project_status ON tasks(project_id, status);
        """,
    ),
]


class StorageError(Exception):
    """Any failure reported by the storage engine."""


class ConstraintViolation(StorageError):
    """An integrity constraint rejected a statement.

    ``kind`` is one of ``unique``, ``foreign_key``, ``not_null``,
    ``check`` or ``unknown``.  ``table`` and ``column`` are filled in
    when SQLite names them.
    """

    def __init__(self, kind: str, table: Optional[str] = None, column: Optional[str] = None, message: str = "") -> None:
        self.kind = kind
        self.table = table
        self.column = column
        super().__init__(message or f"{kind} constraint failed")

    def matches(self, kind: str, table: str, column: str) -> bool:
        return self.kind == kind and self.table == table and self.column == column


_CONSTRAINT_KINDS: Dict[str, str] = {
    "SQLITE_CONSTRAINT_UNIQUE": "unique",
    "SQLITE_CONSTRAINT_PRIMARYKEY": "unique",
    "SQLITE_CONSTRAINT_FOREIGNKEY": "foreign_key",
    "SQLITE_CONSTRAINT_NOTNULL": "not_null",
    "SQLITE_CONSTRAINT_CHECK": "check",
}

_MESSAGE_KINDS: Dict[str, str] = {
    "UNIQUE": "unique",
    "FOREIGN KEY": "foreign_key",
    "NOT NULL": "not_null",
    "CHECK": "check",
}

_CONSTRAINT_MESSAGE = re.compile(r"^(UNIQUE|FOREIGN KEY|NOT NULL|CHECK) constraint failed(?::\s*(\w+)\.(\w+))?")


def constraint_violation_from(exc: sqlite3.IntegrityError) -> ConstraintViolation:
    """Build a :class:`ConstraintViolation` from a driver integrity error.

    The kind comes from ``sqlite_errorname`` when the driver exposes it;
    the table and column are taken from the ``table.column`` suffix of
    the SQLite message (only the first column of a composite key).
    """
    message = str(exc)
    match = _CONSTRAINT_MESSAGE.match(message)
    kind = _CONSTRAINT_KINDS.get(getattr(exc, "sqlite_errorname", ""), "")
    if not kind:
        kind = _MESSAGE_KINDS[match.group(1)] if match else "unknown"
    table = match.group(2) if match else None
    column = match.group(3) if match else None
    return ConstraintViolation(kind, table, column, message)


@contextmanager
def storage_errors() -> Iterator[None]:
    """Translate ``sqlite3`` exceptions raised inside the block.

    ``sqlite3.IntegrityError`` becomes :class:`ConstraintViolation`;
    every other ``sqlite3.Error`` becomes :class:`StorageError`.
    """
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise constraint_violation_from(exc) from exc
    except sqlite3.Error as exc:
        raise StorageError(str(exc)) from exc


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # task_tracker_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    has foreign key enforcement turned on.  Timestamps are stored as
    text and returned unparsed.

    Failing to open or prepare the connection raises ``StorageError``
    and leaves nothing open.
    """
    with storage_errors():
        conn = sqlite3.connect(get_database_path(), timeout=settings.sqlite_busy_timeout_ms / 1000)
        try:
            conn.row_factory = sqlite3.Row
            # SQLite disables foreign keys unless asked, per connection.
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error:
            conn.close()
            raise
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def _current_version(cursor: sqlite3.Cursor) -> int:
    cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    cursor.execute("SELECT MAX(version) AS version FROM migrations")
    row = cursor.fetchone()
    return row["version"] if row and row["version"] is not None else 0


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        current_version = _current_version(cursor)

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s", version)
                current_version = version

        if settings.seed_demo_data:
            now = format_timestamp(utcnow())
            cursor.execute(
                "INSERT OR IGNORE INTO projects (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (DEMO_PROJECT_ID, DEMO_PROJECT_NAME, now, now),
            )


def migration_status() -> Dict[str, List[int]]:
    """Return applied and pending migration versions."""
    with get_cursor() as cursor:
        current_version = _current_version(cursor)
    known = [version for version, _ in MIGRATIONS]
    return {
        "applied": [v for v in known if v <= current_version],
        "pending": [v for v in known if v > current_version],
    }


def reset_db() -> None:
    """Drop every table owned by the service and re‑apply all migrations."""
    with get_cursor() as cursor:
        cursor.executescript(
            """
            DROP TABLE IF EXISTS tasks;
            DROP TABLE IF EXISTS projects;
            DROP TABLE IF EXISTS migrations;
            """
        )
    logger.warning("Dropped all tables in %s", get_database_path())
    init_db()

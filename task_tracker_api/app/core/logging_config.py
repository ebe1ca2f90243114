"""
Logging setup shared by the API process and ``manage_db.py``.

Handlers installed here are named so that calling ``setup_logging``
again (each ``create_app`` call does) only adjusts the level instead of
stacking duplicate handlers.  Handlers added by anyone else, such as
pytest's log capture, are left alone.

Every request is already logged once by the middleware in
``app.main``, so uvicorn's own access log is only kept for warnings.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "task_tracker.console"
FILE_HANDLER = "task_tracker.file"


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _own_handlers(root: logging.Logger) -> dict:
    return {h.name: h for h in root.handlers if h.name in (CONSOLE_HANDLER, FILE_HANDLER)}


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send records at ``level`` and above to stderr and, optionally, ``logfile``.

    Unknown level names fall back to ``INFO``.  The directory holding
    ``logfile`` is created when missing.
    """
    root = logging.getLogger()
    root.setLevel(_level(level))
    installed = _own_handlers(root)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if CONSOLE_HANDLER not in installed:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER)
        console.setFormatter(formatter)
        root.addHandler(console)

    if logfile and FILE_HANDLER not in installed:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

#!/usr/bin/env python3
"""
Manage the Task Tracker SQLite schema.

Subcommands:

* ``migrate``: apply pending migrations (and the demo project seed).
* ``status``: print applied and pending migration versions.
* ``reset``: drop the projects and tasks tables and migrate again.
  Every project and task is lost, so ``--yes`` is required.

Usage:
    python manage_db.py --db ./task_tracker.db migrate
    python manage_db.py status
    python manage_db.py reset --yes
"""

import argparse
import os
import sys

from task_tracker_api.app.core import db
from task_tracker_api.app.core.config import settings
from task_tracker_api.app.core.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage the Task Tracker database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL / task_tracker.db")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("migrate", help="Apply pending migrations")
    sub.add_parser("status", help="Show applied and pending migrations")
    reset = sub.add_parser("reset", help="Drop all tables and re-apply migrations")
    reset.add_argument("--yes", action="store_true", help="Confirm that all data may be deleted")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level)
    if args.db:
        settings.database_url = os.path.abspath(args.db)

    if args.command == "migrate":
        db.init_db()
        print(f"[+] Database is up to date: {db.get_database_path()}")
    elif args.command == "status":
        status = db.migration_status()
        print(f"Database: {db.get_database_path()}")
        print(f"Applied: {', '.join(map(str, status['applied'])) or '-'}")
        print(f"Pending: {', '.join(map(str, status['pending'])) or '-'}")
    elif args.command == "reset":
        if not args.yes:
            print("[!] Refusing to reset without --yes.", file=sys.stderr)
            return 1
        db.reset_db()
        print(f"[+] Database reset: {db.get_database_path()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

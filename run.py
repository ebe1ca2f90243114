"""Entry point for the Task Tracker API.

Starts the FastAPI application with Uvicorn.  Host, port and the
database location are read from the environment (see
``task_tracker_api/app/core/config.py``), for example::

    DATABASE_URL=/var/lib/tasks.db PORT=8080 python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from task_tracker_api.app.core.config import settings
from task_tracker_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info("Starting server on %s:%s", settings.host, settings.port)
    asyncio.run(run_api())


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass

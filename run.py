"""Entry point for the Model Store API.

Launches the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Host, port, store backend and database path come from environment
variables (``HOST``, ``PORT``, ``STORE_BACKEND``, ``DATABASE_URL``);
see ``model_store_api/app/core/config.py``.  Without any of them the
service listens on ``127.0.0.1:3000`` and stores records in
``data.db``.

Usage:
    python run.py
"""
import asyncio
import sys

from uvicorn import Config, Server

from model_store_api.app.core.config import settings
from model_store_api.app.main import app

STARTUP_FAILURE = 3


async def main() -> int:
    """Serve the API until the process is stopped.

    Returns a non‑zero exit code if the application failed to start,
    e.g. because the model store could not be opened.
    """
    # Logging is configured by create_app; keep uvicorn from replacing it.
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_config=None)
    server = Server(config)
    await server.serve()
    return 0 if server.started else STARTUP_FAILURE


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass

"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults reproduce the service's fixed
behaviour: listen on ``127.0.0.1:3000`` and persist records to
``data.db`` in the working directory.  Override them via environment
variables, or pass an explicit ``Settings`` instance to
``create_app`` (which is what the tests do).
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Model Store API")
    api_version: str = os.getenv("API_VERSION", "0.1.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "3000"))

    # Which store implementation to build at startup: ``sqlite`` for the
    # durable variant or ``memory`` for the volatile one.
    store_backend: str = os.getenv("STORE_BACKEND", "sqlite")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the current working directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "data.db")

    # When enabled, a failed insert or delete is reported to the client
    # as HTTP 500 instead of the usual success string.
    strict_writes: bool = _env_flag("STRICT_WRITES")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()

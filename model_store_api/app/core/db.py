"""
SQLite database integration.

This module provides functions for opening the connection used by the
durable model store (``get_connection``) and for creating the
``models`` table on startup (``init_db``).  It uses SQLite as a
lightweight embedded database; to switch to another DBMS you would
replace the connection logic and adapt the SQL accordingly.

Unlike a per‑request connection, the store keeps a single connection
open for the lifetime of the process and serialises statements with
its own lock, so the connection is opened with
``check_same_thread=False``.
"""

import os
import sqlite3
from pathlib import Path
from typing import Optional

from .config import settings


CREATE_MODEL_TABLE = """
CREATE TABLE IF NOT EXISTS models (
    id TEXT PRIMARY KEY,
    name TEXT,
    version TEXT,
    data BLOB,
    create_time INTEGER
)
"""


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the URL is an absolute path, use it directly.  Otherwise resolve
    it relative to the current working directory.  ``:memory:`` is
    passed through untouched.
    """
    db_url = database_url if database_url is not None else settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    return str((Path.cwd() / db_url).resolve())


def get_connection(database_url: Optional[str] = None) -> sqlite3.Connection:
    """Open and return a SQLite connection.

    Rows are returned as ``sqlite3.Row`` so that columns can be read by
    name.  The file is created if it does not exist.
    """
    conn = sqlite3.connect(get_database_path(database_url), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create the ``models`` table if it does not exist yet."""
    conn.execute(CREATE_MODEL_TABLE)
    conn.commit()

"""
Service layer for model records.

A model store owns the collection of model records and exposes three
operations: ``add``, ``delete`` and ``list_models``.  Two
implementations share the ``ModelStore`` contract:

* ``SQLiteModelStore`` persists records to the ``models`` table of an
  SQLite file through one long‑lived connection.  Every statement runs
  under a ``threading.Lock`` so that the connection is never used by
  two statements at once.
* ``MemoryModelStore`` keeps records in a dict keyed by ID; they are
  lost when the process exits.

Records are immutable: there is no update operation.  Write failures
are logged and reported through the return value, never raised, so the
write path does not fail from the caller's point of view.

Request handlers never touch a store directly.  They receive a
``SharedModelStore`` which pairs the store with the process‑wide
``ReadWriteLock`` and hands the store out under a read or write lock.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List, Optional

from model_store_api.app.core.config import Settings, settings
from model_store_api.app.core.db import get_connection, init_db
from model_store_api.app.core.exceptions import InitFailure, WriteFailure
from model_store_api.app.core.locks import ReadWriteLock
from model_store_api.app.schemas.model import ModelRead

logger = logging.getLogger(__name__)

INSERT_MODEL = (
    "INSERT INTO models (id, name, version, data, create_time) "
    "VALUES (:id, :name, :version, :data, :create_time)"
)
DELETE_BY_ID = "DELETE FROM models WHERE id = :id"
SELECT_ALL = "SELECT id, name, version, data, create_time FROM models ORDER BY rowid"
COUNT_ALL = "SELECT COUNT(*) FROM models"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _new_id() -> str:
    return str(uuid.uuid4())


class ModelStore(ABC):
    """Contract shared by the durable and volatile stores."""

    backend: str = ""

    @abstractmethod
    async def add(self, name: str, version: str, data: str) -> Optional[ModelRead]:
        """Insert a new record with a fresh ID and the current time.

        Returns the created record, or ``None`` if the underlying
        storage failed (the failure is logged).
        """

    @abstractmethod
    async def delete(self, model_id: str) -> bool:
        """Remove the record with ``model_id`` if it exists.

        Deleting an unknown ID is not an error.  Returns ``False`` only
        when the underlying storage failed.
        """

    @abstractmethod
    async def list_models(self) -> List[ModelRead]:
        """Return a snapshot of all records."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""

    def close(self) -> None:
        """Release any underlying resources."""


@dataclass(frozen=True)
class _StoredModel:
    id: str
    name: str
    version: str
    data: bytes
    create_time: int

    def to_read(self) -> ModelRead:
        return ModelRead(
            id=self.id,
            name=self.name,
            version=self.version,
            data=self.data.decode("utf-8"),
            create_time=self.create_time,
        )


class MemoryModelStore(ModelStore):
    """Volatile store holding records in a dict keyed by ID."""

    backend = "memory"

    def __init__(self) -> None:
        self._models: Dict[str, _StoredModel] = {}

    async def add(self, name: str, version: str, data: str) -> Optional[ModelRead]:
        record = _StoredModel(
            id=_new_id(),
            name=name,
            version=version,
            data=data.encode("utf-8"),
            create_time=_now_millis(),
        )
        self._models[record.id] = record
        logger.info("Created model %s", record.id)
        return record.to_read()

    async def delete(self, model_id: str) -> bool:
        if self._models.pop(model_id, None) is not None:
            logger.info("Deleted model %s", model_id)
        return True

    async def list_models(self) -> List[ModelRead]:
        return [record.to_read() for record in list(self._models.values())]

    async def count(self) -> int:
        return len(self._models)


class SQLiteModelStore(ModelStore):
    """Durable store backed by the ``models`` table of an SQLite file."""

    backend = "sqlite"

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn_lock = threading.Lock()

    @classmethod
    def open(cls, database_url: str) -> "SQLiteModelStore":
        """Open (creating if absent) the database and ensure the schema.

        Raises ``InitFailure`` if the file cannot be opened or the
        ``models`` table cannot be created.
        """
        conn = None
        try:
            conn = get_connection(database_url)
            init_db(conn)
        except sqlite3.Error as exc:
            if conn is not None:
                conn.close()
            raise InitFailure(f"cannot open model store {database_url!r}: {exc}") from exc
        logger.info("Opened model store at %s", database_url)
        return cls(conn)

    def _execute_write(self, operation: str, sql: str, params: dict) -> int:
        try:
            with self._conn_lock:
                cursor = self._conn.execute(sql, params)
                self._conn.commit()
                return cursor.rowcount
        except sqlite3.Error as exc:
            raise WriteFailure(operation, exc) from exc

    async def add(self, name: str, version: str, data: str) -> Optional[ModelRead]:
        model = ModelRead(
            id=_new_id(),
            name=name,
            version=version,
            data=data,
            create_time=_now_millis(),
        )
        params = {
            "id": model.id,
            "name": model.name,
            "version": model.version,
            "data": data.encode("utf-8"),
            "create_time": model.create_time,
        }
        try:
            updated = self._execute_write("insert", INSERT_MODEL, params)
        except WriteFailure as exc:
            logger.error("Insert error: %s", exc)
            return None
        logger.info("%d rows were updated", updated)
        return model

    async def delete(self, model_id: str) -> bool:
        try:
            deleted = self._execute_write("delete", DELETE_BY_ID, {"id": model_id})
        except WriteFailure as exc:
            logger.error("Delete error: %s", exc)
            return False
        logger.info("%d rows were deleted", deleted)
        return True

    async def list_models(self) -> List[ModelRead]:
        try:
            with self._conn_lock:
                rows = self._conn.execute(SELECT_ALL).fetchall()
        except sqlite3.Error:
            logger.exception("Failed to list models")
            return []
        return [self._row_to_model(row) for row in rows]

    async def count(self) -> int:
        try:
            with self._conn_lock:
                row = self._conn.execute(COUNT_ALL).fetchone()
        except sqlite3.Error:
            logger.exception("Failed to count models")
            return 0
        return row[0]

    def close(self) -> None:
        with self._conn_lock:
            self._conn.close()

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> ModelRead:
        """Convert a database row to a ModelRead schema instance."""
        data = row["data"]
        # Rows written by other tools may hold TEXT rather than BLOB.
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return ModelRead(
            id=row["id"],
            name=row["name"],
            version=row["version"],
            data=data if data is not None else "",
            create_time=row["create_time"],
        )


class SharedModelStore:
    """A store plus the process‑wide reader/writer lock guarding it."""

    def __init__(self, store: ModelStore) -> None:
        self.store = store
        self.lock = ReadWriteLock()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[ModelStore]:
        async with self.lock.read():
            yield self.store

    @asynccontextmanager
    async def write(self) -> AsyncIterator[ModelStore]:
        async with self.lock.write():
            yield self.store


def new_store(config: Optional[Settings] = None) -> ModelStore:
    """Build the store selected by ``config.store_backend``.

    Raises ``InitFailure`` if the durable store cannot be opened or the
    backend name is unknown.
    """
    config = config or settings
    backend = config.store_backend.lower()
    if backend == MemoryModelStore.backend:
        return MemoryModelStore()
    if backend == SQLiteModelStore.backend:
        return SQLiteModelStore.open(config.database_url)
    raise InitFailure(f"unknown store backend {config.store_backend!r}")

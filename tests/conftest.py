"""
Shared fixtures for the model store test suite.
"""

import pytest
from fastapi.testclient import TestClient

from model_store_api.app.core.config import Settings
from model_store_api.app.main import create_app
from model_store_api.app.services.model_store import MemoryModelStore, SQLiteModelStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "models.db")


@pytest.fixture
def sqlite_store(db_path):
    store = SQLiteModelStore.open(db_path)
    yield store
    store.close()


@pytest.fixture
def memory_store():
    return MemoryModelStore()


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Each contract test runs once per backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def app_settings(db_path):
    return Settings(store_backend="sqlite", database_url=db_path, strict_writes=False)


@pytest.fixture
def client(store, app_settings):
    app = create_app(app_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client

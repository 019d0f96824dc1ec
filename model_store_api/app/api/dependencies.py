"""
FastAPI dependencies for route handlers.

The shared store handle is created once per application (see
``main.create_app``) and kept on ``app.state``.  Handlers obtain it
through ``Depends(get_shared_store)`` rather than importing a global,
so tests can build independent applications with their own stores.
"""

from fastapi import Request

from model_store_api.app.core.config import Settings
from model_store_api.app.services.model_store import SharedModelStore


def get_shared_store(request: Request) -> SharedModelStore:
    """Return the lock‑guarded store handle of the current application."""
    return request.app.state.model_store


def get_settings(request: Request) -> Settings:
    """Return the settings the current application was built with."""
    return request.app.state.settings

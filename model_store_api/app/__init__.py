"""
Application package initializer.

The service is split into a few small pieces: ``core`` holds
configuration, logging, the SQLite connection helper, exceptions and
the reader/writer lock; ``services`` holds the model store
implementations; ``schemas`` holds the Pydantic request and response
bodies; ``api`` binds HTTP routes to the store.
"""

from .main import app  # noqa: F401

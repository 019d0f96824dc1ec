"""
Main entrypoint for the Model Store API.

This module assembles the FastAPI application, sets up logging and
includes the routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Importing the app here makes it easy to run with uvicorn
or another ASGI server, e.g.::

    uvicorn model_store_api.app.main:app --host 127.0.0.1 --port 3000

The store is opened when the application starts, not at import time.
If it cannot be opened, ``InitFailure`` propagates out of the startup
phase and the server exits without serving any request.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router
from .core.config import Settings, settings
from .core.exceptions import InitFailure
from .core.logging_config import setup_logging
from .services.model_store import ModelStore, SharedModelStore, new_store

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject undecodable bodies with 422 without echoing the input back.

    The default handler copies the offending value into the response,
    which fails to encode when the value holds a lone surrogate.
    """
    errors = [{k: v for k, v in err.items() if k not in ("input", "ctx")} for err in exc.errors()]
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)},
    )


def create_app(config: Optional[Settings] = None, store: Optional[ModelStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[ModelStore]
        A ready store to serve.  When omitted, the store selected by
        ``config.store_backend`` is opened on startup and closed on
        shutdown.  A store passed in is left open for the caller.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or settings
    setup_logging(config.log_level, config.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.model_store is None
        if owned:
            try:
                app.state.model_store = SharedModelStore(new_store(config))
            except InitFailure as exc:
                logger.error("Model store initialisation failed: %s", exc)
                raise
        logger.info("Serving %s model store", app.state.model_store.store.backend)
        yield
        if owned:
            app.state.model_store.store.close()
            app.state.model_store = None

    app = FastAPI(title=config.project_name, version=config.api_version, lifespan=lifespan)
    app.state.settings = config
    app.state.model_store = SharedModelStore(store) if store is not None else None

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

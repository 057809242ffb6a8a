from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import StorageError, ValidationError
from .log import configure_logging
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import TodoStore

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[TodoStore] = None) -> FastAPI:
    """
    Build the todo application.

    Args:
        settings: Application settings; read from the environment when omitted.
        store: An already opened store. When omitted the store at
            ``settings.db_path`` is opened on startup and closed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            yield
            return
        app.state.store = TodoStore.initialize(settings.db_path)
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(
        title=settings.app_name,
        description="Server-rendered todo list backed by SQLite.",
        version="0.1.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.store = store

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError) -> PlainTextResponse:
        """Surface the raw storage error text with a 500 status."""
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        """Unknown paths and methods answer in plain text like every other error."""
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    app.include_router(todos_router.router)
    return app


app = create_app()

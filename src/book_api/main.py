"""
Application factory.

    uvicorn book_api.main:app

`create_app()` wires logging, the request-id middleware, the repository exception
handlers and the v1 routers. Tables are created at startup when AUTO_CREATE_TABLES
is set; there are no migrations.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from book_api.api.v1.error_handlers import register_exception_handlers
from book_api.api.v1.router import api_router
from book_api.config import Settings, get_settings
from book_api.core.logging import RequestIDMiddleware, setup_logging
from book_api.database.session import engine, init_models
from book_api.utils.logging import get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            await init_models()
        logger.info("app.startup", extra={"env": settings.ENV, "api_prefix": settings.API_PREFIX})
        yield
        await engine.dispose()
        logger.info("app.shutdown")

    app = FastAPI(title="Book API", version=get_project_version(), lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()

"""
Application factory.

Run with:
    uvicorn pack.main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import pack.models  # noqa: F401  (registers every table on Base.metadata)
from pack.api.v1.error_handlers import register_exception_handlers
from pack.api.v1.router import api_router
from pack.config.settings import Settings, get_settings
from pack.core.logging import RequestIDMiddleware, setup_logging
from pack.database.base import Base
from pack.database.session import get_engine
from pack.utils.logging import get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if settings.CREATE_SCHEMA_ON_STARTUP:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("app.schema.created")

    logger.info("app.startup", extra={"env": settings.ENV})
    yield

    await get_engine().dispose()
    logger.info("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=get_project_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    async def healthz():
        return {"status": "ok"}

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)
    return app


app = create_app()

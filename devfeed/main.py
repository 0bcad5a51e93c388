# devfeed/main.py (async version)

import os
import time
import logging
import asyncio
from typing import Optional
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from devfeed.adapters.configuration.config import Settings, settings as default_settings
from devfeed.adapters.outbound.persistence.database import create_tables
from devfeed.adapters.outbound.security.revocation_store import periodic_revocation_purge
from devfeed.application.context import AppContext

# All timestamps are UTC, whatever the host is set to
os.environ["TZ"] = "UTC"
if hasattr(time, "tzset"):
    time.tzset()

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if default_settings.DEBUG else getattr(logging, default_settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create missing tables and start the revocation purge task.
    Shutdown: cancel the task and wait for it to finish.
    """
    logger.info("Application starting up...")

    await create_tables()

    context: AppContext = app.state.context
    app.state.purge_task = asyncio.create_task(
        periodic_revocation_purge(context.revocations, context.cleanup_period)
    )

    yield

    logger.info("Application shutting down...")
    app.state.purge_task.cancel()
    try:
        await app.state.purge_task
    except asyncio.CancelledError:
        pass


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration, the environment-derived one when omitted
        context: Prebuilt application context, built from ``settings`` when omitted
    """
    settings = settings or default_settings
    context = context or AppContext.from_settings(settings)

    app = FastAPI(
        title="devfeed",
        description="Developer feed API: accounts, themes, articles, comments and subscriptions",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.context = context

    # Middlewares
    from devfeed.shared.middleware import (
        AsyncExceptionMiddleware,
        AsyncRequestLoggingMiddleware,
        register_exception_handlers,
    )

    app.add_middleware(AsyncRequestLoggingMiddleware)
    app.add_middleware(AsyncExceptionMiddleware)
    register_exception_handlers(app)

    # Routers
    from devfeed.adapters.inbound.api.v1.router import api_router

    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def redirect_to_docs():
        return RedirectResponse(url="/docs")

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        spec = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        # Validation errors are answered with 400 and the common error body
        for schema in ("HTTPValidationError", "ValidationError"):
            spec.get("components", {}).get("schemas", {}).pop(schema, None)

        for path in spec.get("paths", {}).values():
            for op in path.values():
                op.get("responses", {}).pop("422", None)

        app.openapi_schema = spec
        return spec

    app.openapi = custom_openapi

    return app


app = create_app()

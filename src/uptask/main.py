"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (schema creation, engine
disposal). Middleware, CORS, the health router and the GraphQL router
are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uptask import __version__
from uptask.api import api_router
from uptask.config import settings
from uptask.db.engine import create_schema, engine
from uptask.graphql.schema import create_graphql_router
from uptask.middleware.request_id import RequestIdMiddleware
from uptask.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown.
    """
    logger.info(
        "uptask.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    await create_schema()

    yield

    logger.info("uptask.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="UpTask",
        description="Projects and tasks, per user, over GraphQL",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.include_router(create_graphql_router(), prefix="/graphql")

    return app


# Default app instance (used by uvicorn: uptask.main:app)
app = create_app()


def run():
    """Console entry point: `uptask`."""
    uvicorn.run(
        "uptask.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

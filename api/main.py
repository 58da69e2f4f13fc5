"""Books API: FastAPI entry point.

Builds the application explicitly: configuration, database, middleware,
error handlers and the books route table are all passed in or created by
create_app(). Routes are mounted under the configured API prefix.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import RequestContextMiddleware
from core.database import Database
from core.observability.logging_setup import setup_logging
from patterns.domain_config import BooksConfig
from verticals.books.router import build_router

logger = logging.getLogger(__name__)


def create_app(
    config: BooksConfig | None = None,
    database: Database | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Create the ASGI application.

    Pass ``database`` to share an engine that is already set up (tests do
    this with an in-memory SQLite engine); otherwise one is built from the
    DATABASE_URL environment variable.
    """
    if config is None:
        from verticals.books.config import config
    if configure_logging:
        setup_logging(
            service_name=config.service_name,
            log_level=config.log_level,
            json_output=config.json_logs,
        )
    database = database or Database()

    # -----------------------------------------------------------------------
    # Lifespan
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown hooks."""
        logger.info("Books API started", extra={"api_prefix": config.api_prefix})
        yield
        await database.close()
        logger.info("Books API shut down")

    app = FastAPI(
        title="Books API",
        description="CRUD for books with author relations, likes and JWT auth",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = database

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(build_router(), prefix=config.api_prefix, tags=["Books"])

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": "0.1.0"}

    return app

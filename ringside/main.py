"""Ringside FastAPI application.

Roster, championship and match bookkeeping for a wrestling promotion.
The HTTP layer only maps requests onto the services; every consistency
rule lives in ringside.services.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from ringside import __version__
from ringside.api.errors import register_error_handlers
from ringside.api.routes import health, matches, shows, titles, wrestlers
from ringside.config import BookingPolicy, get_policy, get_settings
from ringside.models import Store


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured logging on top of the stdlib logging module."""
    logging.basicConfig(format="%(message)s", level=log_level.upper())
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


settings = get_settings()
configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def create_app(store: Store | None = None, policy: BookingPolicy | None = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own Store; otherwise one is opened from settings when
    the application starts and disposed when it stops.
    """
    owns_store = store is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info("starting_ringside", version=__version__)
        if owns_store:
            app.state.store = Store(settings=settings)
            if settings.db_create_schema:
                await app.state.store.create_schema()
        yield
        if owns_store:
            await app.state.store.dispose()
        logger.info("shutting_down_ringside")

    app = FastAPI(
        title="Ringside",
        description="Roster, championship and match bookkeeping",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.policy = policy or get_policy()

    register_error_handlers(app)

    # Include API routers
    app.include_router(health.router)
    app.include_router(wrestlers.router)
    app.include_router(shows.router)
    app.include_router(titles.router)
    app.include_router(matches.router)

    return app


app = create_app()

"""Newsletter API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NewsletterError → structured JSON responses
    - Logging, database pool, and email client initialized on startup via lifespan
    - Database pool and email client connections released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Email sender parsed at startup: a malformed sender fails the process, not a request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from newsletter.api.error_handlers import register_error_handlers
from newsletter.api.routes import health, subscriptions
from newsletter.config import get_settings
from newsletter.infrastructure.database import close_db, init_db
from newsletter.infrastructure.email_client import (
    close_email_client, init_email_client,
)
from newsletter.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_email_client(
        str(settings.email_base_url),
        settings.email_sender_address(),
        settings.email_authorization_token,
        settings.email_timeout_seconds,
    )
    logger.info("Newsletter API started")
    yield
    await close_email_client()
    await close_db()
    logger.info("Newsletter API shutting down")


app = FastAPI(
    title="Newsletter API", version="0.1.0", lifespan=lifespan,
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(subscriptions.router)

register_error_handlers(app)

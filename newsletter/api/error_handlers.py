"""Error Handlers — global exception handlers for the newsletter API.

Invariants:
    - NewsletterError → status from the error, structured JSON envelope
    - RequestValidationError → 400 with the same field/reason envelope as a blank field
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (NewsletterError), validation (Pydantic), catch-all
    - Full error message goes to the log; the response only carries the public envelope
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from newsletter.core.errors import (
    ErrorSeverity, NewsletterError, SubscriberValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_newsletter_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_newsletter_error_handler(app: FastAPI) -> None:

    @app.exception_handler(NewsletterError)
    async def newsletter_error_handler(request: Request, exc: NewsletterError):
        """Handle all newsletter domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"NewsletterError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """A form field absent from the body is reported like a blank one."""
        error = _missing_field_error(exc)
        logger.warning(
            f"Form rejected on {request.url.path}: {error.field} {error.reason}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


FORM_FIELDS = ("name", "email")


def _missing_field_error(exc: RequestValidationError) -> SubscriberValidationError:
    """Map the first offending form field, in form order, to a domain error."""
    fields = {
        str(e["loc"][-1]) for e in exc.errors() if e.get("loc")
    }
    field = next((f for f in FORM_FIELDS if f in fields), "body")
    return SubscriberValidationError(field, "empty")

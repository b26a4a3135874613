"""Error Hierarchy — typed, categorized exceptions for every subscription failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are 400-level; storage and delivery errors are 500-level
    - to_response() never includes SQL text, provider payloads, or tracebacks

Design Decisions:
    - Single hierarchy with NewsletterError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - kind attribute on storage/delivery errors: callers branch on it, not on subclasses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    subscription_id: str | None = None
    debug_info: dict[str, Any] | None = None


class NewsletterError(Exception):
    """Base exception for all newsletter service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return "The request could not be processed"

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.public_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class SubscriberValidationError(NewsletterError):
    """Subscriber input failed a domain constraint."""

    REASONS = frozenset({
        "empty", "too_long", "forbidden_characters", "malformed_email",
    })

    def __init__(
        self, field: str, reason: str, context: ErrorContext | None = None,
    ):
        if reason not in self.REASONS:
            raise ValueError(f"Unknown validation reason: {reason}")
        super().__init__(
            f"Invalid subscriber {field}: {reason}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field
        self.reason = reason

    @property
    def public_message(self) -> str:
        # field and reason come from a closed set, safe to echo back
        return self.message

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        response["error"]["reason"] = self.reason
        return response


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SubscriptionStorageError(NewsletterError):
    """Persisting a subscription failed (duplicate or store unavailable)."""

    DUPLICATE = "duplicate"
    UNAVAILABLE = "unavailable"

    def __init__(
        self, kind: str, cause: str, context: ErrorContext | None = None,
    ):
        if kind not in (self.DUPLICATE, self.UNAVAILABLE):
            raise ValueError(f"Unknown storage error kind: {kind}")
        super().__init__(
            f"Subscription storage failed ({kind}): {cause}",
            f"STORAGE_{kind.upper()}", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.kind = kind
        self.cause = cause


class EmailDeliveryError(NewsletterError):
    """Email provider call failed (timeout or transport)."""

    TIMEOUT = "timeout"
    TRANSPORT = "transport"

    def __init__(
        self,
        kind: str,
        cause: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        if kind not in (self.TIMEOUT, self.TRANSPORT):
            raise ValueError(f"Unknown delivery error kind: {kind}")
        super().__init__(
            f"Email delivery failed ({kind}): {cause}",
            f"DELIVERY_{kind.upper()}", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.kind = kind
        self.cause = cause
        self.status_code = status_code

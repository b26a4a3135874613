"""Email Client — sends one transactional email through the provider's HTTP API.

Invariants:
    - Exactly one POST {base_url}/email per send_email call, no internal retry
    - Sender fixed at construction; never supplied per call
    - Whole request bounded by the configured timeout (connect + send + read)
    - Timeouts → EmailDeliveryError(kind="timeout")
    - Non-2xx responses and transport failures → EmailDeliveryError(kind="transport")

Design Decisions:
    - One shared httpx.AsyncClient: connection pooling across requests, closed on shutdown
    - http_client injectable: tests pass an AsyncClient backed by httpx.MockTransport
    - Retry policy belongs to the caller (none today: see DESIGN.md, delivery failures)
    - Only the recipient domain is logged, never the full address
"""

import asyncio
import logging
import time

import httpx
from pydantic import SecretStr

from newsletter.core.domain_types import SubscriberEmail
from newsletter.core.errors import EmailDeliveryError, ErrorContext

logger = logging.getLogger(__name__)


class EmailClient:
    """Thin async client for the transactional email provider."""

    SEND_PATH = "/email"

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout_seconds: float,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self.timeout_seconds = timeout_seconds
        self._authorization_token = authorization_token
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
        )

    @property
    def send_url(self) -> str:
        return f"{self.base_url}{self.SEND_PATH}"

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_body: str,
        text_body: str,
        context: ErrorContext | None = None,
    ) -> None:
        """POST one email to the provider. Raises EmailDeliveryError on failure."""
        payload = {
            "from": self.sender.value,
            "to": recipient.value,
            "subject": subject,
            "html_body": html_body,
            "text_body": text_body,
        }
        headers = {
            "Authorization": (
                f"Bearer {self._authorization_token.get_secret_value()}"
            ),
        }
        log_extra = {"recipient_domain": recipient.domain}
        started = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self.send_url,
                    json=payload,
                    headers=headers,
                    timeout=httpx.Timeout(self.timeout_seconds),
                ),
                timeout=self.timeout_seconds,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(
                f"Email provider timed out after {self.timeout_seconds}s",
                extra=log_extra,
            )
            raise EmailDeliveryError(
                EmailDeliveryError.TIMEOUT,
                f"no response within {self.timeout_seconds}s ({type(e).__name__})",
                context=context,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Email provider transport error: {e}", extra=log_extra)
            raise EmailDeliveryError(
                EmailDeliveryError.TRANSPORT, str(e) or type(e).__name__,
                context=context,
            )

        elapsed_ms = int((time.monotonic() - started) * 1000)
        if not response.is_success:
            logger.warning(
                "Email provider rejected request",
                extra={
                    **log_extra,
                    "status_code": response.status_code,
                    "elapsed_ms": elapsed_ms,
                },
            )
            raise EmailDeliveryError(
                EmailDeliveryError.TRANSPORT,
                f"provider responded with HTTP {response.status_code}",
                status_code=response.status_code,
                context=context,
            )

        logger.info(
            "Email sent",
            extra={
                **log_extra,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()


# Singleton (initialized on startup)
email_client: EmailClient | None = None


def init_email_client(
    base_url: str,
    sender: SubscriberEmail,
    authorization_token: SecretStr,
    timeout_seconds: float,
) -> EmailClient:
    global email_client
    email_client = EmailClient(
        base_url, sender, authorization_token, timeout_seconds,
    )
    return email_client


async def close_email_client() -> None:
    global email_client
    if email_client is not None:
        await email_client.aclose()
        email_client = None


def get_email_client() -> EmailClient:
    """FastAPI dependency for the shared email client."""
    if not email_client:
        raise RuntimeError("Email client not initialized")
    return email_client

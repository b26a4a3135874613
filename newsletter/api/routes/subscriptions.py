"""Subscriptions — POST /subscriptions, the subscription intake endpoint.

Invariants:
    - Body is application/x-www-form-urlencoded with required name and email
    - Missing field → 400 (RequestValidationError handler)
    - Domain validation failure → 400, nothing persisted, no email sent
    - Storage failure → 500, no email sent
    - Delivery failure → 500, stored record kept
    - Success → 200 with an empty body
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.infrastructure.database import get_db
from newsletter.infrastructure.email_client import EmailClient, get_email_client
from newsletter.schemas.subscription import SubscriptionForm
from newsletter.services.handle_subscribe import handle_subscribe
from newsletter.services.subscription_repository import SqlSubscriptionRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", status_code=status.HTTP_200_OK)
async def subscribe(
    form: Annotated[SubscriptionForm, Form()],
    db: AsyncSession = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
) -> Response:
    """Validate, store, and confirm a new subscriber."""
    subscriber = form.to_new_subscriber()
    await handle_subscribe(
        subscriber, SqlSubscriptionRepository(db), email_client,
    )
    return Response(status_code=status.HTTP_200_OK)

"""Subscribe Handler — persist a validated subscriber, then send the confirmation email.

Invariants:
    - Input is already a NewSubscriber: validation happened at construction
    - Storage failure → SubscriptionStorageError propagates, email never sent
    - Delivery failure → EmailDeliveryError propagates, stored record is kept
    - Exactly one insert and at most one send per call

Design Decisions:
    - Repository and sender passed in as protocols: routes wire the real ones,
      tests pass fakes
    - No retry or outbox for failed deliveries (see DESIGN.md, delivery failures)
"""

import logging

from newsletter.core.confirmation_email import build_confirmation_email
from newsletter.core.domain_types import NewSubscriber, SubscriptionId
from newsletter.core.errors import ErrorContext
from newsletter.core.repository_protocols import (
    EmailSender, SubscriptionRepository,
)

logger = logging.getLogger(__name__)


async def handle_subscribe(
    subscriber: NewSubscriber,
    repository: SubscriptionRepository,
    email_sender: EmailSender,
) -> SubscriptionId:
    """Run the persist → notify steps for one subscription request."""
    subscription_id = await repository.insert(subscriber)

    email = build_confirmation_email(subscriber)
    await email_sender.send_email(
        subscriber.email,
        email.subject,
        email.html_body,
        email.text_body,
        context=ErrorContext(subscription_id=str(subscription_id)),
    )
    logger.info(
        "Subscription accepted",
        extra={"subscription_id": str(subscription_id)},
    )
    return subscription_id

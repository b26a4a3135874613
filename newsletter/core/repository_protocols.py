"""Boundary Protocols — contracts between the subscription pipeline and its IO.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Persistence and email delivery accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass plain fakes
"""

from typing import Protocol

from newsletter.core.domain_types import (
    NewSubscriber, SubscriberEmail, SubscriptionId,
)
from newsletter.core.errors import ErrorContext


class SubscriptionRepository(Protocol):
    """Contract for subscription persistence; raises SubscriptionStorageError."""
    async def insert(self, subscriber: NewSubscriber) -> SubscriptionId: ...


class EmailSender(Protocol):
    """Contract for transactional email delivery; raises EmailDeliveryError."""
    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_body: str,
        text_body: str,
        context: ErrorContext | None = None,
    ) -> None: ...

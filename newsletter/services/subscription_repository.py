"""Subscription Repository — SQL implementation of the SubscriptionRepository protocol.

Invariants:
    - insert() writes one row in one commit: the record is fully visible or absent
    - id and subscribed_at are generated per call, never taken from the caller
    - On failure the session is rolled back before SubscriptionStorageError is raised
    - Never reads a record back
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.domain_types import (
    NewSubscriber, SubscriptionId, SubscriptionStatus,
)
from newsletter.infrastructure.database import to_storage_error
from newsletter.models.subscription import Subscription

logger = logging.getLogger(__name__)


class SqlSubscriptionRepository:
    """Persists subscriptions through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, subscriber: NewSubscriber) -> SubscriptionId:
        record = Subscription(
            id=uuid.uuid4(),
            email=subscriber.email.value,
            name=subscriber.name.value,
            subscribed_at=datetime.now(timezone.utc),
            status=SubscriptionStatus.PENDING_CONFIRMATION.value,
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            error = to_storage_error(e)
            logger.error(
                f"Failed to insert subscription: {e}",
                extra={"error_code": error.code},
            )
            raise error
        logger.info(
            "Subscription stored",
            extra={"subscription_id": str(record.id)},
        )
        return SubscriptionId(record.id)

"""Subscription ORM — one row per accepted newsletter subscription.

Invariants:
    - id is a UUID generated at insert time
    - email is unique: the storage engine, not the application, prevents duplicates
    - subscribed_at is timezone-aware UTC
    - status defaults to "pending_confirmation"; this service never updates or deletes rows
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from newsletter.core.domain_types import SubscriptionStatus
from newsletter.db.base import Base


class Subscription(Base):
    """Persisted subscription record."""
    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=SubscriptionStatus.PENDING_CONFIRMATION.value,
    )

"""Subscription Form — urlencoded body of POST /subscriptions.

Invariants:
    - name and email are both required; a missing field is a RequestValidationError (400)
    - No trimming or constraint checks here: SubscriberName/SubscriberEmail.parse own them
"""

from pydantic import BaseModel

from newsletter.core.domain_types import NewSubscriber


class SubscriptionForm(BaseModel):
    """Raw form fields as submitted."""
    name: str
    email: str

    def to_new_subscriber(self) -> NewSubscriber:
        return NewSubscriber.parse(self.name, self.email)

"""Confirmation Email — fixed subject and bodies sent after a subscription is stored.

Invariants:
    - Pure function of the subscriber: no IO, no clock
    - Subscriber name is HTML-escaped in html_body, verbatim in text_body
"""

from dataclasses import dataclass
from html import escape

from newsletter.core.domain_types import NewSubscriber

CONFIRMATION_SUBJECT = "Welcome to our newsletter!"


@dataclass(frozen=True)
class ConfirmationEmail:
    subject: str
    html_body: str
    text_body: str


def build_confirmation_email(subscriber: NewSubscriber) -> ConfirmationEmail:
    name = subscriber.name.value
    return ConfirmationEmail(
        subject=CONFIRMATION_SUBJECT,
        html_body=(
            f"<p>Hi {escape(name)},</p>"
            "<p>Thanks for subscribing to our newsletter. "
            "Your subscription is pending confirmation.</p>"
        ),
        text_body=(
            f"Hi {name},\n\n"
            "Thanks for subscribing to our newsletter. "
            "Your subscription is pending confirmation."
        ),
    )

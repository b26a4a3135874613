"""Domain Types — smart-constructor value types for subscriber input.

Invariants:
    - SubscriberName: non-empty after trim, <= 256 graphemes, no forbidden characters
    - SubscriberEmail: local-part@domain per email-validator grammar (no DNS lookups)
    - Every construction path runs the checks in __post_init__; frozen afterwards
    - Failures raise SubscriberValidationError, never a bare ValueError

Design Decisions:
    - Frozen dataclasses over NewType: NewType cannot enforce construction-time
      validation, and downstream code must never re-validate
    - email-validator over a hand-written regex: same grammar pydantic's EmailStr uses.
      Deliverability policy is off, so dotless and reserved domains are accepted
    - Grapheme length counts extended grapheme clusters (regex \\X), so a flag,
      an emoji with its variation selector, or e + U+0301 each count once
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID

import email_validator
import regex
from email_validator import EmailNotValidError, validate_email

from newsletter.core.errors import SubscriberValidationError


# ─── Identity Types ──────────────────────────────────────────────

SubscriptionId = NewType("SubscriptionId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class SubscriptionStatus(str, Enum):
    """Subscription lifecycle states, mapped to the DB `status` column."""
    PENDING_CONFIRMATION = "pending_confirmation"


# ─── Value Types ─────────────────────────────────────────────────

MAX_NAME_GRAPHEMES = 256
FORBIDDEN_NAME_CHARACTERS = frozenset('/()"<>\\{}')

_GRAPHEME = regex.compile(r"\X")

# Grammar only: "ursula@localhost" is well-formed even though it is not
# globally deliverable.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def grapheme_length(text: str) -> int:
    return len(_GRAPHEME.findall(text))


def _trimmed(field: str, raw: object) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise SubscriberValidationError(field, "empty")
    return raw.strip()


@dataclass(frozen=True)
class SubscriberName:
    """A validated subscriber display name."""
    value: str

    def __post_init__(self):
        trimmed = _trimmed("name", self.value)
        if grapheme_length(trimmed) > MAX_NAME_GRAPHEMES:
            raise SubscriberValidationError("name", "too_long")
        if any(ch in FORBIDDEN_NAME_CHARACTERS for ch in trimmed):
            raise SubscriberValidationError("name", "forbidden_characters")
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def parse(cls, raw: str) -> "SubscriberName":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberEmail:
    """A syntactically valid email address."""
    value: str

    def __post_init__(self):
        trimmed = _trimmed("email", self.value)
        try:
            validate_email(
                trimmed, check_deliverability=False, globally_deliverable=False,
            )
        except EmailNotValidError:
            raise SubscriberValidationError("email", "malformed_email")
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        return cls(raw)

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    """Validated name/email pair for a single subscription request."""
    name: SubscriberName
    email: SubscriberEmail

    def __post_init__(self):
        # Raw text goes through the field constructors; name first.
        if not isinstance(self.name, SubscriberName):
            object.__setattr__(self, "name", SubscriberName(self.name))
        if not isinstance(self.email, SubscriberEmail):
            object.__setattr__(self, "email", SubscriberEmail(self.email))

    @classmethod
    def parse(cls, name: str, email: str) -> "NewSubscriber":
        """Validate both fields; the name is checked first."""
        return cls(
            name=SubscriberName.parse(name),
            email=SubscriberEmail.parse(email),
        )

"""Domain Types — verifies the smart constructors for subscriber name and email.

Tests:
    - SubscriberName rejects empty, too-long, and forbidden-character input
    - SubscriberName keeps the trimmed text and counts grapheme clusters
    - Direct construction runs the same checks as parse
    - SubscriberEmail accepts local@domain, rejects missing @ or either side
    - NewSubscriber validates name before email
    - Instances are immutable
"""

import dataclasses

import pytest

from newsletter.core.domain_types import (
    FORBIDDEN_NAME_CHARACTERS, MAX_NAME_GRAPHEMES,
    NewSubscriber, SubscriberEmail, SubscriberName, SubscriptionStatus,
    grapheme_length,
)
from newsletter.core.errors import SubscriberValidationError


# ==============================================================================
# SubscriberName
# ==============================================================================


def test_name_of_max_length_is_accepted():
    name = SubscriberName.parse("a" * MAX_NAME_GRAPHEMES)
    assert len(name.value) == MAX_NAME_GRAPHEMES


def test_multibyte_name_of_max_length_is_accepted():
    name = SubscriberName.parse("ё" * MAX_NAME_GRAPHEMES)
    assert name.value == "ё" * MAX_NAME_GRAPHEMES


def test_combining_marks_do_not_count_towards_length():
    # "e" + COMBINING ACUTE ACCENT is one grapheme
    SubscriberName.parse("e\u0301" * MAX_NAME_GRAPHEMES)


@pytest.mark.parametrize("grapheme", [
    "\U0001F1EB\U0001F1F7",  # flag: two regional indicators
    "\u2764\ufe0f",  # heart + variation selector
    "\U0001F469\u200d\U0001F4BB",  # ZWJ sequence
    "\u1100\u1161\u11a8",  # Hangul jamo
])
def test_multi_code_point_grapheme_counts_once(grapheme):
    assert grapheme_length(grapheme) == 1
    SubscriberName.parse(grapheme * MAX_NAME_GRAPHEMES)


def test_one_flag_over_max_is_rejected():
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberName.parse("\U0001F1EB\U0001F1F7" * (MAX_NAME_GRAPHEMES + 1))
    assert exc_info.value.reason == "too_long"


def test_name_longer_than_max_is_rejected():
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberName.parse("a" * (MAX_NAME_GRAPHEMES + 1))
    assert exc_info.value.field == "name"
    assert exc_info.value.reason == "too_long"


@pytest.mark.parametrize("raw", ["", " ", "\t\n  "])
def test_blank_name_is_rejected(raw):
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberName.parse(raw)
    assert exc_info.value.reason == "empty"


@pytest.mark.parametrize("char", sorted(FORBIDDEN_NAME_CHARACTERS))
def test_name_with_forbidden_character_is_rejected(char):
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberName.parse(f"Ursula{char}Le Guin")
    assert exc_info.value.reason == "forbidden_characters"


def test_forbidden_character_set_matches_expected():
    assert FORBIDDEN_NAME_CHARACTERS == set('/()"<>\\{}')


@pytest.mark.parametrize("raw, expected", [
    ("Ursula Le Guin", "Ursula Le Guin"),
    ("  le guin  ", "le guin"),
    ("José Saramago", "José Saramago"),
    ("O'Brien-Smith", "O'Brien-Smith"),
])
def test_valid_name_round_trips_trimmed_text(raw, expected):
    name = SubscriberName.parse(raw)
    assert name.value == expected
    assert str(name) == expected


@pytest.mark.parametrize("raw, reason", [
    ("<script>", "forbidden_characters"),
    ("", "empty"),
    ("a" * (MAX_NAME_GRAPHEMES + 1), "too_long"),
])
def test_direct_name_construction_is_validated(raw, reason):
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberName(raw)
    assert exc_info.value.reason == reason


def test_direct_construction_trims_like_parse():
    assert SubscriberName("  le guin ") == SubscriberName.parse("le guin")


def test_name_is_immutable():
    name = SubscriberName.parse("Ursula")
    with pytest.raises(dataclasses.FrozenInstanceError):
        name.value = "Other"


# ==============================================================================
# SubscriberEmail
# ==============================================================================


@pytest.mark.parametrize("raw", [
    "ursula_le_guin@gmail.com",
    "first.last+news@mail.co.uk",
    "someone@newsletter.io",
    "  padded@gmail.com  ",
    "user@domain",
    "ursula@localhost",
])
def test_well_formed_email_is_accepted(raw):
    email = SubscriberEmail.parse(raw)
    assert email.value == raw.strip()


@pytest.mark.parametrize("raw", [
    "ursuladomain.com",
    "@domain.com",
    "ursula@",
    "ursula@@gmail.com",
    "ursula le guin@gmail.com",
])
def test_malformed_email_is_rejected(raw):
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberEmail.parse(raw)
    assert exc_info.value.field == "email"
    assert exc_info.value.reason == "malformed_email"


@pytest.mark.parametrize("raw", ["", "   "])
def test_blank_email_is_rejected(raw):
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberEmail.parse(raw)
    assert exc_info.value.reason == "empty"


def test_direct_email_construction_is_validated():
    with pytest.raises(SubscriberValidationError) as exc_info:
        SubscriberEmail("nope")
    assert exc_info.value.reason == "malformed_email"


def test_email_domain_is_the_part_after_the_at_sign():
    assert SubscriberEmail.parse("ursula@gmail.com").domain == "gmail.com"


# ==============================================================================
# NewSubscriber
# ==============================================================================


def test_new_subscriber_holds_both_validated_values():
    subscriber = NewSubscriber.parse("le guin", "ursula_le_guin@gmail.com")
    assert subscriber.name == SubscriberName("le guin")
    assert subscriber.email == SubscriberEmail("ursula_le_guin@gmail.com")


def test_new_subscriber_reports_name_first_when_both_invalid():
    with pytest.raises(SubscriberValidationError) as exc_info:
        NewSubscriber.parse("", "not-an-email")
    assert exc_info.value.field == "name"


def test_new_subscriber_built_from_raw_text_is_validated():
    with pytest.raises(SubscriberValidationError) as exc_info:
        NewSubscriber(name="<script>", email="ursula@gmail.com")
    assert exc_info.value.field == "name"


def test_subscription_status_default_value():
    assert SubscriptionStatus.PENDING_CONFIRMATION.value == "pending_confirmation"

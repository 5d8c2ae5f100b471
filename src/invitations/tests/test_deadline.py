"""Unit tests for RSVP deadline resolution."""

from datetime import datetime, timedelta, timezone

import pytest

from src.config.settings import Settings
from src.invitations.deadline import has_deadline_passed, resolve_deadline

EXTENDED_TOKENS = frozenset({"familia-lopez", "tia-rosa"})
BASE_CUTOFF = datetime(2025, 11, 16, 6, 0, tzinfo=timezone.utc)
EXTENDED_CUTOFF = datetime(2025, 12, 1, 6, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("token", ["familia-lopez", "tia-rosa"])
def test_resolve_deadline_extended_token(token):
    deadline = resolve_deadline(token, EXTENDED_TOKENS)

    assert deadline.extended is True
    assert deadline.cutoff == EXTENDED_CUTOFF
    assert deadline.label == "30 de noviembre de 2025"


@pytest.mark.parametrize("token", ["otro", "FAMILIA-LOPEZ", " familia-lopez", "", None])
def test_resolve_deadline_base_token(token):
    """Anything that is not an exact member of the list gets the base cutoff."""
    deadline = resolve_deadline(token, EXTENDED_TOKENS)

    assert deadline.extended is False
    assert deadline.cutoff == BASE_CUTOFF
    assert deadline.label == "15 de noviembre de 2025"


def test_has_deadline_passed_at_cutoff():
    assert has_deadline_passed("otro", now=BASE_CUTOFF, extended_tokens=EXTENDED_TOKENS) is True
    assert (
        has_deadline_passed("otro", now=BASE_CUTOFF - timedelta(seconds=1), extended_tokens=EXTENDED_TOKENS)
        is False
    )


def test_has_deadline_passed_uses_extended_cutoff():
    now = BASE_CUTOFF + timedelta(days=3)

    assert has_deadline_passed("otro", now=now, extended_tokens=EXTENDED_TOKENS) is True
    assert has_deadline_passed("familia-lopez", now=now, extended_tokens=EXTENDED_TOKENS) is False


def test_settings_extended_tokens_are_trimmed_and_blank_entries_dropped():
    config = Settings(rsvp_extended_tokens=" familia-lopez, ,tia-rosa,,")
    assert config.get_extended_tokens() == EXTENDED_TOKENS

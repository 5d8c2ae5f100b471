from collections.abc import Collection
from datetime import datetime, timezone
from functools import lru_cache

from src.config.settings import settings
from src.invitations.dtos import DeadlineConfig


@lru_cache
def get_extended_tokens() -> frozenset[str]:
    """Tokens allowed to confirm until the extended deadline, read once per process."""
    return settings.get_extended_tokens()


def resolve_deadline(
    token: str | None,
    extended_tokens: Collection[str] | None = None,
) -> DeadlineConfig:
    if extended_tokens is None:
        extended_tokens = get_extended_tokens()

    if token and token in extended_tokens:
        return DeadlineConfig(
            cutoff=settings.rsvp_extended_deadline,
            label=settings.rsvp_extended_deadline_label,
            extended=True,
        )

    return DeadlineConfig(
        cutoff=settings.rsvp_base_deadline,
        label=settings.rsvp_base_deadline_label,
        extended=False,
    )


def has_deadline_passed(
    token: str | None,
    now: datetime | None = None,
    extended_tokens: Collection[str] | None = None,
) -> bool:
    if now is None:
        now = datetime.now(timezone.utc)
    return now >= resolve_deadline(token, extended_tokens).cutoff

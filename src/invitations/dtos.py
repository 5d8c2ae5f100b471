from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

ENTRY_PAYLOAD_TYPE = "wedding-entry"
PLACEHOLDER_GUEST_NAME = "Invitado/a"


class LookupUnavailableError(Exception):
    """Raised when the party or RSVP status store cannot be reached."""

    def __init__(self, resource: str, token: str) -> None:
        self.resource = resource
        self.token = token
        super().__init__(f"Could not load {resource} for token '{token}'")


class SummaryType(str, Enum):
    INDIVIDUAL = "individual"
    GROUP = "grupo"


@dataclass(frozen=True)
class DeadlineConfig:
    """RSVP cutoff that applies to an invitation token."""

    cutoff: datetime
    label: str
    extended: bool


@dataclass(frozen=True)
class Member:
    name: str
    answer: str


@dataclass(frozen=True)
class PlainComment:
    """Stored note that was free text rather than a JSON object."""

    text: str


@dataclass(frozen=True)
class StructuredNote:
    """Stored note sent by the group RSVP form."""

    # None when the stored object has no members list at all
    members: list[Any] | None = None
    extras: list[Any] = field(default_factory=list)
    comment: str | None = None


StoredNote = PlainComment | StructuredNote


@dataclass(frozen=True)
class ConfirmationSummary:
    """Canonical view of a stored RSVP record, recomputed on each render."""

    type: SummaryType = SummaryType.INDIVIDUAL
    submitted_at: str | None = None
    note: str | None = None
    guests: int | float = 0
    confirmed: int | None = None
    confirmed_members: int = 0
    members: list[Member] = field(default_factory=list)
    extras: list[Any] = field(default_factory=list)
    hash: str | None = None


@dataclass(frozen=True)
class EntryPayload:
    """Data embedded in the QR code scanned at the entrance."""

    event: str
    name: str
    seats: int
    token: str | None
    hash: str | None = None
    type: str = ENTRY_PAYLOAD_TYPE

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "event": self.event,
            "name": self.name,
            "seats": self.seats,
            "token": self.token,
        }
        if self.hash:
            data["hash"] = self.hash
        return data


@dataclass(frozen=True)
class PartyDTO:
    """Party record returned by the party lookup."""

    members: list[Any] = field(default_factory=list)
    allowed_extra: Any = 0
    display_name: str | None = None

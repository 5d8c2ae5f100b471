"""
Loads everything the details page needs for one invitation token.

The party lookup and the RSVP status lookup run concurrently and each one
applies its result to a shared ``InvitationDetails`` as soon as it resolves.
Results are dropped once the state has been cancelled.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.invitations.credential import build_entry_payload
from src.invitations.dtos import (
    ConfirmationSummary,
    EntryPayload,
    LookupUnavailableError,
    PartyDTO,
)
from src.invitations.repository.lookups import PartyLookup, RSVPStatusLookup, compute_seats
from src.invitations.summary import summarize

logger = logging.getLogger(__name__)


@dataclass
class InvitationDetails:
    token: str
    display_name: str = ""
    # Name passed in the invitation link wins over the party's display name
    name_from_query: bool = False
    seats: int = 1
    summary: ConfirmationSummary | None = None
    show_credential: bool = False
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def apply_party(self, party: PartyDTO) -> None:
        self.seats = compute_seats(party)
        if not self.name_from_query and party.display_name:
            self.display_name = party.display_name

    def apply_status(self, record: Mapping[str, Any]) -> None:
        if self.summary is not None:
            return
        self.summary = summarize(record, record.get("name") or self.display_name)
        self.show_credential = True

    def entry_payload(self) -> EntryPayload:
        return build_entry_payload(
            name=self.display_name,
            seats=self.seats,
            token=self.token,
            summary_hash=self.summary.hash if self.summary else None,
        )


class InvitationDetailsLoader:
    def __init__(self, party_lookup: PartyLookup, status_lookup: RSVPStatusLookup):
        self._party_lookup = party_lookup
        self._status_lookup = status_lookup

    async def _load_party(self, details: InvitationDetails) -> None:
        try:
            party = await self._party_lookup.get_party(details.token)
        except LookupUnavailableError as e:
            logger.error(f"Failed to load party: {e}")
            return

        if details.cancelled:
            logger.debug(f"Discarding party result for cancelled token {details.token}")
            return
        if party:
            details.apply_party(party)

    async def _load_status(self, details: InvitationDetails) -> None:
        try:
            record = await self._status_lookup.get_status(details.token)
        except LookupUnavailableError as e:
            logger.error(f"Failed to load RSVP status: {e}")
            return

        if details.cancelled:
            logger.debug(f"Discarding RSVP status for cancelled token {details.token}")
            return
        if record:
            details.apply_status(record)

    async def load_into(self, details: InvitationDetails) -> InvitationDetails:
        results = await asyncio.gather(
            self._load_party(details),
            self._load_status(details),
            return_exceptions=True,
        )
        # Both lookups have settled; only now surface an unexpected failure
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return details

    async def load(self, token: str, name: str | None = None) -> InvitationDetails:
        details = InvitationDetails(
            token=token,
            display_name=name or "",
            name_from_query=bool(name),
        )
        return await self.load_into(details)

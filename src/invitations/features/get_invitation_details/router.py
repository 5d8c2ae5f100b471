from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.invitations.calendar import build_calendar_url, format_submitted_at
from src.invitations.credential import encode_payload
from src.invitations.dependencies import get_details_loader
from src.invitations.details import InvitationDetailsLoader
from src.invitations.dtos import ConfirmationSummary, SummaryType
from src.invitations.features.get_deadline.router import DeadlineResponse
from src.invitations.urls import GET_INVITATION_DETAILS_URL

router = APIRouter()


class MemberResponse(BaseModel):
    name: str
    answer: str


class ConfirmationSummaryResponse(BaseModel):
    """Canonical confirmation summary for a stored RSVP."""

    type: SummaryType
    submitted_at: Any = None
    submitted_at_label: str | None = None
    note: str | None = None
    guests: int | float
    confirmed: int | None = None
    confirmed_members: int
    members: list[MemberResponse] = []
    extras: list[Any] = []
    hash: str | None = None

    @classmethod
    def from_summary(cls, summary: ConfirmationSummary) -> "ConfirmationSummaryResponse":
        return cls(
            type=summary.type,
            submitted_at=summary.submitted_at,
            submitted_at_label=format_submitted_at(summary.submitted_at),
            note=summary.note,
            guests=summary.guests,
            confirmed=summary.confirmed,
            confirmed_members=summary.confirmed_members,
            members=[MemberResponse(name=member.name, answer=member.answer) for member in summary.members],
            extras=summary.extras,
            hash=summary.hash,
        )


class InvitationDetailsResponse(BaseModel):
    token: str
    display_name: str
    seats: int
    deadline: DeadlineResponse
    confirmation: ConfirmationSummaryResponse | None = None
    show_credential: bool
    entry_payload: str
    calendar_url: str


@router.get(GET_INVITATION_DETAILS_URL, response_model=InvitationDetailsResponse)
async def get_invitation_details(
    token: str,
    n: str | None = None,
    loader: InvitationDetailsLoader = Depends(get_details_loader),
) -> InvitationDetailsResponse:
    """
    Get the details page state for an invitation token.
    ``n`` is the guest name carried by the invitation link, if any.
    When the store cannot be reached the pre-confirmation state is returned.
    """
    details = await loader.load(token, name=n)

    return InvitationDetailsResponse(
        token=token,
        display_name=details.display_name,
        seats=details.seats,
        deadline=DeadlineResponse.for_token(token),
        confirmation=(
            ConfirmationSummaryResponse.from_summary(details.summary) if details.summary else None
        ),
        show_credential=details.show_credential,
        entry_payload=encode_payload(details.entry_payload()),
        calendar_url=build_calendar_url(),
    )

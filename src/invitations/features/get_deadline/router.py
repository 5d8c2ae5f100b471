from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from src.invitations.deadline import has_deadline_passed, resolve_deadline
from src.invitations.urls import GET_DEADLINE_URL

router = APIRouter()


class DeadlineResponse(BaseModel):
    """RSVP cutoff that gates the confirmation form."""

    cutoff: datetime
    label: str
    extended: bool
    passed: bool

    @classmethod
    def for_token(cls, token: str | None) -> "DeadlineResponse":
        deadline = resolve_deadline(token)
        return cls(
            cutoff=deadline.cutoff,
            label=deadline.label,
            extended=deadline.extended,
            passed=has_deadline_passed(token),
        )


@router.get(GET_DEADLINE_URL, response_model=DeadlineResponse)
async def get_deadline(token: str) -> DeadlineResponse:
    """
    Get the RSVP deadline for an invitation token.
    Parties in the extension list get the later cutoff; unknown tokens get the base one.
    """
    return DeadlineResponse.for_token(token)

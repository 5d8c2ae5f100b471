from fastapi import Depends

from src.invitations.details import InvitationDetailsLoader
from src.invitations.repository.lookups import (
    HttpPartyLookup,
    HttpRSVPStatusLookup,
    PartyLookup,
    RSVPStatusLookup,
)


def get_party_lookup() -> PartyLookup:
    """Dependency to get the party lookup. Override in tests."""
    return HttpPartyLookup()


def get_rsvp_status_lookup() -> RSVPStatusLookup:
    """Dependency to get the RSVP status lookup. Override in tests."""
    return HttpRSVPStatusLookup()


def get_details_loader(
    party_lookup: PartyLookup = Depends(get_party_lookup),
    status_lookup: RSVPStatusLookup = Depends(get_rsvp_status_lookup),
) -> InvitationDetailsLoader:
    return InvitationDetailsLoader(party_lookup=party_lookup, status_lookup=status_lookup)

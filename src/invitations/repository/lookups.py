"""Read-only access to the party and RSVP status store. Returns DTOs / raw records."""

import abc
import math
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from src.config.settings import settings
from src.invitations.dtos import LookupUnavailableError, PartyDTO

PARTY_PATH = "/api/party"
RSVP_STATUS_PATH = "/api/rsvp-status"


class LookupConfig(Protocol):
    invitation_api_url: str
    lookup_timeout_seconds: float


class PartyLookup(abc.ABC):
    @abc.abstractmethod
    async def get_party(self, token: str) -> PartyDTO | None:
        """
        Get the party invited with this token.
        Returns None when the store has no party for it.
        """
        raise NotImplementedError


class RSVPStatusLookup(abc.ABC):
    @abc.abstractmethod
    async def get_status(self, token: str) -> Mapping[str, Any] | None:
        """
        Get the stored RSVP record for this token, untouched.
        Returns None while the party has not confirmed.
        """
        raise NotImplementedError


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def compute_seats(party: PartyDTO) -> int:
    """Named members plus allowed extra companions, never less than one."""
    members = sum(1 for member in party.members if member)
    total = members + _as_number(party.allowed_extra)
    return int(total) if total > 0 else 1


class _HttpLookup:
    resource = ""
    path = ""

    def __init__(
        self,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: LookupConfig = settings,
    ):
        self._http_client_class = http_client_class
        self._config = config

    async def _fetch(self, token: str) -> dict[str, Any]:
        url = f"{self._config.invitation_api_url.rstrip('/')}{self.path}"
        try:
            async with self._http_client_class(timeout=self._config.lookup_timeout_seconds) as client:
                response = await client.get(url, params={"token": token})
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupUnavailableError(self.resource, token) from e

        return data if isinstance(data, dict) else {}


class HttpPartyLookup(_HttpLookup, PartyLookup):
    resource = "party"
    path = PARTY_PATH

    async def get_party(self, token: str) -> PartyDTO | None:
        data = await self._fetch(token)
        party = data.get("party")
        if not data.get("ok") or not isinstance(party, dict):
            return None

        members = party.get("members")
        return PartyDTO(
            members=list(members) if isinstance(members, list) else [],
            allowed_extra=party.get("allowedExtra", 0),
            display_name=party.get("displayName") or None,
        )


class HttpRSVPStatusLookup(_HttpLookup, RSVPStatusLookup):
    resource = "RSVP status"
    path = RSVP_STATUS_PATH

    async def get_status(self, token: str) -> Mapping[str, Any] | None:
        data = await self._fetch(token)
        status = data.get("status")
        if not data.get("ok") or not isinstance(status, dict):
            return None
        return status

"""Unit tests for the HTTP party / RSVP status lookups, mocking the HTTP client."""

import httpx
import pytest

from src.invitations.dtos import LookupUnavailableError, PartyDTO
from src.invitations.repository.lookups import (
    HttpPartyLookup,
    HttpRSVPStatusLookup,
    compute_seats,
)

# =============================================================================
# Mock HTTP infrastructure
# =============================================================================

BASE_URL = "https://invitacion.example"
PARTY_URL = f"{BASE_URL}/api/party"
STATUS_URL = f"{BASE_URL}/api/rsvp-status"


class MockResponse:
    def __init__(self, *, json_data=None, status_code=200, invalid_json=False):
        self._json_data = json_data
        self._invalid_json = invalid_json
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=httpx.Request("GET", "https://example.com"),
                response=httpx.Response(self.status_code),
            )

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data


class MockHttpClient:
    """
    Replaces httpx.AsyncClient as the http_client_class.

    The lookup calls self._http_client_class(timeout=...) and uses the result
    as an async context manager, so __call__ returns self.
    """

    def __init__(self):
        self.get_calls: list[dict] = []
        self.init_kwargs: dict = {}
        self._get_responses: dict[str, MockResponse | Exception] = {}

    def add_get(self, url: str, response: MockResponse | Exception) -> "MockHttpClient":
        self._get_responses[url] = response
        return self

    async def get(self, url: str, **kwargs) -> MockResponse:
        self.get_calls.append({"url": url, **kwargs})
        response = self._get_responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    def __call__(self, **kwargs):
        self.init_kwargs = kwargs
        return self


class MockConfig:
    invitation_api_url = f"{BASE_URL}/"
    lookup_timeout_seconds = 3.0


# =============================================================================
# Party lookup
# =============================================================================


@pytest.mark.asyncio
async def test_get_party_success():
    client = MockHttpClient().add_get(
        PARTY_URL,
        MockResponse(
            json_data={
                "ok": True,
                "party": {"members": ["Ana", "", "Luis"], "allowedExtra": 1, "displayName": "Familia López"},
            }
        ),
    )
    lookup = HttpPartyLookup(http_client_class=client, config=MockConfig())

    party = await lookup.get_party("tok 1")

    assert party == PartyDTO(members=["Ana", "", "Luis"], allowed_extra=1, display_name="Familia López")
    assert client.get_calls == [{"url": PARTY_URL, "params": {"token": "tok 1"}}]
    assert client.init_kwargs == {"timeout": 3.0}


@pytest.mark.asyncio
async def test_get_party_not_ok_returns_none():
    client = MockHttpClient().add_get(PARTY_URL, MockResponse(json_data={"ok": False}))
    lookup = HttpPartyLookup(http_client_class=client, config=MockConfig())

    assert await lookup.get_party("tok") is None


@pytest.mark.asyncio
async def test_get_party_http_error_raises_lookup_unavailable():
    client = MockHttpClient().add_get(PARTY_URL, MockResponse(status_code=502))
    lookup = HttpPartyLookup(http_client_class=client, config=MockConfig())

    with pytest.raises(LookupUnavailableError) as exc_info:
        await lookup.get_party("tok")
    assert exc_info.value.resource == "party"
    assert exc_info.value.token == "tok"


@pytest.mark.asyncio
async def test_get_party_connection_error_raises_lookup_unavailable():
    client = MockHttpClient().add_get(
        PARTY_URL, httpx.ConnectError("connection refused", request=httpx.Request("GET", PARTY_URL))
    )
    lookup = HttpPartyLookup(http_client_class=client, config=MockConfig())

    with pytest.raises(LookupUnavailableError):
        await lookup.get_party("tok")


# =============================================================================
# RSVP status lookup
# =============================================================================


@pytest.mark.asyncio
async def test_get_status_returns_raw_record():
    record = {"name": "Ana", "answer": "si", "note": "Felicidades!", "entryHash": "h"}
    client = MockHttpClient().add_get(STATUS_URL, MockResponse(json_data={"ok": True, "status": record}))
    lookup = HttpRSVPStatusLookup(http_client_class=client, config=MockConfig())

    assert await lookup.get_status("tok") == record


@pytest.mark.asyncio
async def test_get_status_without_record_returns_none():
    client = MockHttpClient().add_get(STATUS_URL, MockResponse(json_data={"ok": True, "status": None}))
    lookup = HttpRSVPStatusLookup(http_client_class=client, config=MockConfig())

    assert await lookup.get_status("tok") is None


@pytest.mark.asyncio
async def test_get_status_invalid_json_raises_lookup_unavailable():
    client = MockHttpClient().add_get(STATUS_URL, MockResponse(invalid_json=True))
    lookup = HttpRSVPStatusLookup(http_client_class=client, config=MockConfig())

    with pytest.raises(LookupUnavailableError):
        await lookup.get_status("tok")


# =============================================================================
# Seats
# =============================================================================


def test_compute_seats_skips_empty_members():
    assert compute_seats(PartyDTO(members=["Ana", ""], allowed_extra=1)) == 2


def test_compute_seats_floor_is_one():
    assert compute_seats(PartyDTO(members=[], allowed_extra=0)) == 1
    assert compute_seats(PartyDTO(members=[None, ""], allowed_extra=None)) == 1


def test_compute_seats_numeric_strings():
    assert compute_seats(PartyDTO(members=["Ana"], allowed_extra="2")) == 3
    assert compute_seats(PartyDTO(members=["Ana"], allowed_extra="muchos")) == 1


def test_compute_seats_non_finite_extra_counts_as_zero():
    assert compute_seats(PartyDTO(members=["Ana"], allowed_extra="Infinity")) == 1
    assert compute_seats(PartyDTO(members=["Ana", "Luis"], allowed_extra=float("inf"))) == 2
    assert compute_seats(PartyDTO(members=["Ana"], allowed_extra="-inf")) == 1
    assert compute_seats(PartyDTO(members=["Ana"], allowed_extra="nan")) == 1


@pytest.mark.asyncio
async def test_get_party_with_overflowing_extra_still_computes_seats():
    client = MockHttpClient().add_get(
        PARTY_URL,
        MockResponse(json_data={"ok": True, "party": {"members": ["Ana"], "allowedExtra": float("inf")}}),
    )
    lookup = HttpPartyLookup(http_client_class=client, config=MockConfig())

    party = await lookup.get_party("tok")

    assert compute_seats(party) == 1

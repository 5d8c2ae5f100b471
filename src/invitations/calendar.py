from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from src.config.settings import settings

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"

SPANISH_MONTHS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic")


def _calendar_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def build_calendar_url() -> str:
    """Google Calendar link that pre-fills the wedding event."""
    query = urlencode(
        {
            "action": "TEMPLATE",
            "text": settings.calendar_title,
            "dates": f"{_calendar_timestamp(settings.event_start)}/{_calendar_timestamp(settings.event_end)}",
            "details": settings.event_details,
            "location": settings.event_location,
        }
    )
    return f"{GOOGLE_CALENDAR_URL}?{query}"


def _parse_instant(value: Any) -> datetime | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # Epoch milliseconds, as stored by the RSVP form
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def format_submitted_at(value: Any) -> str | None:
    """Format when the RSVP was received, e.g. "27 dic 2025, 16:00" in the event timezone."""
    try:
        instant = _parse_instant(value)
    except (ValueError, OverflowError, OSError):
        return None
    if instant is None:
        return None

    local = instant.astimezone(ZoneInfo(settings.event_timezone))
    return f"{local.day} {SPANISH_MONTHS[local.month - 1]} {local.year}, {local:%H:%M}"

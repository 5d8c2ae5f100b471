import unicodedata
from typing import Any

YES = "Sí"
NO = "No"

AFFIRMATIVE_KEYS = frozenset({"si", "yes", "y"})
NEGATIVE_KEYS = frozenset({"no", "n"})
# Ticket-side check only lower-cases, so the accented spelling is listed too
AFFIRMATIVE_TOKENS = frozenset({"sí", "si", "yes", "y"})


def _comparison_key(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value.lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_answer(value: Any) -> str:
    """
    Map a free-form RSVP answer to "Sí", "No" or the trimmed original text.
    Recognized tokens are matched ignoring case and accents.
    """
    if value is None:
        return ""
    base = str(value).strip()
    key = _comparison_key(base)
    if key in AFFIRMATIVE_KEYS:
        return YES
    if key in NEGATIVE_KEYS:
        return NO
    return base


def is_affirmative(answer: Any) -> bool:
    return str(answer or "").strip().lower() in AFFIRMATIVE_TOKENS


def readable_answer(answer: Any) -> str:
    """Label printed next to a member's name on the ticket."""
    if is_affirmative(answer):
        return YES
    if str(answer or "").strip().lower() == "no":
        return NO
    if answer:
        return str(answer)
    return NO

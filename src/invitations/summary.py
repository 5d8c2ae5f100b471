import json
import logging
from collections.abc import Mapping
from typing import Any

from src.invitations.answers import YES, normalize_answer
from src.invitations.dtos import (
    ConfirmationSummary,
    Member,
    PlainComment,
    StoredNote,
    StructuredNote,
    SummaryType,
)

logger = logging.getLogger(__name__)


def _structured_note_from_mapping(data: Mapping[str, Any]) -> StructuredNote:
    members = data.get("members")
    extras = data.get("extras")
    comment = data.get("comment")
    return StructuredNote(
        members=list(members) if isinstance(members, list) else None,
        extras=list(extras) if isinstance(extras, list) else [],
        comment=comment if isinstance(comment, str) else None,
    )


def parse_stored_note(note: Any) -> StoredNote:
    """
    Turn the stored ``note`` field into a PlainComment or a StructuredNote.

    Group RSVPs store a JSON object string; older records hold free text.
    Never raises: anything that is not a JSON object becomes a plain comment.
    """
    if note is None or note == "":
        return StructuredNote()

    if isinstance(note, Mapping):
        return _structured_note_from_mapping(note)

    if isinstance(note, str):
        try:
            parsed = json.loads(note)
        except ValueError:
            logger.debug("Stored note is not JSON, using it as a plain comment")
            return PlainComment(text=note)
        if isinstance(parsed, Mapping):
            return _structured_note_from_mapping(parsed)
        return PlainComment(text=note)

    return StructuredNote()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _derive_members(
    record: Mapping[str, Any], note: StoredNote, fallback_name: str
) -> list[Member]:
    if isinstance(note, StructuredNote) and note.members is not None:
        members = []
        for entry in note.members:
            entry = entry if isinstance(entry, Mapping) else {}
            members.append(
                Member(
                    name=str(entry.get("name") or fallback_name or ""),
                    answer=normalize_answer(entry.get("answer")),
                )
            )
        if members:
            return members

    if record.get("name"):
        return [Member(name=str(record["name"]), answer=normalize_answer(record.get("answer")))]
    if fallback_name:
        return [Member(name=fallback_name, answer=normalize_answer(record.get("answer")))]
    return []


def _derive_comment(note: StoredNote, raw_note: Any) -> str | None:
    if isinstance(note, PlainComment):
        return note.text.strip() or note.text
    if note.comment and note.comment.strip():
        return note.comment.strip()
    # A stored JSON string without a members list is shown as written
    if isinstance(raw_note, str) and raw_note and note.members is None:
        return raw_note
    return None


def summarize(record: Mapping[str, Any], fallback_name: str = "") -> ConfirmationSummary:
    """Build the canonical confirmation summary for a stored RSVP record."""
    note = parse_stored_note(record.get("note"))
    members = _derive_members(record, note, fallback_name)
    extras = note.extras if isinstance(note, StructuredNote) else []

    confirmed_members = sum(1 for member in members if normalize_answer(member.answer) == YES)
    confirmed = confirmed_members + len(extras)
    guests = record.get("guests")

    return ConfirmationSummary(
        type=SummaryType.GROUP if len(members) > 1 else SummaryType.INDIVIDUAL,
        submitted_at=record.get("receivedAt") or record.get("timestamp") or None,
        note=_derive_comment(note, record.get("note")),
        guests=guests if _is_number(guests) else confirmed,
        confirmed=confirmed,
        confirmed_members=confirmed_members,
        members=members,
        extras=extras,
        hash=record.get("entryHash") or None,
    )

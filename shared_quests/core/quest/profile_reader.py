"""Profile status reader — raw profile data to ProfileRecord"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .enums import QuestStatus
from .errors import ParseError
from .models import ProfileRecord

logger = logging.getLogger(__name__)


def _unwrap_character(raw: dict) -> dict:
    """Game profile files nest the player character under characters.pmc."""
    characters = raw.get("characters")
    if isinstance(characters, dict) and isinstance(characters.get("pmc"), dict):
        return characters["pmc"]
    return raw


def _read_name(character: dict) -> str:
    info = character.get("Info")
    if isinstance(info, dict) and info.get("Nickname"):
        name = info["Nickname"]
    else:
        name = character.get("name") or character.get("nickname")
    if not isinstance(name, str) or not name.strip():
        raise ParseError("no identity")
    return name


def _read_progress(character: dict) -> list:
    progress = character.get("Quests", character.get("quests"))
    if progress is None:
        return []
    if not isinstance(progress, list):
        raise ParseError("quest progress is not a list")
    return progress


def parse_entry(entry: Any) -> tuple[str, QuestStatus]:
    """Decode one (quest id, status) entry. Raises ParseError."""
    if not isinstance(entry, dict):
        raise ParseError(f"progress entry is not an object: {entry!r}")
    quest_id = entry.get("qid", entry.get("id"))
    if not isinstance(quest_id, str) or not quest_id:
        raise ParseError("progress entry has no quest id")
    if "status" not in entry:
        raise ParseError(f"progress entry for {quest_id} has no status")
    try:
        status = QuestStatus.parse(entry["status"])
    except ParseError as e:
        raise ParseError(f"{quest_id}: {e}") from e
    return quest_id, status


def parse_profile(raw: Any) -> ProfileRecord:
    """Parse one raw profile.

    Raises ParseError("no identity") when the display name is missing.
    Malformed progress entries are dropped individually and listed in
    ``ProfileRecord.rejected``; the first entry for a quest id wins.
    """
    if not isinstance(raw, dict):
        raise ParseError("no identity")

    character = _unwrap_character(raw)
    name = _read_name(character)

    record = ProfileRecord(name=name)
    try:
        progress = _read_progress(character)
    except ParseError as e:
        record.rejected.append(str(e))
        progress = []

    for entry in progress:
        try:
            quest_id, status = parse_entry(entry)
        except ParseError as e:
            record.rejected.append(str(e))
            continue
        if quest_id in record.statuses:
            continue
        record.statuses[quest_id] = status

    if record.rejected:
        logger.warning(
            "Profile %s: dropped %d malformed quest entries (first: %s)",
            name,
            len(record.rejected),
            record.rejected[0],
        )
    return record


def parse_profiles(raws: Iterable[Any]) -> list[ProfileRecord]:
    """Best-effort parse of a batch. Records without identity are skipped."""
    records = []
    skipped = 0
    for raw in raws:
        try:
            records.append(parse_profile(raw))
        except ParseError as e:
            skipped += 1
            logger.warning("Skipping profile record: %s", e)
    if skipped:
        logger.info("Parsed %d profiles, skipped %d", len(records), skipped)
    return records


def get_status(record: ProfileRecord, quest_id: str) -> QuestStatus:
    """Recorded status, or Locked when the quest has no progress entry."""
    return record.statuses.get(quest_id, QuestStatus.LOCKED)

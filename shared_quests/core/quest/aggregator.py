"""Status aggregation over all profiles"""

import logging
from typing import Iterable, Optional

from .enums import QuestStatus
from .models import ProfileRecord, Quest, QuestStatusInfo, StatusTable
from .prerequisites import PrerequisiteIndex
from .profile_reader import get_status

logger = logging.getLogger(__name__)

HEADLESS_PREFIX = "headless_"


def is_headless(profile_name: str) -> bool:
    """Server-side automation profiles never appear in the table."""
    return profile_name.lower().startswith(HEADLESS_PREFIX)


def aggregate(
    profiles: Iterable[ProfileRecord],
    quests: Iterable[Quest],
    prereq_index: PrerequisiteIndex,
) -> StatusTable:
    """Build the per-profile, per-quest status table.

    Profiles keep their input order. A display name seen twice keeps the
    first position but the last record's data.
    """
    quests = list(quests)
    table = StatusTable()
    seen: set[str] = set()
    excluded = 0

    for record in profiles:
        if is_headless(record.name):
            excluded += 1
            continue

        row: dict[str, QuestStatusInfo] = {}
        for quest in quests:
            status = get_status(record, quest.quest_id)
            reason: Optional[str] = None
            if status is QuestStatus.LOCKED:
                reason = prereq_index.locked_reason(quest.quest_id)
            row[quest.quest_id] = QuestStatusInfo(status.value, reason)

        if record.name in seen:
            logger.warning(
                "Duplicate profile name %r, keeping the last one read", record.name
            )
        seen.add(record.name)
        table.set_profile(record.name, row)

    logger.debug(
        "Aggregated %d profiles x %d quests (%d headless excluded)",
        len(table),
        len(quests),
        excluded,
    )
    return table

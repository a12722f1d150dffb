"""Prerequisite index — quest id to the names of quests that unlock it"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping, Optional

from .errors import CatalogError
from .models import Quest

logger = logging.getLogger(__name__)

LOCKED_REASON_SEPARATOR = ", "


class PrerequisiteIndex(Mapping[str, tuple[str, ...]]):
    """Read-only mapping of quest id to prerequisite display names.

    Quests without prerequisites have no entry at all.
    """

    def __init__(self, entries: dict[str, tuple[str, ...]]) -> None:
        self._entries = entries

    def __getitem__(self, quest_id: str) -> tuple[str, ...]:
        return self._entries[quest_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def locked_reason(self, quest_id: str) -> Optional[str]:
        names = self._entries.get(quest_id)
        if not names:
            return None
        return LOCKED_REASON_SEPARATOR.join(names)


def build_prerequisite_index(quests: Iterable[Quest]) -> PrerequisiteIndex:
    """Resolve every quest's start prerequisites to display names.

    Names keep the order the quest's start conditions list them in, not
    the position of each prerequisite in the catalog.
    Unknown quest ids are kept as their raw id. Quests with no resolved
    prerequisite are omitted. Raises CatalogError for an empty catalog,
    so "no prerequisites" and "no data" stay distinguishable.
    """
    quests = list(quests)
    if not quests:
        raise CatalogError("no catalog: cannot build prerequisite index")

    names = {q.quest_id: q.name for q in quests if q.name}

    entries: dict[str, tuple[str, ...]] = {}
    misses = 0
    for quest in quests:
        resolved = []
        for prereq_id in quest.prerequisite_ids:
            name = names.get(prereq_id)
            if name is None:
                misses += 1
                logger.debug(
                    "Prerequisite %s of quest %s not in catalog, using raw id",
                    prereq_id,
                    quest.quest_id,
                )
                name = prereq_id
            resolved.append(name)
        if resolved:
            entries[quest.quest_id] = tuple(resolved)

    logger.info(
        "Prerequisite index built: %d of %d quests locked behind others (%d unresolved ids)",
        len(entries),
        len(quests),
        misses,
    )
    return PrerequisiteIndex(entries)

"""Quest catalog — decoded once from the game's quest templates"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from .errors import CatalogError
from .models import Quest, QuestCondition, decode_target

logger = logging.getLogger(__name__)

START_CONDITIONS_KEY = "AvailableForStart"


def _decode_quest(raw: dict, names: dict[str, str]) -> Quest:
    quest_id = raw["_id"]
    if not isinstance(quest_id, str) or not quest_id:
        raise ValueError("quest template has no _id")

    conditions = []
    raw_conditions = (raw.get("conditions") or {}).get(START_CONDITIONS_KEY) or []
    for cond in raw_conditions:
        if not isinstance(cond, dict):
            continue
        conditions.append(
            QuestCondition(
                condition_type=str(cond.get("conditionType", "")),
                target=decode_target(cond.get("target")),
            )
        )

    name = (
        names.get(f"{quest_id} name")
        or raw.get("QuestName")
        or raw.get("name")
        or ""
    )
    return Quest(quest_id=quest_id, name=name, start_conditions=tuple(conditions))


class QuestCatalog:
    """
    Ordered, read-only quest list.
    Built once at start-up; never reloaded while the process runs.
    """

    def __init__(self, quests: Iterable[Quest]) -> None:
        self._quests: dict[str, Quest] = {}
        for quest in quests:
            if quest.quest_id in self._quests:
                logger.warning("Duplicate quest id in catalog: %s", quest.quest_id)
                continue
            self._quests[quest.quest_id] = quest
        if not self._quests:
            raise CatalogError("no catalog: quest list is empty")

    @classmethod
    def from_records(
        cls,
        records: Any,
        locale: Optional[dict[str, str]] = None,
    ) -> QuestCatalog:
        """Decode raw quest templates.

        ``records`` is either the game's ``{id: template}`` mapping or a
        list of templates. ``locale`` maps ``"<id> name"`` keys to display
        names and takes precedence over ``QuestName``.
        """
        if isinstance(records, dict):
            records = list(records.values())
        if not isinstance(records, list):
            raise CatalogError("no catalog: quest data is not a list or mapping")

        names = locale or {}
        quests = []
        for raw in records:
            try:
                quests.append(_decode_quest(raw, names))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                quest_id = raw.get("_id", "?") if isinstance(raw, dict) else "?"
                logger.warning("Failed to load quest: %s — %s", quest_id, e)

        catalog = cls(quests)
        logger.info("Loaded %d quests", len(catalog))
        return catalog

    @classmethod
    def load(
        cls,
        path: str | Path,
        locale_path: str | Path | None = None,
    ) -> QuestCatalog:
        """Read quests.json (and optionally a locale file) from disk."""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogError(f"no catalog: cannot read {path}: {e}") from e

        locale = None
        if locale_path is not None:
            locale = _read_locale(Path(locale_path))

        logger.info("Reading quest catalog from %s", path)
        return cls.from_records(records, locale)

    def get(self, quest_id: str) -> Optional[Quest]:
        """O(1) lookup. None if absent."""
        return self._quests.get(quest_id)

    def display_name(self, quest_id: str) -> str:
        """Display name, or the raw id when unknown or unnamed."""
        quest = self._quests.get(quest_id)
        return quest.name if quest is not None and quest.name else quest_id

    def quest_ids(self) -> list[str]:
        return list(self._quests)

    def __iter__(self) -> Iterator[Quest]:
        return iter(self._quests.values())

    def __len__(self) -> int:
        return len(self._quests)


def _read_locale(path: Path) -> Optional[dict[str, str]]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Quest names unavailable, locale %s unreadable: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring locale %s: not a mapping", path)
        return None
    return data

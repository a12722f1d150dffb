"""Description Service — status block injection into quest descriptions

Works on strings only; callers hand in the status table and the
visibility settings for the request.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from shared_quests.core.quest.models import StatusTable
from shared_quests.core.quest.renderer import (
    DEFAULT_STYLE,
    StatusStyle,
    StatusTextRenderer,
    VisibilityPredicate,
)

logger = logging.getLogger(__name__)


def description_key(quest_id: str) -> str:
    return f"{quest_id} description"


def load_locales(directory: str | Path) -> dict[str, dict[str, str]]:
    """Read ``<lang>.json`` locale tables. Unreadable files are skipped."""
    directory = Path(directory)
    locales: dict[str, dict[str, str]] = {}
    if not directory.is_dir():
        logger.warning("Locale directory not found: %s", directory)
        return locales

    for path in sorted(directory.glob("*.json")):
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read locale %s — %s", path.name, e)
            continue
        if isinstance(data, dict):
            locales[path.stem] = data

    logger.info("Loaded %d locales from %s", len(locales), directory)
    return locales


class DescriptionService:
    """Merges rendered status blocks into description text."""

    def __init__(self, style: StatusStyle = DEFAULT_STYLE):
        self._style = style

    def describe(
        self,
        quest_id: str,
        original_text: str,
        table: StatusTable,
        visible: Optional[VisibilityPredicate] = None,
        enabled: bool = True,
    ) -> str:
        """Description with a fresh status block (or none when disabled)."""
        renderer = StatusTextRenderer(self._style, enabled=enabled)
        return renderer.merge(original_text, quest_id, table, visible)

    def apply_to_locales(
        self,
        locales: dict[str, dict[str, str]],
        quest_ids: Iterable[str],
        table: StatusTable,
        visible: Optional[VisibilityPredicate] = None,
        enabled: bool = True,
    ) -> int:
        """Rewrite every ``"<id> description"`` entry in place.

        Quests missing from a locale are left alone. Returns the number of
        entries rewritten.
        """
        renderer = StatusTextRenderer(self._style, enabled=enabled)
        updated = 0
        quest_ids = list(quest_ids)
        for lang, entries in locales.items():
            for quest_id in quest_ids:
                key = description_key(quest_id)
                original = entries.get(key)
                if original is None:
                    continue
                entries[key] = renderer.merge(original, quest_id, table, visible)
                updated += 1
            logger.debug("Locale %s: descriptions updated", lang)

        logger.info(
            "Updated %d quest descriptions across %d locales", updated, len(locales)
        )
        return updated

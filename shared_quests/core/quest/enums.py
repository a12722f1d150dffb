"""Quest enumerations"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import ParseError


class QuestStatus(int, Enum):
    """Per-profile quest status, numbered the way the game serializes it."""

    LOCKED = 0
    AVAILABLE_FOR_START = 1
    STARTED = 2
    AVAILABLE_FOR_FINISH = 3
    SUCCESS = 4
    FAIL = 5
    FAIL_RESTARTABLE = 6
    MARKED_AS_FAILED = 7
    EXPIRED = 8
    AVAILABLE_AFTER = 9

    @property
    def game_name(self) -> str:
        """Symbolic name as written in profile files, e.g. "AvailableForStart"."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def parse(cls, raw: Any) -> QuestStatus:
        """Decode an integer code or a symbolic name.

        Raises ParseError for out-of-range codes and unknown names.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            raise ParseError(f"invalid quest status: {raw!r}")
        if isinstance(raw, int):
            try:
                return cls(raw)
            except ValueError:
                raise ParseError(f"quest status out of range: {raw}") from None
        if isinstance(raw, str):
            text = raw.strip()
            if text.lstrip("-").isdigit():
                return cls.parse(int(text))
            status = _BY_NAME.get(text.replace("_", "").lower())
            if status is not None:
                return status
        raise ParseError(f"unknown quest status: {raw!r}")


_BY_NAME = {s.name.replace("_", "").lower(): s for s in QuestStatus}


class ConditionType(str, Enum):
    """Start condition kinds the prerequisite index cares about."""

    QUEST = "Quest"

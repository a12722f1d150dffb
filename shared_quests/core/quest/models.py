"""Quest status domain models (no I/O)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from .enums import ConditionType, QuestStatus


@dataclass(frozen=True)
class SingleId:
    """Condition target naming one quest"""

    quest_id: str

    def ids(self) -> tuple[str, ...]:
        return (self.quest_id,)


@dataclass(frozen=True)
class IdList:
    """Condition target naming several quests"""

    quest_ids: tuple[str, ...]

    def ids(self) -> tuple[str, ...]:
        return self.quest_ids


PrerequisiteTarget = Union[SingleId, IdList]


def decode_target(raw: Any) -> Optional[PrerequisiteTarget]:
    """Decode a condition ``target`` field.

    A string becomes SingleId, a list of strings becomes IdList.
    Empty or non-string values are ignored and yield None.
    """
    if isinstance(raw, str):
        return SingleId(raw) if raw else None
    if isinstance(raw, (list, tuple)):
        ids = tuple(item for item in raw if isinstance(item, str) and item)
        return IdList(ids) if ids else None
    return None


@dataclass(frozen=True)
class QuestCondition:
    """One "available for start" condition"""

    condition_type: str
    target: Optional[PrerequisiteTarget] = None


@dataclass(frozen=True)
class Quest:
    """Catalog quest definition"""

    quest_id: str
    name: str = ""
    start_conditions: tuple[QuestCondition, ...] = ()

    @property
    def prerequisite_ids(self) -> tuple[str, ...]:
        """Referenced quest ids in condition order, duplicates removed."""
        seen: dict[str, None] = {}
        for condition in self.start_conditions:
            if (
                condition.condition_type != ConditionType.QUEST.value
                or condition.target is None
            ):
                continue
            for quest_id in condition.target.ids():
                seen.setdefault(quest_id, None)
        return tuple(seen)


@dataclass
class ProfileRecord:
    """A player's display name and recorded quest progress"""

    name: str
    statuses: dict[str, QuestStatus] = field(default_factory=dict)
    # entries dropped while parsing, kept for logging
    rejected: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestStatusInfo:
    """Status of one quest for one profile.

    ``status`` is the raw integer code so codes this version does not know
    still reach the renderer, which shows them as "Unknown".
    """

    status: int
    locked_reason: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {"Status": self.status, "LockedReason": self.locked_reason}

    @classmethod
    def from_payload(cls, raw: Any) -> QuestStatusInfo:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cls(status=raw)
        if not isinstance(raw, dict):
            return cls(status=QuestStatus.LOCKED.value)
        status = raw.get("Status", raw.get("status", QuestStatus.LOCKED.value))
        reason = raw.get("LockedReason", raw.get("locked_reason"))
        try:
            status = int(status)
        except (TypeError, ValueError):
            status = -1
        return cls(status=status, locked_reason=reason or None)


class StatusTable:
    """Per-profile, per-quest status view.

    Profile order is insertion order. Assigning an existing profile name
    replaces its row but keeps the row's original position.
    """

    def __init__(self) -> None:
        self._rows: dict[str, dict[str, QuestStatusInfo]] = {}

    def set_profile(self, name: str, row: dict[str, QuestStatusInfo]) -> None:
        self._rows[name] = row

    def profile_names(self) -> list[str]:
        return list(self._rows)

    def row(self, name: str) -> dict[str, QuestStatusInfo]:
        return self._rows[name]

    def get(self, name: str, quest_id: str) -> QuestStatusInfo:
        """Status for one cell; missing cells are Locked with no reason."""
        return self._rows.get(name, {}).get(
            quest_id, QuestStatusInfo(QuestStatus.LOCKED.value)
        )

    def project(self, quest_id: str) -> dict[str, QuestStatusInfo]:
        """All profiles' status for a single quest."""
        return {name: self.get(name, quest_id) for name in self._rows}

    def items(self) -> Iterator[tuple[str, dict[str, QuestStatusInfo]]]:
        return iter(self._rows.items())

    def is_empty(self) -> bool:
        return not self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, name: object) -> bool:
        return name in self._rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusTable):
            return NotImplemented
        return list(self._rows.items()) == list(other._rows.items())

    def to_payload(self) -> dict[str, dict[str, dict[str, Any]]]:
        return {
            name: {quest_id: info.to_payload() for quest_id, info in row.items()}
            for name, row in self._rows.items()
        }

    @classmethod
    def from_payload(cls, payload: Any) -> StatusTable:
        """Rebuild a table from the HTTP payload. Non-mapping rows are skipped."""
        table = cls()
        if not isinstance(payload, dict):
            return table
        for name, row in payload.items():
            if not isinstance(row, dict):
                continue
            table.set_profile(
                str(name),
                {str(qid): QuestStatusInfo.from_payload(v) for qid, v in row.items()},
            )
        return table

"""Status text rendering and block injection

A rendered block looks like this (rich style)::

    <color=#9A8866>--- Shared Quest Status ---</color>
    <color=#CCCCCC>Alice:</color> <color=#32CD32>Completed</color>
    <color=#CCCCCC>Bob:</color> <color=#808080>Locked</color> <color=#666666>(Intro)</color>
    <color=#9A8866>--------------------------</color>

Merging prepends a block, separated by one blank line, to host text after
removing any block already there.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from .enums import QuestStatus
from .models import StatusTable

START_MARKER = "--- Shared Quest Status ---"
END_MARKER = "-" * 26
BLOCK_SEPARATOR = "\n\n"

LOADING_TEXT = "Loading..."
NO_PROFILES_TEXT = "No profiles selected"

# start marker, shortest body, end marker (20+ dashes), then any whitespace
# that followed the block
_BLOCK_RE = re.compile(
    r"(?:<color=#\w+>)?---\s*Shared Quest Status\s*---(?:</color>)?"
    r"[\s\S]*?"
    r"(?:<color=#\w+>)?-{20,}(?:</color>)?"
    r"\s*"
)
# a dash run this long inside the body would end the block early
_DASH_RUN_RE = re.compile(r"-{20,}")

VisibilityPredicate = Callable[[str], bool]


def _default_status_info() -> dict[int, tuple[str, str]]:
    return {
        QuestStatus.LOCKED: ("Locked", "#808080"),
        QuestStatus.AVAILABLE_FOR_START: ("Available", "#FFD700"),
        QuestStatus.STARTED: ("Started", "#FFA500"),
        QuestStatus.AVAILABLE_FOR_FINISH: ("Ready!", "#00FF00"),
        QuestStatus.SUCCESS: ("Completed", "#32CD32"),
        QuestStatus.FAIL: ("Failed", "#FF4444"),
        QuestStatus.FAIL_RESTARTABLE: ("Failed (Retry)", "#FF6600"),
        QuestStatus.MARKED_AS_FAILED: ("Failed", "#FF4444"),
        QuestStatus.EXPIRED: ("Expired", "#666666"),
        QuestStatus.AVAILABLE_AFTER: ("Timed", "#87CEEB"),
    }


@dataclass(frozen=True)
class StatusStyle:
    """Display names and colours for the block.

    With ``rich=False`` the same lines are produced without colour tags.
    """

    status_info: dict[int, tuple[str, str]] = field(
        default_factory=_default_status_info
    )
    unknown: tuple[str, str] = ("Unknown", "#FFFFFF")
    marker_color: str = "#9A8866"
    name_color: str = "#CCCCCC"
    reason_color: str = "#666666"
    placeholder_color: str = "#888888"
    rich: bool = True

    def describe(self, status: int) -> tuple[str, str]:
        """(display name, colour) for a status code; total over all ints."""
        return self.status_info.get(int(status), self.unknown)

    def paint(self, text: str, color: str) -> str:
        if not self.rich:
            return text
        return f"<color={color}>{text}</color>"


DEFAULT_STYLE = StatusStyle()
PLAIN_STYLE = StatusStyle(rich=False)


def _clean(text: str) -> str:
    return _DASH_RUN_RE.sub("-" * 19, text)


def _wrap(body: list[str], style: StatusStyle) -> str:
    lines = [style.paint(START_MARKER, style.marker_color)]
    lines.extend(body)
    lines.append(style.paint(END_MARKER, style.marker_color))
    return "\n".join(lines)


def render_block(
    quest_id: Optional[str],
    table: StatusTable,
    visible: Optional[VisibilityPredicate] = None,
    style: StatusStyle = DEFAULT_STYLE,
) -> str:
    """Render one quest's status for every visible profile.

    An empty table (or no quest id) renders the loading placeholder; a
    table whose profiles are all hidden renders "No profiles selected".
    """
    if table.is_empty() or not quest_id:
        return _wrap([style.paint(LOADING_TEXT, style.placeholder_color)], style)

    body = []
    for name, info in table.project(quest_id).items():
        if visible is not None and not visible(name):
            continue
        status_name, status_color = style.describe(info.status)
        line = (
            f"{style.paint(_clean(name) + ':', style.name_color)} "
            f"{style.paint(status_name, status_color)}"
        )
        if info.status == QuestStatus.LOCKED and info.locked_reason:
            reason = f"({_clean(info.locked_reason)})"
            line += f" {style.paint(reason, style.reason_color)}"
        body.append(line)

    if not body:
        body.append(style.paint(NO_PROFILES_TEXT, style.placeholder_color))
    return _wrap(body, style)


def strip_block(text: Optional[str]) -> Optional[str]:
    """Remove every rendered block from ``text``.

    Colour tags around the markers are tolerated. Whitespace after a block
    goes with it, and once a block was removed the remainder is returned
    with leading whitespace trimmed. Text without a complete block is
    returned unchanged. Removal repeats until nothing matches, so the
    result never contains a block.
    """
    if not text:
        return text
    removed = False
    while True:
        stripped = _BLOCK_RE.sub("", text)
        if stripped == text:
            break
        text = stripped
        removed = True
    return text.lstrip() if removed else text


def has_block(text: Optional[str]) -> bool:
    return bool(text) and _BLOCK_RE.search(text) is not None


def merge(
    original_text: str,
    quest_id: Optional[str],
    table: StatusTable,
    visible: Optional[VisibilityPredicate] = None,
    style: StatusStyle = DEFAULT_STYLE,
    enabled: bool = True,
) -> str:
    """Replace any existing block in ``original_text`` with a fresh one.

    The host text goes under the block with its leading whitespace trimmed,
    the same trim ``strip_block`` applies, so merging twice gives the same
    result as merging once. When disabled the text is only stripped.
    """
    clean = strip_block(original_text) or ""
    if not enabled:
        return clean
    block = render_block(quest_id, table, visible, style)
    return block + BLOCK_SEPARATOR + clean.lstrip()


class StatusTextRenderer:
    """Renderer bound to a style and the global on/off switch."""

    def __init__(self, style: StatusStyle = DEFAULT_STYLE, enabled: bool = True):
        self.style = style
        self.enabled = enabled

    def render_block(
        self,
        quest_id: Optional[str],
        table: StatusTable,
        visible: Optional[VisibilityPredicate] = None,
    ) -> str:
        return render_block(quest_id, table, visible, self.style)

    def strip_block(self, text: Optional[str]) -> Optional[str]:
        return strip_block(text)

    def merge(
        self,
        original_text: str,
        quest_id: Optional[str],
        table: StatusTable,
        visible: Optional[VisibilityPredicate] = None,
    ) -> str:
        return merge(
            original_text, quest_id, table, visible, self.style, self.enabled
        )

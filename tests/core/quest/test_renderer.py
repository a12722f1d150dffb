"""StatusTextRenderer tests: block rendering, stripping, merging"""

import pytest

from shared_quests.core.quest.enums import QuestStatus
from shared_quests.core.quest.models import QuestStatusInfo, StatusTable
from shared_quests.core.quest.renderer import (
    DEFAULT_STYLE,
    END_MARKER,
    PLAIN_STYLE,
    START_MARKER,
    StatusTextRenderer,
    has_block,
    merge,
    render_block,
    strip_block,
)

RICH_START = f"<color=#9A8866>{START_MARKER}</color>"
RICH_END = f"<color=#9A8866>{END_MARKER}</color>"


def _table():
    table = StatusTable()
    table.set_profile(
        "Alice",
        {
            "Q1": QuestStatusInfo(QuestStatus.SUCCESS.value),
            "Q2": QuestStatusInfo(QuestStatus.LOCKED.value, "Intro"),
        },
    )
    table.set_profile(
        "Bob",
        {
            "Q1": QuestStatusInfo(QuestStatus.AVAILABLE_FOR_FINISH.value),
            "Q2": QuestStatusInfo(QuestStatus.LOCKED.value, "Intro"),
        },
    )
    return table


SAMPLE_TEXTS = [
    "",
    "Plain description.",
    "  indented start\nsecond line",
    "\n\nleading blank lines",
    "Ends with dashes ------------------------------",
    "<color=#9A8866>--- Shared Quest Status ---</color>\nhalf a block, no end",
    "intro\n--- Shared Quest Status ---\nA: Locked\n--------------------------\n\nrest",
    "-" + render_block("Q1", _table()) + "-- Shared Quest Status ---\nx\n"
    + "-" * 25,
]


class TestRenderBlock:
    def test_rich_block(self):
        block = render_block("Q1", _table())
        assert block.splitlines() == [
            RICH_START,
            "<color=#CCCCCC>Alice:</color> <color=#32CD32>Completed</color>",
            "<color=#CCCCCC>Bob:</color> <color=#00FF00>Ready!</color>",
            RICH_END,
        ]

    def test_locked_reason_shown(self):
        block = render_block("Q2", _table())
        assert (
            "<color=#CCCCCC>Alice:</color> <color=#808080>Locked</color> "
            "<color=#666666>(Intro)</color>" in block
        )

    def test_plain_style(self):
        block = render_block("Q2", _table(), style=PLAIN_STYLE)
        assert block == "\n".join(
            [START_MARKER, "Alice: Locked (Intro)", "Bob: Locked (Intro)", END_MARKER]
        )

    def test_scenario_loading_when_table_empty(self):
        block = render_block("Q1", StatusTable())
        assert block.splitlines() == [
            RICH_START,
            "<color=#888888>Loading...</color>",
            RICH_END,
        ]

    def test_loading_without_quest_id(self):
        assert "Loading..." in render_block(None, _table())

    def test_scenario_no_profiles_selected(self):
        block = render_block("Q1", _table(), visible=lambda name: False)
        assert block.splitlines() == [
            RICH_START,
            "<color=#888888>No profiles selected</color>",
            RICH_END,
        ]

    def test_visibility_filters_rows(self):
        block = render_block("Q1", _table(), visible=lambda name: name != "Alice")
        assert "Alice" not in block
        assert "Bob:" in block

    def test_unknown_status_code(self):
        table = StatusTable()
        table.set_profile("Eve", {"Q1": QuestStatusInfo(42, "ignored")})
        block = render_block("Q1", table)
        assert "<color=#FFFFFF>Unknown</color>" in block
        assert "ignored" not in block

    def test_quest_missing_from_rows_is_locked(self):
        block = render_block("Q404", _table(), style=PLAIN_STYLE)
        assert "Alice: Locked\n" in block

    def test_long_dash_runs_in_names_shortened(self):
        table = StatusTable()
        table.set_profile("-" * 30, {})
        block = render_block("Q1", table, style=PLAIN_STYLE)
        assert block.splitlines()[1] == "-" * 19 + ": Locked"
        assert strip_block(block + "\n\nafter") == "after"

    @pytest.mark.parametrize("status", list(QuestStatus))
    def test_every_status_has_a_display(self, status):
        name, color = DEFAULT_STYLE.describe(status)
        assert name != "Unknown"
        assert color.startswith("#")


class TestStripBlock:
    def test_removes_rich_block_and_separator(self):
        text = render_block("Q1", _table()) + "\n\nTalk to the trader."
        assert strip_block(text) == "Talk to the trader."

    def test_removes_plain_block(self):
        text = render_block("Q1", _table(), style=PLAIN_STYLE) + "\n\nBody"
        assert strip_block(text) == "Body"

    def test_block_in_the_middle(self):
        text = "Before\n" + render_block("Q1", _table()) + "\nAfter"
        assert strip_block(text) == "Before\nAfter"

    def test_tolerates_crlf_and_spacing(self):
        text = "<color=#abc123>---  Shared Quest Status  ---</color>\r\nA: x\r\n" + (
            "-" * 22 + "\r\n\r\nBody"
        )
        assert strip_block(text) == "Body"

    def test_extra_blank_lines_after_block(self):
        text = render_block("Q1", _table()) + "\n\n\n\nBody"
        assert strip_block(text) == "Body"

    def test_whitespace_before_block_trimmed(self):
        text = "\n" + render_block("Q1", _table()) + "\n\nBody"
        assert strip_block(text) == "Body"
        assert strip_block("  \t" + render_block("Q1", _table())) == ""

    def test_no_block_unchanged(self):
        assert strip_block("  keep leading whitespace") == "  keep leading whitespace"
        assert strip_block("") == ""
        assert strip_block(None) is None

    def test_partial_block_unchanged(self):
        text = f"{RICH_START}\nAlice: Started\nno end marker"
        assert strip_block(text) == text

    def test_several_blocks(self):
        block = render_block("Q1", _table())
        text = block + "\n\n" + block + "\n\nBody"
        assert strip_block(text) == "Body"
        assert not has_block(strip_block(text))

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_idempotent(self, text):
        once = strip_block(text)
        assert strip_block(once) == once
        assert not has_block(once)


class TestMerge:
    def test_prepends_block(self):
        merged = merge("Talk to the trader.", "Q1", _table())
        assert merged == render_block("Q1", _table()) + "\n\nTalk to the trader."

    def test_replaces_existing_block(self):
        stale = StatusTable()
        first = merge("Body", "Q1", stale)
        assert "Loading..." in first
        second = merge(first, "Q1", _table())
        assert second == merge("Body", "Q1", _table())
        assert "Loading..." not in second

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_idempotent(self, text):
        once = merge(text, "Q2", _table())
        assert merge(once, "Q2", _table()) == once

    @pytest.mark.parametrize("text", [t for t in SAMPLE_TEXTS[:5] if t == t.lstrip()])
    def test_round_trip(self, text):
        assert strip_block(merge(text, "Q1", _table())) == strip_block(text)

    def test_host_leading_whitespace_trimmed(self):
        merged = merge("\n\n  Body", "Q1", _table())
        assert merged == render_block("Q1", _table()) + "\n\nBody"
        assert strip_block(merged) == "Body"

    def test_disabled_keeps_text_without_block(self):
        assert merge("  Body", "Q1", _table(), enabled=False) == "  Body"

    def test_disabled_only_strips(self):
        merged = merge("Body", "Q1", _table())
        assert merge(merged, "Q1", _table(), enabled=False) == "Body"
        assert merge("Body", "Q1", _table(), enabled=False) == "Body"

    def test_renderer_switch(self):
        renderer = StatusTextRenderer()
        merged = renderer.merge("Body", "Q1", _table())
        assert renderer.strip_block(merged) == "Body"
        renderer.enabled = False
        assert renderer.merge(merged, "Q1", _table()) == "Body"

    def test_renderer_with_visibility(self):
        renderer = StatusTextRenderer(PLAIN_STYLE)
        block = renderer.render_block("Q1", _table(), visible=lambda n: n == "Bob")
        assert block.splitlines()[1:-1] == ["Bob: Ready!"]

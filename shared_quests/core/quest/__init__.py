"""Shared quest status Core package"""

from shared_quests.core.quest.aggregator import HEADLESS_PREFIX, aggregate, is_headless
from shared_quests.core.quest.catalog import QuestCatalog
from shared_quests.core.quest.enums import ConditionType, QuestStatus
from shared_quests.core.quest.errors import CatalogError, ParseError, SharedQuestsError
from shared_quests.core.quest.models import (
    IdList,
    ProfileRecord,
    Quest,
    QuestCondition,
    QuestStatusInfo,
    SingleId,
    StatusTable,
    decode_target,
)
from shared_quests.core.quest.prerequisites import (
    PrerequisiteIndex,
    build_prerequisite_index,
)
from shared_quests.core.quest.profile_reader import (
    get_status,
    parse_profile,
    parse_profiles,
)
from shared_quests.core.quest.renderer import (
    DEFAULT_STYLE,
    END_MARKER,
    PLAIN_STYLE,
    START_MARKER,
    StatusStyle,
    StatusTextRenderer,
    merge,
    render_block,
    strip_block,
)

__all__ = [
    # enums
    "QuestStatus",
    "ConditionType",
    # errors
    "SharedQuestsError",
    "CatalogError",
    "ParseError",
    # models
    "SingleId",
    "IdList",
    "decode_target",
    "QuestCondition",
    "Quest",
    "ProfileRecord",
    "QuestStatusInfo",
    "StatusTable",
    # catalog / index
    "QuestCatalog",
    "PrerequisiteIndex",
    "build_prerequisite_index",
    # profiles
    "parse_profile",
    "parse_profiles",
    "get_status",
    # aggregation
    "HEADLESS_PREFIX",
    "is_headless",
    "aggregate",
    # rendering
    "START_MARKER",
    "END_MARKER",
    "StatusStyle",
    "DEFAULT_STYLE",
    "PLAIN_STYLE",
    "StatusTextRenderer",
    "render_block",
    "strip_block",
    "merge",
]

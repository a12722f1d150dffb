"""Status Service — catalog lifecycle + fresh aggregation per request

The catalog and prerequisite index are loaded once and shared read-only.
Profiles are re-read and re-aggregated on every call; each call builds its
own table, so concurrent requests share no mutable state.
"""

import logging
from typing import Any, Iterable, Optional, Protocol

from shared_quests.core.quest.aggregator import aggregate
from shared_quests.core.quest.catalog import QuestCatalog
from shared_quests.core.quest.errors import CatalogError
from shared_quests.core.quest.models import QuestStatusInfo, StatusTable
from shared_quests.core.quest.prerequisites import (
    PrerequisiteIndex,
    build_prerequisite_index,
)
from shared_quests.core.quest.profile_reader import parse_profiles

logger = logging.getLogger(__name__)


class ProfileSource(Protocol):
    def read_all(self) -> Iterable[Any]: ...


class StatusService:
    """Shared quest status queries"""

    def __init__(
        self,
        catalog: Optional[QuestCatalog],
        source: ProfileSource,
    ):
        self._catalog = catalog
        self._source = source
        self._index: Optional[PrerequisiteIndex] = None
        if catalog is not None:
            self._index = build_prerequisite_index(catalog)

    @classmethod
    def from_paths(
        cls,
        quests_path: str,
        source: ProfileSource,
        locale_path: Optional[str] = None,
    ) -> "StatusService":
        """Load the catalog from disk. A missing catalog leaves the service
        in the "no catalog" state instead of failing start-up."""
        try:
            catalog = QuestCatalog.load(quests_path, locale_path)
        except CatalogError as e:
            logger.error("Quest catalog unavailable: %s", e)
            catalog = None
        return cls(catalog, source)

    @property
    def has_catalog(self) -> bool:
        return self._catalog is not None

    @property
    def catalog(self) -> QuestCatalog:
        if self._catalog is None:
            raise CatalogError("no catalog")
        return self._catalog

    @property
    def prerequisite_index(self) -> PrerequisiteIndex:
        if self._index is None:
            raise CatalogError("no catalog")
        return self._index

    # === Queries ===

    def get_status_table(self) -> StatusTable:
        """All profiles' status for all quests. Raises CatalogError."""
        catalog = self.catalog
        records = parse_profiles(self._source.read_all())
        table = aggregate(records, catalog, self.prerequisite_index)

        logger.debug("Status table built for %d profiles", len(table))
        return table

    def get_quest_statuses(self, quest_id: str) -> dict[str, QuestStatusInfo]:
        """All profiles' status for one quest. Raises CatalogError."""
        return self.get_status_table().project(quest_id)

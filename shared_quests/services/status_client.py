"""Status client — polls the server and keeps a description label in sync

The caller owns the clock: every call that depends on freshness takes an
``now`` timestamp (seconds), so there is no hidden global "last fetch".
"""

import logging
from typing import Optional

import requests

from shared_quests.config import settings
from shared_quests.core.quest.models import StatusTable
from shared_quests.core.quest.renderer import (
    StatusTextRenderer,
    VisibilityPredicate,
    has_block,
)

logger = logging.getLogger(__name__)

STATUSES_PATH = "/sharedquests/statuses"
USER_AGENT = "sharedquests-client/1.0"


class StatusClient:
    """Fetches the status table, reusing it for ``cache_seconds``."""

    def __init__(
        self,
        base_url: str,
        cache_seconds: float = 5,
        timeout: float = 5.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache_seconds = cache_seconds
        self.timeout = timeout
        self._table = StatusTable()
        self._last_fetch: Optional[float] = None

    @classmethod
    def from_settings(cls) -> "StatusClient":
        return cls(settings.SERVER_URL, cache_seconds=settings.CACHE_DURATION_SECONDS)

    @property
    def table(self) -> StatusTable:
        """Last fetched table; empty until the first successful fetch."""
        return self._table

    @property
    def last_fetch(self) -> Optional[float]:
        return self._last_fetch

    def is_fresh(self, now: float) -> bool:
        return (
            self._last_fetch is not None
            and now - self._last_fetch < self.cache_seconds
        )

    def fetch(self, now: float, force: bool = False) -> bool:
        """Refresh the table.

        Returns True when new data was stored. Returns False when the cached
        table is still fresh or the request failed; on failure the previous
        table is kept.
        """
        if not force and self.is_fresh(now):
            return False

        url = self.base_url + STATUSES_PATH
        try:
            logger.debug("Fetching quest statuses from %s", url)
            resp = requests.get(
                url, headers={"User-Agent": USER_AGENT}, timeout=self.timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching statuses: %s", e)
            return False

        if not isinstance(data, dict):
            logger.warning("Unexpected statuses payload: %s", type(data).__name__)
            return False

        self._table = StatusTable.from_payload(data)
        self._last_fetch = now
        logger.info("Fetched statuses for %d profiles", len(self._table))
        return True


class DescriptionMonitor:
    """
    Cooperative timer tick for an on-screen description label.
    Each tick merges the current table into the label text and reports new
    text only when it differs from what the label already shows.
    """

    def __init__(
        self,
        client: StatusClient,
        renderer: Optional[StatusTextRenderer] = None,
        visible: Optional[VisibilityPredicate] = None,
    ):
        self._client = client
        self._renderer = renderer or StatusTextRenderer()
        self._visible = visible
        self._last_quest_id: Optional[str] = None
        self._last_output: Optional[str] = None

    @property
    def last_quest_id(self) -> Optional[str]:
        return self._last_quest_id

    @property
    def last_output(self) -> Optional[str]:
        return self._last_output

    def tick(
        self,
        label_text: Optional[str],
        quest_id: Optional[str],
        now: float,
    ) -> Optional[str]:
        """New label text, or None when nothing needs replacing."""
        if label_text is None or not quest_id:
            return None

        fetched = self._client.fetch(now)

        # same quest, no new data and the label still shows our block
        if (
            not fetched
            and self._renderer.enabled
            and quest_id == self._last_quest_id
            and label_text == self._last_output
            and has_block(label_text)
        ):
            return None

        if quest_id != self._last_quest_id:
            logger.debug("Detected quest change to %s", quest_id)
            self._last_quest_id = quest_id

        new_text = self._renderer.merge(
            label_text, quest_id, self._client.table, self._visible
        )
        if new_text == label_text:
            return None

        self._last_output = new_text
        logger.debug("Injected status for quest %s", quest_id)
        return new_text

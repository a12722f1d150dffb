"""Profile source — reads raw profile files from the server's profile folder"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class ProfileDirectorySource:
    """
    Yields every ``*.json`` profile in ``directory``, sorted by file name.
    Files are re-read on every call; nothing is cached.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def read_all(self) -> Iterator[Any]:
        """Raw profile documents. Unreadable or invalid files are skipped."""
        if not self.directory.is_dir():
            logger.warning("Profile directory not found: %s", self.directory)
            return

        for path in sorted(self.directory.glob("*.json")):
            try:
                with path.open("r", encoding="utf-8") as f:
                    yield json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Failed to read profile %s — %s", path.name, e)

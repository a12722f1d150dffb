"""Visibility Service — persisted display settings

Holds the global on/off switch and the per-profile exclusion list.
One instance per request, bound to that request's session.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared_quests.core.quest.renderer import VisibilityPredicate
from shared_quests.db.models import ProfileVisibilityModel, SettingModel

logger = logging.getLogger(__name__)

ENABLED_KEY = "enabled"


class VisibilityService:
    """Enable flag + profile exclusion CRUD"""

    def __init__(self, db: Session):
        self._db = db

    # === Global switch ===

    def is_enabled(self) -> bool:
        orm = self._db.get(SettingModel, ENABLED_KEY)
        if orm is None:
            return True
        return orm.value == "true"

    def set_enabled(self, enabled: bool) -> None:
        value = "true" if enabled else "false"
        orm = self._db.get(SettingModel, ENABLED_KEY)
        if orm is None:
            self._db.add(SettingModel(key=ENABLED_KEY, value=value))
        else:
            orm.value = value
        try:
            self._db.commit()
        except IntegrityError:
            # another request created the row first
            self._db.rollback()
            self._db.get(SettingModel, ENABLED_KEY).value = value
            self._db.commit()
        logger.info("SharedQuests display %s", "enabled" if enabled else "disabled")

    # === Profiles ===

    def excluded_profiles(self) -> set[str]:
        rows = (
            self._db.query(ProfileVisibilityModel.profile_name)
            .filter(ProfileVisibilityModel.visible.is_(False))
            .all()
        )
        return {name for (name,) in rows}

    def is_profile_visible(self, profile_name: str) -> bool:
        """False when the display is disabled or the profile is excluded."""
        if not self.is_enabled():
            return False
        orm = self._db.get(ProfileVisibilityModel, profile_name)
        return orm is None or orm.visible

    def visibility_predicate(self) -> VisibilityPredicate:
        """Snapshot of the current settings as a name predicate."""
        if not self.is_enabled():
            return lambda name: False
        excluded = self.excluded_profiles()
        return lambda name: name not in excluded

    def set_profile_visible(self, profile_name: str, visible: bool) -> None:
        orm = self._db.get(ProfileVisibilityModel, profile_name)
        if orm is None:
            self._db.add(
                ProfileVisibilityModel(
                    profile_name=profile_name,
                    visible=visible,
                    first_seen=_now(),
                )
            )
        else:
            orm.visible = visible
        try:
            self._db.commit()
        except IntegrityError:
            # registered by a concurrent status request in the meantime
            self._db.rollback()
            self._db.get(ProfileVisibilityModel, profile_name).visible = visible
            self._db.commit()

        logger.info("Profile '%s' visibility changed to %s", profile_name, visible)

    def register_profiles(self, profile_names: list[str]) -> int:
        """Add unseen profiles as visible. Returns how many were new.

        Concurrent requests may race to insert the same name; the loser
        rolls back and retries against the rows the winner committed.
        """
        try:
            return self._insert_unseen(profile_names)
        except IntegrityError:
            self._db.rollback()
            logger.debug("Profiles registered concurrently, retrying")
            return self._insert_unseen(profile_names)

    def _insert_unseen(self, profile_names: list[str]) -> int:
        known = {
            name
            for (name,) in self._db.query(ProfileVisibilityModel.profile_name).all()
        }
        added = 0
        for name in profile_names:
            if not name or name in known:
                continue
            self._db.add(
                ProfileVisibilityModel(profile_name=name, visible=True, first_seen=_now())
            )
            known.add(name)
            added += 1
        if added:
            self._db.commit()
            logger.debug("Registered %d new profiles", added)
        return added

    def list_profiles(self) -> list[tuple[str, bool]]:
        """Known profiles, oldest first (ties by name)."""
        orms = (
            self._db.query(ProfileVisibilityModel)
            .order_by(
                ProfileVisibilityModel.first_seen, ProfileVisibilityModel.profile_name
            )
            .all()
        )
        return [(o.profile_name, o.visible) for o in orms]


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

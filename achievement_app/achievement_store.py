from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from PySide6.QtCore import QObject, Signal

from .models import Achievement, AchievementDraft
from .storage import DashboardStorage, StorageError

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"


class Navigator(Protocol):
    def navigate(self, route: str) -> None: ...


class AchievementStore(QObject):
    """Achievement list of the dashboard, written through on every change."""

    changed = Signal()

    def __init__(self, storage: DashboardStorage, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.storage = storage
        self.user_name = storage.load_display_name()
        self._achievements: List[Achievement] = []
        self._last_id = 0

    @property
    def achievements(self) -> List[Achievement]:
        return list(self._achievements)

    def __len__(self) -> int:
        return len(self._achievements)

    def load(self) -> None:
        self.user_name = self.storage.load_display_name()
        self._achievements = self.storage.load_achievements()
        logger.info("Loaded %d achievements for %s", len(self._achievements), self.user_name)
        self.changed.emit()

    def _next_id(self, now: datetime) -> str:
        stamp = int(now.timestamp() * 1000)
        # bump ids that collide within the same millisecond
        if stamp <= self._last_id:
            stamp = self._last_id + 1
        self._last_id = stamp
        return str(stamp)

    def add(self, draft: AchievementDraft, now: Optional[datetime] = None) -> Achievement:
        missing = draft.missing_fields()
        if missing:
            raise ValueError(f"Draft is missing required fields: {', '.join(missing)}")
        now = now or datetime.now(timezone.utc)
        achievement = Achievement(
            id=self._next_id(now),
            title=draft.title.strip(),
            description=draft.description.strip(),
            date=draft.date.strip(),
            category=draft.category,
            created_at=now,
        )
        self._set([achievement, *self._achievements])
        draft.reset()
        logger.info("Added achievement %s (%s)", achievement.id, achievement.category)
        return achievement

    def clear_all(self) -> None:
        self._set([])
        logger.info("Cleared all achievements")

    def logout(self, navigator: Navigator) -> None:
        try:
            self.storage.clear_identity()
        except StorageError as exc:
            logger.error("Could not clear stored identity: %s", exc)
        logger.info("User %s logged out", self.user_name)
        navigator.navigate(LOGIN_ROUTE)

    def _set(self, achievements: List[Achievement]) -> None:
        self._achievements = achievements
        try:
            self.storage.save_achievements(self._achievements)
        except StorageError as exc:
            logger.error("Achievements kept in memory only: %s", exc)
        self.changed.emit()

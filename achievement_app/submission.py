from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .achievement_store import AchievementStore
from .models import SUBMIT_DELAY_MS, AchievementDraft

logger = logging.getLogger(__name__)


class SubmissionState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    DONE = "done"
    CANCELLED = "cancelled"


class SubmissionController(QObject):
    """Commits a draft to the store after a short simulated delay.

    The timer belongs to this object, so deleting the owning widget (or
    calling :meth:`cancel`) drops the pending draft without touching the
    store.
    """

    state_changed = Signal(object)
    committed = Signal(object)

    def __init__(
        self,
        store: AchievementStore,
        delay_ms: int = SUBMIT_DELAY_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.delay_ms = delay_ms
        self.state = SubmissionState.IDLE
        self._pending: Optional[AchievementDraft] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._complete)

    @property
    def in_flight(self) -> bool:
        return self.state is SubmissionState.SUBMITTING

    def submit(self, draft: AchievementDraft) -> bool:
        if self.in_flight:
            logger.debug("Submission already in flight, ignoring")
            return False
        if not draft.is_complete():
            return False
        # snapshot; later edits to the form do not affect this submission
        self._pending = replace(draft)
        self._set_state(SubmissionState.SUBMITTING)
        self._timer.start(max(0, self.delay_ms))
        return True

    def cancel(self) -> None:
        if not self.in_flight:
            return
        self._timer.stop()
        self._pending = None
        logger.info("Pending submission cancelled")
        self._set_state(SubmissionState.CANCELLED)

    def _complete(self) -> None:
        if not self.in_flight or self._pending is None:
            return
        draft, self._pending = self._pending, None
        achievement = self.store.add(draft)
        self._set_state(SubmissionState.DONE)
        self.committed.emit(achievement)

    def _set_state(self, state: SubmissionState) -> None:
        self.state = state
        self.state_changed.emit(state)

from __future__ import annotations

import logging
import random
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from .achievement_store import AchievementStore, Navigator
from .card_manager import CardManager
from .data_loader import select_quote_index
from .form_widget import AchievementForm
from .models import SUBMIT_DELAY_MS, Quote
from .submission import SubmissionController, SubmissionState

logger = logging.getLogger(__name__)

EMPTY_TITLE = "No achievements yet"
EMPTY_HINT = "Start by adding your first achievement using the form on the left."


class QuoteBanner(QFrame):
    def __init__(self, quote: Quote, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("quoteBanner")
        self.setStyleSheet(
            "#quoteBanner {"
            "  background: qlineargradient(x1:0, y1:0, x2:1, y2:0,"
            "    stop:0 #eef2ff, stop:1 #e0e7ff);"
            "  border: 1px solid #c7d2fe; border-radius: 12px;"
            "}"
        )
        layout = QHBoxLayout(self)
        layout.setContentsMargins(18, 14, 18, 14)
        layout.setSpacing(12)

        icon = QLabel("💡")
        icon.setFont(QFont("Segoe UI Emoji", 16))
        icon.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.label = QLabel(quote.display())
        self.label.setWordWrap(True)
        self.label.setFont(QFont("Segoe UI", 11, QFont.Weight.Medium))
        self.label.setStyleSheet("color: #3730a3; background: transparent;")

        layout.addWidget(icon)
        layout.addWidget(self.label, 1)


class EmptyState(QFrame):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("emptyState")
        self.setStyleSheet(
            "#emptyState { background: #ffffff; border: 1px solid #e5e7eb; border-radius: 12px; }"
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 48, 24, 48)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        icon = QLabel("🕒")
        icon.setFont(QFont("Segoe UI Emoji", 28))
        self.title_label = QLabel(EMPTY_TITLE)
        self.title_label.setFont(QFont("Segoe UI", 13, QFont.Weight.Medium))
        self.hint_label = QLabel(EMPTY_HINT)
        self.hint_label.setWordWrap(True)
        self.hint_label.setStyleSheet("color: #4b5563;")
        for label in (icon, self.title_label, self.hint_label):
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            layout.addWidget(label)


class DashboardView(QWidget):
    def __init__(
        self,
        store: AchievementStore,
        quotes: List[Quote],
        navigator: Navigator,
        submit_delay_ms: int = SUBMIT_DELAY_MS,
        rng: Optional[random.Random] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.navigator = navigator
        self.quotes = quotes
        self.quote_index = select_quote_index(store.storage, len(quotes), rng)
        self.submission = SubmissionController(store, submit_delay_ms, self)

        root = QVBoxLayout(self)
        root.setContentsMargins(32, 28, 32, 28)
        root.setSpacing(24)

        header = QHBoxLayout()
        welcome_column = QVBoxLayout()
        welcome_column.setSpacing(6)
        self.welcome_label = QLabel()
        self.welcome_label.setFont(QFont("Segoe UI", 22, QFont.Weight.Bold))
        self.subtitle_label = QLabel(
            "Track your academic achievements and stay motivated on your learning journey."
        )
        self.subtitle_label.setStyleSheet("color: #4b5563;")
        welcome_column.addWidget(self.welcome_label)
        welcome_column.addWidget(self.subtitle_label)

        self.logout_button = QPushButton("Log out")
        self.logout_button.setObjectName("logoutButton")
        self.logout_button.clicked.connect(lambda: self.logout())

        header.addLayout(welcome_column, 1)
        header.addWidget(self.logout_button, 0, Qt.AlignmentFlag.AlignTop)
        root.addLayout(header)

        self.quote_banner = QuoteBanner(self.current_quote, self)
        root.addWidget(self.quote_banner)

        body = QHBoxLayout()
        body.setSpacing(32)

        self.form = AchievementForm(self)
        self.form.setObjectName("achievementForm")
        self.form.setFixedWidth(340)
        body.addWidget(self.form, 0, Qt.AlignmentFlag.AlignTop)

        list_column = QVBoxLayout()
        list_column.setSpacing(16)
        list_header = QHBoxLayout()
        self.count_label = QLabel()
        self.count_label.setFont(QFont("Segoe UI", 14, QFont.Weight.DemiBold))
        self.clear_button = QPushButton("Clear All")
        self.clear_button.setObjectName("clearAllButton")
        self.clear_button.setFlat(True)
        self.clear_button.setStyleSheet("color: #dc2626;")
        self.clear_button.clicked.connect(lambda: self.store.clear_all())
        list_header.addWidget(self.count_label)
        list_header.addStretch()
        list_header.addWidget(self.clear_button)
        list_column.addLayout(list_header)

        self.empty_state = EmptyState(self)
        list_column.addWidget(self.empty_state)

        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        self.cards_container = QWidget()
        self.cards_container.setObjectName("cardsContainer")
        self.scroll_area.setWidget(self.cards_container)
        self.card_manager = CardManager(self.cards_container)
        list_column.addWidget(self.scroll_area, 1)

        body.addLayout(list_column, 1)
        root.addLayout(body, 1)

        self.form.submitted.connect(self.submission.submit)
        self.submission.state_changed.connect(self._on_submission_state)
        self.submission.committed.connect(lambda _achievement: self.form.reset())
        self.store.changed.connect(self.refresh)

        self.refresh()

    @property
    def current_quote(self) -> Quote:
        return self.quotes[self.quote_index]

    def refresh(self) -> None:
        achievements = self.store.achievements
        count = len(achievements)
        self.welcome_label.setText(f"Welcome back, {self.store.user_name}! 👋")
        self.count_label.setText(f"Your Achievements ({count})")
        self.clear_button.setHidden(count == 0)
        self.empty_state.setHidden(count > 0)
        self.scroll_area.setHidden(count == 0)
        self.card_manager.sync(achievements)

    def _on_submission_state(self, state: SubmissionState) -> None:
        self.form.set_loading(state is SubmissionState.SUBMITTING)

    def logout(self) -> None:
        self.teardown()
        self.store.logout(self.navigator)

    def teardown(self) -> None:
        self.submission.cancel()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.card_manager.set_viewport_width(self.scroll_area.viewport().width())

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        self.teardown()
        super().closeEvent(event)

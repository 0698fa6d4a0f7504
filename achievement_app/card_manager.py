from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from PySide6.QtWidgets import QGridLayout, QWidget

from .card_widget import AchievementCard
from .models import Achievement

TWO_COLUMN_MIN_WIDTH = 720


@dataclass
class CardSlot:
    widget: AchievementCard
    achievement_id: str


class CardManager:
    """Keeps the card grid in step with the achievement list, newest first."""

    def __init__(self, container: QWidget, spacing: int = 24) -> None:
        self.container = container
        self.grid = QGridLayout(container)
        self.grid.setContentsMargins(0, 0, 0, 0)
        self.grid.setSpacing(spacing)
        self.cards: List[CardSlot] = []
        self.columns = 1

    def columns_for_width(self, width: int) -> int:
        return 2 if width >= TWO_COLUMN_MIN_WIDTH else 1

    def set_viewport_width(self, width: int) -> None:
        columns = self.columns_for_width(width)
        if columns != self.columns:
            self.columns = columns
            self._relayout()

    def sync(self, achievements: Sequence[Achievement]) -> None:
        known = {slot.achievement_id: slot for slot in self.cards}
        wanted = {item.id for item in achievements}

        for slot in self.cards:
            if slot.achievement_id not in wanted:
                self.grid.removeWidget(slot.widget)
                slot.widget.fade_out(slot.widget.deleteLater)

        slots: List[CardSlot] = []
        for achievement in achievements:
            slot = known.get(achievement.id)
            if slot is None:
                card = AchievementCard(achievement, self.container)
                slot = CardSlot(widget=card, achievement_id=achievement.id)
                card.show()
                card.fade_in()
            slots.append(slot)
        self.cards = slots
        self._relayout()

    def _relayout(self) -> None:
        for slot in self.cards:
            self.grid.removeWidget(slot.widget)
        for index, slot in enumerate(self.cards):
            row, column = divmod(index, self.columns)
            self.grid.addWidget(slot.widget, row, column)

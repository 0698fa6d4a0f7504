from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, QSize, Qt
from PySide6.QtGui import QColor, QEnterEvent, QFont, QPainter, QPaintEvent
from PySide6.QtWidgets import (
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from .models import Achievement
from .styling import category_style, format_created, format_date


class AchievementCard(QWidget):
    def __init__(self, achievement: Achievement, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.achievement = achievement
        self.style_info = category_style(achievement.category)
        self._hover = False
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setAutoFillBackground(False)
        self.setObjectName("achievementCard")
        self.setStyleSheet("#achievementCard { background: transparent; border-radius: 12px; }")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

        self.opacity_effect = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self.opacity_effect)

        self._opacity_animation = QPropertyAnimation(self.opacity_effect, b"opacity", self)
        self._opacity_animation.setDuration(400)
        self._opacity_animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._finished_callback = None

        self.layout = QVBoxLayout(self)
        self._build_layout()

    def _build_layout(self) -> None:
        self.layout.setContentsMargins(20, 16, 20, 16)
        self.layout.setSpacing(10)

        header = QHBoxLayout()
        header.setContentsMargins(0, 0, 0, 0)
        header.setSpacing(8)

        self.title_label = QLabel(self.achievement.title)
        self.title_label.setObjectName("cardTitle")
        self.title_label.setWordWrap(True)
        self.title_label.setFont(QFont("Segoe UI", 13, QFont.Weight.DemiBold))
        self.title_label.setStyleSheet("color: #111827; background: transparent;")

        self.badge_label = QLabel(f"{self.style_info.icon} {self.achievement.category}")
        self.badge_label.setObjectName("categoryBadge")
        self.badge_label.setProperty("token", self.style_info.token)
        self.badge_label.setFont(QFont("Segoe UI", 9, QFont.Weight.Medium))
        self.badge_label.setStyleSheet(self.style_info.stylesheet())
        self.badge_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop)

        header.addWidget(self.title_label, 1)
        header.addWidget(self.badge_label, 0, Qt.AlignmentFlag.AlignTop)

        self.description_label = QLabel(self.achievement.description)
        self.description_label.setObjectName("cardDescription")
        self.description_label.setWordWrap(True)
        self.description_label.setFont(QFont("Segoe UI", 10))
        self.description_label.setStyleSheet("color: #4b5563; background: transparent;")

        footer = QHBoxLayout()
        footer.setContentsMargins(0, 4, 0, 0)
        self.date_label = QLabel(format_date(self.achievement.date))
        self.date_label.setObjectName("cardDate")
        self.created_label = QLabel(format_created(self.achievement.created_at))
        self.created_label.setObjectName("cardCreated")
        for label in (self.date_label, self.created_label):
            label.setFont(QFont("Segoe UI", 9))
            label.setStyleSheet("color: #6b7280; background: transparent;")
        footer.addWidget(self.date_label)
        footer.addStretch()
        footer.addWidget(self.created_label)

        self.layout.addLayout(header)
        self.layout.addWidget(self.description_label)
        self.layout.addLayout(footer)

    def fade_in(self) -> None:
        self.opacity_effect.setOpacity(0.0)
        self._opacity_animation.stop()
        self._opacity_animation.setStartValue(0.0)
        self._opacity_animation.setEndValue(1.0)
        self._opacity_animation.start()

    def fade_out(self, finished_callback=None) -> None:
        self._opacity_animation.stop()
        if self._finished_callback is not None:
            try:
                self._opacity_animation.finished.disconnect(self._finished_callback)
            except (TypeError, RuntimeError):
                pass
            self._finished_callback = None
        if finished_callback:
            self._opacity_animation.finished.connect(finished_callback)
            self._finished_callback = finished_callback
        self._opacity_animation.setStartValue(self.opacity_effect.opacity())
        self._opacity_animation.setEndValue(0.0)
        self._opacity_animation.start()

    def enterEvent(self, event: QEnterEvent) -> None:  # type: ignore[override]
        self._hover = True
        self.update()
        return super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._hover = False
        self.update()
        return super().leaveEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect().adjusted(0, 0, -1, -1)
        painter.setPen(QColor("#e5e7eb"))
        painter.setBrush(QColor("#ffffff"))
        painter.drawRoundedRect(rect, 12, 12)

        # accent bar matches the category badge
        accent = QColor(self.style_info.foreground)
        accent.setAlpha(180)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(accent)
        painter.drawRoundedRect(rect.left(), rect.top() + 12, 4, rect.height() - 24, 2, 2)

        if self._hover:
            painter.setBrush(QColor(249, 250, 251, 110))
            painter.drawRoundedRect(rect, 12, 12)
        super().paintEvent(event)

    def sizeHint(self) -> QSize:  # type: ignore[override]
        hint = super().sizeHint()
        return QSize(max(280, hint.width()), max(150, hint.height()))

from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QRegularExpression, Signal
from PySide6.QtGui import QFont, QRegularExpressionValidator
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .models import CATEGORIES, AchievementDraft

INVALID_STYLE = "border: 1px solid #dc2626; border-radius: 6px;"
SUBMIT_TEXT = "Add Achievement"
LOADING_TEXT = "Adding..."


class AchievementForm(QWidget):
    """Entry form; every input is bound to a draft field by name."""

    submitted = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.draft = AchievementDraft()
        self._loading = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(14)

        heading = QLabel("Add New Achievement")
        heading.setFont(QFont("Segoe UI", 14, QFont.Weight.DemiBold))
        layout.addWidget(heading)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("e.g., Completed React Course")

        self.description_input = QPlainTextEdit()
        self.description_input.setPlaceholderText("Describe your achievement...")
        self.description_input.setFixedHeight(80)

        self.date_input = QLineEdit()
        self.date_input.setPlaceholderText("YYYY-MM-DD")
        self.date_input.setValidator(
            QRegularExpressionValidator(QRegularExpression(r"\d{0,4}(-\d{0,2}(-\d{0,2})?)?"))
        )

        self.category_input = QComboBox()
        self.category_input.addItem("Select a category", "")
        for category in CATEGORIES:
            self.category_input.addItem(category, category)

        self.inputs: Dict[str, QWidget] = {
            "title": self.title_input,
            "description": self.description_input,
            "date": self.date_input,
            "category": self.category_input,
        }
        for name, widget in self.inputs.items():
            widget.setObjectName(name)

        self.title_input.textChanged.connect(lambda text: self._on_change("title", text))
        self.description_input.textChanged.connect(
            lambda: self._on_change("description", self.description_input.toPlainText())
        )
        self.date_input.textChanged.connect(lambda text: self._on_change("date", text))
        self.category_input.currentIndexChanged.connect(
            lambda _index: self._on_change("category", self.category_input.currentData() or "")
        )

        fields = QFormLayout()
        fields.setSpacing(10)
        fields.addRow("Title", self.title_input)
        fields.addRow("Description", self.description_input)
        fields.addRow("Date", self.date_input)
        fields.addRow("Category", self.category_input)
        layout.addLayout(fields)

        self.submit_button = QPushButton(SUBMIT_TEXT)
        self.submit_button.setObjectName("submitButton")
        self.submit_button.clicked.connect(lambda: self.submit())
        layout.addWidget(self.submit_button)
        layout.addStretch()

    def _on_change(self, name: str, value: str) -> None:
        self.draft.set(name, value)
        if value.strip():
            self.inputs[name].setStyleSheet("")

    def set_value(self, name: str, value: str) -> None:
        """Fill one input the way a user would."""
        widget = self.inputs[name]
        if isinstance(widget, QComboBox):
            widget.setCurrentIndex(max(0, widget.findData(value)))
        elif isinstance(widget, QPlainTextEdit):
            widget.setPlainText(value)
        else:
            widget.setText(value)

    def submit(self) -> bool:
        if self._loading:
            return False
        missing = self.draft.missing_fields()
        for name in missing:
            self.inputs[name].setStyleSheet(INVALID_STYLE)
        if missing:
            self.inputs[missing[0]].setFocus()
            return False
        self.submitted.emit(self.draft)
        return True

    @property
    def loading(self) -> bool:
        return self._loading

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self.submit_button.setEnabled(not loading)
        self.submit_button.setText(LOADING_TEXT if loading else SUBMIT_TEXT)

    def reset(self) -> None:
        for widget in self.inputs.values():
            widget.blockSignals(True)
        try:
            self.title_input.clear()
            self.description_input.clear()
            self.date_input.clear()
            self.category_input.setCurrentIndex(0)
        finally:
            for widget in self.inputs.values():
                widget.blockSignals(False)
                widget.setStyleSheet("")
        self.draft.reset()

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict

from .models import parse_calendar_date


@dataclass(frozen=True)
class CategoryStyle:
    token: str
    background: str
    foreground: str
    icon: str

    def stylesheet(self) -> str:
        return (
            f"color: {self.foreground}; background: {self.background};"
            " border-radius: 10px; padding: 2px 8px;"
        )


CATEGORY_STYLES: Dict[str, CategoryStyle] = {
    "Course": CategoryStyle("course", "#dbeafe", "#1e40af", "📘"),
    "Project": CategoryStyle("project", "#dcfce7", "#166534", "🛠"),
    "Semester": CategoryStyle("semester", "#f3e8ff", "#6b21a8", "🎓"),
    "Internship": CategoryStyle("internship", "#ffedd5", "#9a3412", "💼"),
}
DEFAULT_STYLE = CategoryStyle("default", "#f3f4f6", "#1f2937", "⭐")

# en-US month names, independent of the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def category_style(category: str) -> CategoryStyle:
    return CATEGORY_STYLES.get(category, DEFAULT_STYLE)


def format_date(value: str) -> str:
    """``2024-05-01`` -> ``May 1, 2024``."""
    parsed = parse_calendar_date(value) if isinstance(value, str) else None
    if parsed is None:
        return "Invalid Date"
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_created(moment: datetime) -> str:
    local = moment.astimezone() if moment.tzinfo is not None else moment
    return f"{local.month}/{local.day}/{local.year}"

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Optional


CATEGORIES = ("Course", "Project", "Semester", "Internship")
DRAFT_FIELDS = ("title", "description", "date", "category")
SUBMIT_DELAY_MS = 500

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_calendar_date(value: str) -> Optional[date]:
    """Strict ``YYYY-MM-DD``; anything else, including partial input, is ``None``."""
    value = value.strip()
    if not _ISO_DATE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


@dataclass(frozen=True)
class Quote:
    text: str
    author: str = ""

    def display(self) -> str:
        return f"{self.text} - {self.author}" if self.author else self.text


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    date: str
    category: str
    created_at: datetime


@dataclass
class AchievementDraft:
    """Unsaved form state; every field is required before submission."""

    title: str = ""
    description: str = ""
    date: str = ""
    category: str = ""

    def set(self, name: str, value: str) -> None:
        if name not in DRAFT_FIELDS:
            raise KeyError(name)
        setattr(self, name, value)

    def missing_fields(self) -> list[str]:
        missing = [f.name for f in fields(self) if not getattr(self, f.name).strip()]
        if "date" not in missing and parse_calendar_date(self.date) is None:
            missing.append("date")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def reset(self) -> None:
        for name in DRAFT_FIELDS:
            setattr(self, name, "")

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from .models import Achievement

logger = logging.getLogger(__name__)

KEY_USER_NAME = "userName"
KEY_USER_EMAIL = "userEmail"
KEY_ACHIEVEMENTS = "achievements"
KEY_QUOTE_INDEX = "currentQuote"

DEFAULT_USER_NAME = "Student"
SCHEMA_VERSION = 1


class StorageError(RuntimeError):
    """The backing store could not be written."""


class SchemaError(ValueError):
    """Persisted achievements do not match a known record schema."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store, used by tests and as a throwaway session store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """String key-value pairs kept in a single JSON object file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._data = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: expected a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        try:
            self.path.write_text(
                json.dumps(self._data, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()


def _parse_timestamp(value: str) -> datetime:
    # JSON.stringify(Date) writes a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _decode_record(item: object) -> Achievement:
    if not isinstance(item, dict):
        raise SchemaError(f"Achievement record must be an object, got {type(item).__name__}")
    values = {}
    for name in ("id", "title", "description", "date", "category"):
        value = item.get(name)
        if not isinstance(value, str):
            raise SchemaError(f"Achievement field {name!r} must be a string")
        values[name] = value

    created = item.get("createdAt")
    if not isinstance(created, str) and not (created is None and values["id"].isdigit()):
        raise SchemaError("Achievement field 'createdAt' is missing")
    try:
        if isinstance(created, str):
            created_at = _parse_timestamp(created)
        else:
            # unversioned records may lack createdAt; the id is a millisecond timestamp
            created_at = datetime.fromtimestamp(int(values["id"]) / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise SchemaError(f"Invalid createdAt value {created!r}") from exc

    return Achievement(created_at=created_at, **values)


def decode_achievements(raw: str) -> List[Achievement]:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise SchemaError(f"Stored achievements are not valid JSON: {exc}") from exc

    if isinstance(payload, list):
        # unversioned format: a bare array of records
        records = payload
    elif isinstance(payload, dict):
        version = payload.get("version")
        if version != SCHEMA_VERSION:
            raise SchemaError(f"Unsupported achievement schema version {version!r}")
        records = payload.get("achievements")
        if not isinstance(records, list):
            raise SchemaError("Field 'achievements' must be a list")
    else:
        raise SchemaError("Stored achievements must be a list or an object")

    return [_decode_record(item) for item in records]


def encode_achievements(achievements: Iterable[Achievement]) -> str:
    records = [
        {
            "id": item.id,
            "title": item.title,
            "description": item.description,
            "date": item.date,
            "category": item.category,
            "createdAt": item.created_at.isoformat(),
        }
        for item in achievements
    ]
    return json.dumps(
        {"version": SCHEMA_VERSION, "achievements": records},
        ensure_ascii=False,
    )


class DashboardStorage:
    """Dashboard entries on top of a key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load_achievements(self) -> List[Achievement]:
        raw = self.store.get(KEY_ACHIEVEMENTS)
        if raw is None:
            return []
        try:
            return decode_achievements(raw)
        except SchemaError as exc:
            logger.warning("Discarding stored achievements: %s", exc)
            return []

    def save_achievements(self, achievements: Iterable[Achievement]) -> None:
        self.store.set(KEY_ACHIEVEMENTS, encode_achievements(achievements))

    def load_display_name(self) -> str:
        return self.store.get(KEY_USER_NAME) or DEFAULT_USER_NAME

    def save_display_name(self, name: str) -> None:
        self.store.set(KEY_USER_NAME, name)

    def load_quote_index(self) -> Optional[int]:
        raw = self.store.get(KEY_QUOTE_INDEX)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring non-integer quote index %r", raw)
            return None

    def save_quote_index(self, index: int) -> None:
        self.store.set(KEY_QUOTE_INDEX, str(index))

    def clear_identity(self) -> None:
        self.store.remove(KEY_USER_NAME)
        self.store.remove(KEY_USER_EMAIL)

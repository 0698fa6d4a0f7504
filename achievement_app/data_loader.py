from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .models import Quote
from .storage import DashboardStorage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_QUOTES: List[Quote] = [
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote(
        "Success is not final, failure is not fatal: it is the courage to continue that counts.",
        "Winston Churchill",
    ),
    Quote(
        "Education is the most powerful weapon which you can use to change the world.",
        "Nelson Mandela",
    ),
    Quote(
        "The future belongs to those who believe in the beauty of their dreams.",
        "Eleanor Roosevelt",
    ),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
]


def _split_author(text: str) -> Quote:
    body, sep, author = text.rpartition(" - ")
    if sep and body.strip() and author.strip():
        return Quote(text=body.strip(), author=author.strip())
    return Quote(text=text.strip())


def _normalise_quote_entries(entries: Iterable[object]) -> List[Quote]:
    quotes: List[Quote] = []
    for item in entries:
        if isinstance(item, dict):
            text = item.get("text")
            if not text:
                continue
            quotes.append(Quote(text=str(text).strip(), author=str(item.get("author", "")).strip()))
        elif isinstance(item, str) and item.strip():
            quotes.append(_split_author(item))
    return quotes


def _load_json(path: Path) -> Sequence:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        if "quotes" in data:
            return data["quotes"]
        return list(data.values())
    if isinstance(data, list):
        return data
    raise ValueError(f"Unsupported JSON structure in {path}")


def load_quotes(data_dir: Optional[Path]) -> List[Quote]:
    """Quotes from ``data_dir/quotes.json``, or the built-in list."""
    if data_dir is None:
        return list(DEFAULT_QUOTES)
    path = Path(data_dir) / "quotes.json"
    if not path.exists():
        return list(DEFAULT_QUOTES)
    try:
        entries = _load_json(path)
    except ValueError as exc:
        logger.warning("Ignoring quote file %s: %s", path, exc)
        return list(DEFAULT_QUOTES)

    # first entry wins for duplicate text
    unique: dict[str, Quote] = {}
    for quote in _normalise_quote_entries(entries):
        unique.setdefault(quote.text, quote)
    if not unique:
        logger.warning("Quote file %s has no usable entries", path)
        return list(DEFAULT_QUOTES)
    return list(unique.values())


def select_quote_index(
    storage: DashboardStorage,
    count: int,
    rng: Optional[random.Random] = None,
) -> int:
    """Reuse the stored quote index, or pick one at random and store it."""
    if count <= 0:
        raise ValueError("At least one quote is required")
    index = storage.load_quote_index()
    if index is None or not 0 <= index < count:
        index = (rng or random).randrange(count)
        logger.debug("Picked quote #%d of %d", index, count)
    try:
        storage.save_quote_index(index)
    except StorageError as exc:
        logger.warning("Quote index not persisted: %s", exc)
    return index

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from achievement_app.models import Achievement
from achievement_app.storage import (
    DEFAULT_USER_NAME,
    KEY_ACHIEVEMENTS,
    KEY_QUOTE_INDEX,
    KEY_USER_EMAIL,
    KEY_USER_NAME,
    DashboardStorage,
    JsonFileStore,
    MemoryStore,
    SchemaError,
    StorageError,
    decode_achievements,
    encode_achievements,
)


def _achievement(id_: str, title: str, category: str = "Course") -> Achievement:
    return Achievement(
        id=id_,
        title=title,
        description=f"{title} description",
        date="2024-05-01",
        category=category,
        created_at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
    )


def test_persist_then_reload_keeps_content_and_order(memory_store):
    items = [_achievement("3", "Newest"), _achievement("2", "Middle", "Project"), _achievement("1", "Oldest")]
    DashboardStorage(memory_store).save_achievements(items)

    reloaded = DashboardStorage(memory_store).load_achievements()

    assert reloaded == items


def test_encoded_payload_is_versioned(memory_store):
    DashboardStorage(memory_store).save_achievements([_achievement("1", "First")])

    payload = json.loads(memory_store.get(KEY_ACHIEVEMENTS))

    assert payload["version"] == 1
    assert payload["achievements"][0]["title"] == "First"
    assert payload["achievements"][0]["createdAt"] == "2024-05-01T09:30:00+00:00"


def test_unversioned_list_is_migrated():
    raw = json.dumps(
        [
            {
                "id": "1714550400000",
                "title": "Finished OS course",
                "description": "Built a toy kernel",
                "date": "2024-05-01",
                "category": "Course",
                "createdAt": "2024-05-01T08:00:00.000Z",
            }
        ]
    )

    [achievement] = decode_achievements(raw)

    assert achievement.title == "Finished OS course"
    assert achievement.created_at == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


def test_missing_created_at_falls_back_to_id_timestamp():
    raw = json.dumps(
        [{"id": "1714550400000", "title": "t", "description": "d", "date": "2024-05-01", "category": "Course"}]
    )

    [achievement] = decode_achievements(raw)

    assert achievement.created_at == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '"just a string"',
        '{"version": 99, "achievements": []}',
        '{"version": 1, "achievements": {}}',
        '[{"id": "x", "title": 5}]',
        '[{"id": "abc", "title": "t", "description": "d", "date": "2024-05-01", "category": "Course"}]',
    ],
)
def test_decode_rejects_malformed_payloads(raw):
    with pytest.raises(SchemaError):
        decode_achievements(raw)


def test_malformed_stored_achievements_load_as_empty():
    storage = DashboardStorage(MemoryStore({KEY_ACHIEVEMENTS: "[{broken"}))

    assert storage.load_achievements() == []


def test_encode_round_trip_of_empty_sequence():
    assert decode_achievements(encode_achievements([])) == []


def test_display_name_defaults_when_absent(storage):
    assert storage.load_display_name() == DEFAULT_USER_NAME
    storage.save_display_name("Ada")
    assert storage.load_display_name() == "Ada"


def test_quote_index_ignores_non_integers():
    storage = DashboardStorage(MemoryStore({KEY_QUOTE_INDEX: "NaN"}))

    assert storage.load_quote_index() is None
    storage.save_quote_index(3)
    assert storage.load_quote_index() == 3


def test_clear_identity_removes_name_and_email_only():
    store = MemoryStore({KEY_USER_NAME: "Ada", KEY_USER_EMAIL: "ada@example.com", KEY_QUOTE_INDEX: "1"})

    DashboardStorage(store).clear_identity()

    assert store.data == {KEY_QUOTE_INDEX: "1"}


def test_json_file_store_persists_between_instances(tmp_path: Path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set(KEY_USER_NAME, "Ada")

    reopened = JsonFileStore(path)

    assert reopened.get(KEY_USER_NAME) == "Ada"
    reopened.remove(KEY_USER_NAME)
    assert JsonFileStore(path).get(KEY_USER_NAME) is None


def test_json_file_store_ignores_corrupt_file(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("not json at all", encoding="utf-8")

    store = JsonFileStore(path)

    assert store.get(KEY_ACHIEVEMENTS) is None


def test_json_file_store_wraps_write_failures(tmp_path: Path):
    path = tmp_path / "store.json"
    store = JsonFileStore(path)
    path.mkdir()

    with pytest.raises(StorageError):
        store.set(KEY_USER_NAME, "Ada")

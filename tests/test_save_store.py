import json

import pytest

from quizcore.config import DEFAULT_STORAGE_KEY
from quizcore.events import CoinsChanged, EventBus
from quizcore.persistence import CategoryProgress, InMemoryStorage, SaveBlob, SaveStore
from quizcore.persistence.store import CORRUPT_SUFFIX


def test_load_absent_creates_and_persists_default():
    storage = InMemoryStorage()
    store = SaveStore(storage)
    assert not store.exists()

    blob = store.load()

    assert blob.coins == 0
    assert blob.categories == {}
    assert store.exists()
    raw = json.loads(storage.get(DEFAULT_STORAGE_KEY))
    assert raw["coins"] == 0
    assert raw["schema_version"] == 2


def test_save_then_load_roundtrip_twice_is_stable():
    storage = InMemoryStorage()
    store = SaveStore(storage)
    store.data.coins = 42
    progress = CategoryProgress("general", unlocked_level_max=3)
    progress.seen_question_ids.add("q1")
    progress.seen_question_ids.add("q2")
    progress.correct_question_ids.add("q2")
    store.data.categories["general"] = progress
    store.save()
    first = storage.get(DEFAULT_STORAGE_KEY)

    again = SaveStore(storage)
    again.load()
    again.save()
    second = storage.get(DEFAULT_STORAGE_KEY)

    assert first == second
    loaded = again.data.categories["general"]
    assert again.data.coins == 42
    assert loaded.seen_question_ids.to_list() == ["q1", "q2"]
    assert loaded.correct_question_ids == {"q2"}
    assert loaded.unlocked_level_max == 3


def test_corrupt_blob_is_backed_up_and_replaced():
    storage = InMemoryStorage({DEFAULT_STORAGE_KEY: "{not json"})
    store = SaveStore(storage)

    blob = store.load()

    assert blob.coins == 0
    assert storage.get(DEFAULT_STORAGE_KEY + CORRUPT_SUFFIX) == "{not json"
    assert json.loads(storage.get(DEFAULT_STORAGE_KEY))["coins"] == 0


def test_newer_schema_version_treated_as_unreadable():
    raw = json.dumps({"schema_version": 99, "coins": 500})
    storage = InMemoryStorage({DEFAULT_STORAGE_KEY: raw})
    store = SaveStore(storage)

    assert store.load().coins == 0
    assert storage.get(DEFAULT_STORAGE_KEY + CORRUPT_SUFFIX) == raw


def test_data_property_lazy_loads():
    raw = json.dumps({"schema_version": 2, "coins": 7})
    store = SaveStore(InMemoryStorage({"custom": raw}), key="custom")
    assert store.data.coins == 7


def test_save_accepts_replacement_blob():
    storage = InMemoryStorage()
    store = SaveStore(storage)
    store.save(SaveBlob(coins=9, player_name="Ana"))
    assert json.loads(storage.get(DEFAULT_STORAGE_KEY))["playerName"] == "Ana"
    assert store.data.coins == 9


def test_delete_all_resets_and_emits():
    bus = EventBus()
    events = []
    bus.subscribe(CoinsChanged, events.append)
    storage = InMemoryStorage()
    store = SaveStore(storage, bus=bus)
    store.data.coins = 300
    store.data.player_name = "Ana"
    store.save()

    store.delete_all()

    assert store.data.coins == 0
    assert store.data.player_name == ""
    assert json.loads(storage.get(DEFAULT_STORAGE_KEY))["coins"] == 0
    assert events[-1] == CoinsChanged(old_amount=300, new_amount=0, delta=-300, reason="delete_all")


@pytest.mark.parametrize(
    "raw",
    [
        '{"schema_version": 2, "coins": Infinity}',
        '{"schema_version": 2, "coins": -Infinity}',
        '{"schema_version": 2, "coins": NaN}',
        '{"schema_version": 1e999}',
        '{"schema_version": -1e15}',
        '{"schema_version": 2, "categories": {"g": {"unlockedLevelMax": Infinity}}}',
        '{"schema_version": 2, "settings": ' + "[" * 100000 + "]" * 100000 + "}",
    ],
)
def test_out_of_range_numbers_and_deep_nesting_start_fresh(raw):
    storage = InMemoryStorage({DEFAULT_STORAGE_KEY: raw})

    blob = SaveStore(storage).load()

    assert blob.coins == 0
    assert storage.get(DEFAULT_STORAGE_KEY + CORRUPT_SUFFIX) == raw
    assert json.loads(storage.get(DEFAULT_STORAGE_KEY))["coins"] == 0


class _UnreadableStorage(InMemoryStorage):
    def __init__(self, error: Exception) -> None:
        super().__init__({DEFAULT_STORAGE_KEY: "whatever"})
        self.error = error

    def get(self, key):
        if key == DEFAULT_STORAGE_KEY and self.error is not None:
            raise self.error
        return super().get(key)


@pytest.mark.parametrize(
    "error",
    [UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), PermissionError("denied")],
)
def test_unreadable_storage_starts_fresh(error):
    storage = _UnreadableStorage(error)
    store = SaveStore(storage)

    assert store.load().coins == 0

    storage.error = None
    assert json.loads(storage.get(DEFAULT_STORAGE_KEY))["schema_version"] == 2

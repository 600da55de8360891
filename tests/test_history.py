import dataclasses

import pytest

from history import HistoryEntry, HistoryStore


def test_record_prepends_newest_first():
    store = HistoryStore()
    store.record("1+1", "2")
    store.record("2+2", "4")
    assert [entry.expression for entry in store] == ["2+2", "1+1"]
    assert store.latest == HistoryEntry("2+2", "4")


def test_oldest_entries_are_evicted():
    store = HistoryStore(capacity=3)
    for k in range(5):
        store.record(str(k), str(k))
    assert len(store) == 3
    assert [entry.expression for entry in store.entries] == ["4", "3", "2"]


def test_entries_are_immutable_and_copied():
    store = HistoryStore()
    entry = store.record("1", "1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.result = "2"
    store.entries.clear()
    assert len(store) == 1
    assert str(entry) == "1 = 1"


def test_clear_and_capacity_validation():
    store = HistoryStore()
    store.record("1", "1")
    store.clear()
    assert len(store) == 0
    assert store.latest is None
    assert store.capacity == 50
    with pytest.raises(ValueError):
        HistoryStore(capacity=0)

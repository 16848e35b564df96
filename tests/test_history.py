import json

import pytest

from product_search.history import SearchHistory
from product_search.storage import JsonFileStorage, MemoryStorage, StorageError


class BrokenStorage:
    def get_item(self, key):
        raise StorageError("disk unavailable")

    def set_item(self, key, value):
        raise StorageError("disk unavailable")

    def remove_item(self, key):
        raise StorageError("disk unavailable")


def test_most_recent_first(history):
    history.record("x")
    history.record("y")
    assert history.recent()[0] == "y"


def test_duplicate_moves_to_front(history):
    history.record("x")
    history.record("y")
    history.record("x")
    assert history.recent() == ["x", "y"]


def test_keeps_last_ten(history):
    for i in range(11):
        history.record(f"query {i}")
    assert history.recent() == [f"query {i}" for i in range(10, 0, -1)]


def test_never_exceeds_cap(history):
    for i in range(25):
        history.record(f"q{i % 13}")
        assert len(history.recent()) <= 10


def test_blank_queries_ignored(history):
    history.record("")
    history.record("   ")
    history.record(None)
    assert history.recent() == []


def test_entries_are_trimmed(history):
    history.record("  ryzen  ")
    history.record("ryzen")
    assert history.recent() == ["ryzen"]


def test_dedup_is_case_sensitive(history):
    history.record("GPU")
    history.record("gpu")
    assert history.recent() == ["gpu", "GPU"]


def test_clear(history):
    history.record("ssd")
    history.clear()
    assert history.recent() == []


def test_stored_as_json_array_under_fixed_key(storage, history):
    history.record("ssd")
    assert json.loads(storage.get_item("recentSearches")) == ["ssd"]


def test_corrupted_value_reads_as_empty():
    storage = MemoryStorage({"recentSearches": "{not json"})
    history = SearchHistory(storage)
    assert history.recent() == []
    history.record("gpu")
    assert history.recent() == ["gpu"]


def test_non_list_value_reads_as_empty():
    history = SearchHistory(MemoryStorage({"recentSearches": '{"a": 1}'}))
    assert history.recent() == []


def test_non_string_entries_dropped():
    history = SearchHistory(MemoryStorage({"recentSearches": '["gpu", 3, null, "ssd"]'}))
    assert history.recent() == ["gpu", "ssd"]


def test_storage_failures_never_raise():
    history = SearchHistory(BrokenStorage())
    history.record("gpu")
    history.clear()
    assert history.recent() == []


def test_file_storage_survives_restart(tmp_path):
    path = tmp_path / "device" / "storage.json"
    SearchHistory(JsonFileStorage(path)).record("rtx 4070")
    SearchHistory(JsonFileStorage(path)).record("ddr5")

    assert SearchHistory(JsonFileStorage(path)).recent() == ["ddr5", "rtx 4070"]


def test_file_storage_keeps_other_keys(tmp_path):
    path = tmp_path / "storage.json"
    storage = JsonFileStorage(path)
    storage.set_item("theme", "dark")
    SearchHistory(storage).record("gpu")
    SearchHistory(storage).clear()

    assert storage.get_item("theme") == "dark"
    assert storage.get_item("recentSearches") is None


def test_corrupted_file_degrades_and_is_replaced(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json at all", encoding="utf-8")
    history = SearchHistory(JsonFileStorage(path))

    assert history.recent() == []
    history.record("psu")
    assert history.recent() == ["psu"]


def test_file_storage_leaves_no_temp_files(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")
    for i in range(5):
        storage.set_item("k", str(i))
    assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


class FailingDiskStorage:
    def get_item(self, key):
        raise OSError("disk gone")

    def set_item(self, key, value):
        raise PermissionError("read-only")

    def remove_item(self, key):
        raise OSError("disk gone")


def test_any_storage_error_is_contained():
    history = SearchHistory(FailingDiskStorage())
    assert history.recent() == []
    history.record("gpu")
    history.clear()


class DeniedPath:
    def exists(self):
        raise PermissionError("denied")


def test_unreadable_storage_path_is_a_storage_error(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")
    storage.path = DeniedPath()

    with pytest.raises(StorageError):
        storage.get_item("recentSearches")
    assert SearchHistory(storage).recent() == []

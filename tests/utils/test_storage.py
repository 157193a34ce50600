"""Tests for the key-value storage backends."""

from simple_explain.utils.storage import FileStorage, InMemoryStorage


def test_in_memory_storage_round_trip():
    storage = InMemoryStorage()

    assert storage.read("missing") is None
    assert storage.write("key", b"value") is True
    assert storage.read("key") == b"value"


def test_in_memory_quota_rejects_oversized_writes():
    storage = InMemoryStorage(quota_bytes=8)

    assert storage.write("a", b"1234") is True
    assert storage.write("b", b"12345") is False
    assert storage.read("b") is None
    # Replacing an existing key only counts the new value
    assert storage.write("a", b"12345678") is True


def test_file_storage_round_trip(tmp_path):
    storage = FileStorage(tmp_path / "history")

    assert storage.read("simple-explain-recent-searches-v2") is None
    assert storage.write("simple-explain-recent-searches-v2", b'{"en": []}') is True
    assert storage.read("simple-explain-recent-searches-v2") == b'{"en": []}'
    assert (tmp_path / "history" / "simple-explain-recent-searches-v2.json").exists()


def test_file_storage_sanitizes_keys(tmp_path):
    storage = FileStorage(tmp_path)

    storage.write("../escape/key", b"x")

    assert storage.read("../escape/key") == b"x"
    assert not (tmp_path.parent / "escape").exists()


def test_file_storage_reports_write_failure(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("a file, not a directory")

    assert FileStorage(blocker).write("key", b"x") is False

import json
from unittest.mock import MagicMock, patch

import pytest

from novaboard.errors import PersistenceReadError, PersistenceWriteError
from novaboard.persistence import PersistenceStore


class TestSave:
    def test_writes_fields_in_recency_order(self, persistence, history_path, make_entry):
        persistence.save([make_entry("newest"), make_entry("oldest")])
        data = json.loads(history_path.read_text(encoding="utf-8"))
        assert [item["text"] for item in data] == ["newest", "oldest"]
        assert set(data[0]) == {"id", "text", "timestamp"}

    def test_overwrites_previous_snapshot(self, persistence, history_path, make_entry):
        persistence.save([make_entry("a"), make_entry("b")])
        persistence.save([make_entry("c")])
        data = json.loads(history_path.read_text(encoding="utf-8"))
        assert [item["text"] for item in data] == ["c"]

    def test_empty_snapshot(self, persistence, history_path, make_entry):
        persistence.save([make_entry("a")])
        persistence.save([])
        assert json.loads(history_path.read_text(encoding="utf-8")) == []

    def test_creates_parent_directory(self, tmp_path, make_entry):
        store = PersistenceStore(tmp_path / "nested" / "dir" / "history.json")
        store.save([make_entry("a")])
        assert store.path.exists()

    def test_no_temporary_file_left_behind(self, persistence, history_path, make_entry):
        persistence.save([make_entry("a")])
        assert [p.name for p in history_path.parent.iterdir()] == ["history.json"]

    def test_failed_write_raises_write_error(self, persistence, make_entry):
        with patch("novaboard.persistence.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(PersistenceWriteError):
                persistence.save([make_entry("a")])

    def test_failed_write_keeps_previous_snapshot(self, persistence, make_entry):
        persistence.save([make_entry("kept")])
        with patch("novaboard.persistence.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceWriteError):
                persistence.save([make_entry("lost")])
        assert [e.text for e in persistence.load()] == ["kept"]

    def test_unicode_preserved(self, persistence, history_path, make_entry):
        persistence.save([make_entry("héllo ✂️ 日本")])
        assert "日本" in history_path.read_text(encoding="utf-8")


class TestLoad:
    def test_missing_file_is_empty(self, persistence):
        on_error = MagicMock()
        persistence._on_error = on_error
        assert persistence.load() == []
        on_error.assert_not_called()

    def test_round_trip(self, persistence, make_entry):
        entries = [make_entry("first"), make_entry("second"), make_entry("third")]
        persistence.save(entries)
        assert persistence.load() == entries

    def test_corrupt_file_is_empty(self, history_path):
        history_path.write_text("{not json", encoding="utf-8")
        on_error = MagicMock()
        store = PersistenceStore(history_path, on_error=on_error)

        assert store.load() == []
        on_error.assert_called_once()
        assert isinstance(on_error.call_args[0][0], PersistenceReadError)

    def test_wrong_top_level_type(self, history_path):
        history_path.write_text('{"id": "a"}', encoding="utf-8")
        assert PersistenceStore(history_path).load() == []

    def test_malformed_record(self, history_path):
        history_path.write_text(json.dumps([{"id": "a", "text": "x"}]), encoding="utf-8")
        assert PersistenceStore(history_path).load() == []

    def test_non_object_record(self, history_path):
        history_path.write_text(json.dumps(["just a string"]), encoding="utf-8")
        assert PersistenceStore(history_path).load() == []

    def test_binary_garbage(self, history_path):
        history_path.write_bytes(b"\xff\xfe\x00garbage")
        assert PersistenceStore(history_path).load() == []

    def test_corrupt_file_without_error_callback(self, history_path):
        history_path.write_text("[", encoding="utf-8")
        assert PersistenceStore(history_path).load() == []


class TestFailedWriteCleanup:
    def test_temporary_file_removed_when_replace_fails(self, persistence, history_path, make_entry):
        with patch("novaboard.persistence.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceWriteError):
                persistence.save([make_entry("a")])
        assert list(history_path.parent.iterdir()) == []

    def test_temporary_file_removed_when_dump_fails(self, persistence, history_path, make_entry):
        with patch("novaboard.persistence.json.dump", side_effect=ValueError("bad payload")):
            with pytest.raises(PersistenceWriteError):
                persistence.save([make_entry("a")])
        assert list(history_path.parent.iterdir()) == []


class TestChangeDetection:
    def test_unchanged_after_own_save(self, persistence, make_entry):
        persistence.save([make_entry("a")])
        assert persistence.changed_since_last_access() is False

    def test_unchanged_after_load(self, persistence, history_path, make_entry):
        PersistenceStore(history_path).save([make_entry("a")])
        persistence.load()
        assert persistence.changed_since_last_access() is False

    def test_missing_file_unchanged(self, persistence):
        persistence.load()
        assert persistence.changed_since_last_access() is False

    def test_other_writer_detected(self, persistence, history_path, make_entry):
        persistence.save([make_entry("a")])
        PersistenceStore(history_path).save([make_entry("b")])
        assert persistence.changed_since_last_access() is True

    def test_removed_file_detected(self, persistence, history_path, make_entry):
        persistence.save([make_entry("a")])
        history_path.unlink()
        assert persistence.changed_since_last_access() is True

from datetime import datetime, timezone

import pytest

from novaboard.controller import HistoryController
from novaboard.errors import ClipboardAccessError
from novaboard.history import HistoryStore
from novaboard.models import Entry
from novaboard.monitor import ClipboardWatcher
from novaboard.persistence import PersistenceStore


class FakeClipboard:
    """In-memory stand-in for the OS clipboard primitives."""

    def __init__(self, text: str | None = None, count: int = 0):
        self.text = text
        self.count = count
        self.fail = False

    def copy_external(self, text: str | None) -> None:
        """Simulate another application putting something on the clipboard."""
        self.text = text
        self.count += 1

    def change_count(self) -> int:
        if self.fail:
            raise ClipboardAccessError("clipboard unavailable")
        return self.count

    def current_text(self) -> str | None:
        if self.fail:
            raise ClipboardAccessError("clipboard unavailable")
        return self.text

    def set_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardAccessError("clipboard unavailable")
        self.text = text
        self.count += 1


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.json"


@pytest.fixture
def persistence(history_path):
    return PersistenceStore(history_path)


@pytest.fixture
def store(persistence):
    return HistoryStore(persistence, max_items=50)


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def watcher(clipboard, store):
    return ClipboardWatcher(clipboard, store)


@pytest.fixture
def controller(store, watcher, clipboard):
    return HistoryController(store, watcher, clipboard)


@pytest.fixture
def make_entry():
    """Factory fixture to create Entry instances for testing."""

    def _make_entry(text: str = "hello world", entry_id: str | None = None, created_at: datetime | None = None) -> Entry:
        return Entry(
            text=text,
            id=entry_id or f"id_{text}",
            created_at=created_at or datetime(2024, 9, 14, 18, 2, 33, tzinfo=timezone.utc),
        )

    return _make_entry


@pytest.fixture
def make_clipboard():
    return FakeClipboard

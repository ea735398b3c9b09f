import logging
from collections.abc import Callable
from pathlib import Path

from novaboard.clipboard import Clipboard
from novaboard.config import MAX_ITEMS
from novaboard.errors import ClipboardAccessError
from novaboard.history import HistoryStore, Subscriber
from novaboard.models import Entry
from novaboard.monitor import ClipboardWatcher
from novaboard.persistence import PersistenceStore

logger = logging.getLogger(__name__)


class HistoryController:
    """The one object a front end talks to."""

    def __init__(self, store: HistoryStore, watcher: ClipboardWatcher, clipboard: Clipboard):
        self._store = store
        self._watcher = watcher
        self._clipboard = clipboard

    def visible_entries(self, query: str = "") -> list[Entry]:
        if query:
            return self._store.search(query)
        return self._store.entries()

    def get(self, entry_id: str) -> Entry | None:
        return self._store.get(entry_id)

    def copy(self, entry_id: str) -> bool:
        entry = self._store.get(entry_id)
        if entry is None:
            return False

        try:
            self._clipboard.set_text(entry.text)
        except ClipboardAccessError as exc:
            logger.warning("Could not copy entry %s: %s", entry_id, exc)
            return False

        # Our own write must not come back through the watcher as a new copy.
        self._watcher.sync_change_count()
        return True

    def delete(self, entry_id: str) -> bool:
        return self._store.remove(entry_id)

    def clear_all(self) -> None:
        self._store.clear()

    def refresh(self) -> bool:
        return self._store.refresh()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self._store.subscribe(callback)

    @property
    def version(self) -> int:
        return self._store.version

    @property
    def watcher(self) -> ClipboardWatcher:
        return self._watcher


def build_controller(
    clipboard: Clipboard,
    history_path: str | Path | None = None,
    max_items: int = MAX_ITEMS,
) -> HistoryController:
    """Wire persistence, history, watcher and controller together once at start-up."""
    persistence = PersistenceStore(history_path)
    store = HistoryStore(persistence, max_items=max_items)
    watcher = ClipboardWatcher(clipboard, store)
    return HistoryController(store, watcher, clipboard)

import logging
import threading
from collections.abc import Callable

from novaboard.config import MAX_ITEMS
from novaboard.errors import PersistenceWriteError
from novaboard.models import Entry
from novaboard.persistence import PersistenceStore

logger = logging.getLogger(__name__)

Subscriber = Callable[[list[Entry]], None]


class HistoryStore:
    """In-memory clipboard history, newest first.

    Texts are unique and the list never grows past ``max_items``. Every
    mutation is applied in memory first and then written out as a full
    snapshot; a failed write is reported but never undoes the mutation.
    The lock covers the whole mutate-and-save sequence so snapshots land on
    disk in the same order the mutations happened. If another process rewrote
    the file in the meantime (a CLI ``delete`` or ``clear``), the list is reloaded
    from disk before the next mutation so that change is not overwritten.
    """

    def __init__(
        self,
        persistence: PersistenceStore,
        max_items: int = MAX_ITEMS,
        on_error: Callable[[Exception], None] | None = None,
    ):
        if max_items < 1:
            raise ValueError("max_items must be at least 1")
        self._persistence = persistence
        self._max_items = max_items
        self._on_error = on_error
        self._lock = threading.RLock()
        self._subscribers: list[Subscriber] = []
        self._version = 0
        self._entries = self._hydrate(persistence.load())

    def _hydrate(self, loaded: list[Entry]) -> list[Entry]:
        seen: set[str] = set()
        entries = []
        for entry in loaded:
            if entry.text in seen:
                continue
            seen.add(entry.text)
            entries.append(entry)
        if len(entries) > self._max_items:
            logger.info("Dropping %d stored entries over the limit of %d", len(entries) - self._max_items, self._max_items)
        return entries[: self._max_items]

    @property
    def max_items(self) -> int:
        return self._max_items

    @property
    def version(self) -> int:
        """Incremented on every applied mutation."""
        return self._version

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[Entry]:
        with self._lock:
            return list(self._entries)

    def get(self, entry_id: str) -> Entry | None:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def search(self, query: str) -> list[Entry]:
        if not query:
            return self.entries()
        needle = query.casefold()
        with self._lock:
            return [e for e in self._entries if needle in e.text.casefold()]

    def ingest(self, text: str) -> Entry | None:
        text = text.strip()
        if not text:
            return None

        with self._lock:
            self._reload_if_changed()
            if any(e.text == text for e in self._entries):
                return None

            entry = Entry.create(text)
            self._entries.insert(0, entry)
            if len(self._entries) > self._max_items:
                evicted = self._entries.pop()
                logger.debug("Evicted oldest entry %s", evicted.id)
            self._commit()
        return entry

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            self._reload_if_changed()
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    del self._entries[index]
                    self._commit()
                    return True
        return False

    def clear(self) -> None:
        with self._lock:
            self._reload_if_changed()
            self._entries.clear()
            self._commit()

    def refresh(self) -> bool:
        """Pick up changes another process wrote to the history file.

        Returns True when the in-memory list was replaced.
        """
        with self._lock:
            return self._reload_if_changed()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` to receive the entry list after each mutation.

        Returns a function that removes the subscription again.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _reload_if_changed(self) -> bool:
        # Caller holds the lock.
        if not self._persistence.changed_since_last_access():
            return False
        logger.info("History file changed on disk, reloading")
        self._entries = self._hydrate(self._persistence.load())
        self._version += 1
        self._notify()
        return True

    def _commit(self) -> None:
        # Caller holds the lock.
        self._version += 1
        try:
            self._persistence.save(self._entries)
        except PersistenceWriteError as exc:
            logger.error("Failed to save history: %s", exc)
            if self._on_error:
                self._on_error(exc)
        self._notify()

    def _notify(self) -> None:
        snapshot = list(self._entries)
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Error in history subscriber")

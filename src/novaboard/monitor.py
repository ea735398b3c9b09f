import logging

from novaboard.clipboard import Clipboard
from novaboard.config import MAX_TEXT_SIZE
from novaboard.errors import ClipboardAccessError
from novaboard.history import HistoryStore

logger = logging.getLogger(__name__)


class ClipboardWatcher:
    def __init__(self, clipboard: Clipboard, store: HistoryStore):
        self._clipboard = clipboard
        self._store = store
        # None until the first poll, which therefore records whatever is
        # already on the clipboard at launch.
        self._last_change_count: int | None = None

    @property
    def last_change_count(self) -> int | None:
        return self._last_change_count

    def poll(self) -> bool:
        try:
            current_count = self._clipboard.change_count()
        except ClipboardAccessError as exc:
            logger.debug("Clipboard unavailable: %s", exc)
            return False

        if current_count == self._last_change_count:
            return False

        # Recorded before reading so a non-text change is only inspected once.
        self._last_change_count = current_count

        try:
            text = self._read_text()
            if text is None:
                return False
            return self._store.ingest(text) is not None
        except ClipboardAccessError as exc:
            logger.debug("Clipboard unavailable: %s", exc)
            return False
        except Exception:
            logger.exception("Error reading clipboard")
            return False

    def sync_change_count(self) -> None:
        try:
            self._last_change_count = self._clipboard.change_count()
        except ClipboardAccessError as exc:
            logger.debug("Clipboard unavailable: %s", exc)

    def _read_text(self) -> str | None:
        text = self._clipboard.current_text()
        if not text:
            return None

        if len(text.encode("utf-8")) > MAX_TEXT_SIZE:
            logger.warning("Clipboard text too large (%d chars), skipping", len(text))
            return None

        text = text.strip()
        return text or None

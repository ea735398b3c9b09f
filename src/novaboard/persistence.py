import json
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from novaboard.config import HISTORY_PATH
from novaboard.errors import PersistenceReadError, PersistenceWriteError
from novaboard.models import Entry

logger = logging.getLogger(__name__)


class PersistenceStore:
    """Snapshot persistence of the history as a single JSON file.

    Every save rewrites the whole file, newest entry first. Writes go to a
    temporary sibling which is then renamed over the target, so a crash mid-save
    leaves the previous snapshot intact.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ):
        self._path = Path(path) if path else HISTORY_PATH
        self._on_error = on_error
        self._stamp: tuple[int, int, int] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def save(self, entries: Iterable[Entry]) -> None:
        payload = [entry.to_dict() for entry in entries]
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove %s", tmp_path)
            raise PersistenceWriteError(f"Could not write {self._path}: {exc}") from exc
        self._stamp = self._current_stamp()

    def load(self) -> list[Entry]:
        self._stamp = self._current_stamp()
        if not self._path.exists():
            return []

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [Entry.from_dict(item) for item in data]
        except (OSError, UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
            error = PersistenceReadError(f"Could not read {self._path}: {exc}")
            error.__cause__ = exc
            logger.warning("Ignoring unreadable history file: %s", error)
            if self._on_error:
                self._on_error(error)
            return []

    def changed_since_last_access(self) -> bool:
        """True when another process replaced or removed the file since our last load or save."""
        return self._current_stamp() != self._stamp

    def _current_stamp(self) -> tuple[int, int, int] | None:
        try:
            st = self._path.stat()
        except OSError:
            return None
        # Every save renames a fresh file into place, so the inode changes too.
        return (st.st_ino, st.st_mtime_ns, st.st_size)

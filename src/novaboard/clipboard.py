"""OS clipboard primitives.

The history core only needs three operations from the platform: a change
counter that moves whenever the clipboard contents change, the current plain
text (if any) and a way to replace the clipboard with a string. Adapter
failures surface as ``ClipboardAccessError``.
"""

import logging
import sys
from typing import Protocol

from novaboard.errors import ClipboardAccessError
from novaboard.utils import compute_hash

logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    def change_count(self) -> int: ...

    def current_text(self) -> str | None: ...

    def set_text(self, text: str) -> None: ...


class MacPasteboard:
    """Clipboard backed by the macOS general pasteboard."""

    def __init__(self):
        from AppKit import NSPasteboard, NSPasteboardTypeString

        self._pasteboard = NSPasteboard.generalPasteboard()
        self._string_type = NSPasteboardTypeString

    def change_count(self) -> int:
        try:
            return int(self._pasteboard.changeCount())
        except Exception as exc:
            raise ClipboardAccessError(f"Cannot read pasteboard change count: {exc}") from exc

    def current_text(self) -> str | None:
        try:
            text = self._pasteboard.stringForType_(self._string_type)
        except Exception as exc:
            raise ClipboardAccessError(f"Cannot read pasteboard text: {exc}") from exc
        return str(text) if text is not None else None

    def set_text(self, text: str) -> None:
        try:
            self._pasteboard.clearContents()
            ok = self._pasteboard.setString_forType_(text, self._string_type)
        except Exception as exc:
            raise ClipboardAccessError(f"Cannot write pasteboard: {exc}") from exc
        if ok is False:
            raise ClipboardAccessError("Pasteboard rejected the text")


class PyperclipClipboard:
    """Portable clipboard on top of pyperclip.

    pyperclip has no change counter, so one is synthesized: it moves forward
    whenever the pasted text hashes differently from the previous read.
    """

    def __init__(self):
        import pyperclip

        self._pyperclip = pyperclip
        self._count = 0
        self._last_hash: str | None = None

    def _read(self) -> str:
        try:
            return self._pyperclip.paste() or ""
        except self._pyperclip.PyperclipException as exc:
            raise ClipboardAccessError(f"Cannot read clipboard: {exc}") from exc

    def change_count(self) -> int:
        digest = compute_hash(self._read())
        if digest != self._last_hash:
            self._last_hash = digest
            self._count += 1
        return self._count

    def current_text(self) -> str | None:
        return self._read() or None

    def set_text(self, text: str) -> None:
        try:
            self._pyperclip.copy(text)
        except self._pyperclip.PyperclipException as exc:
            raise ClipboardAccessError(f"Cannot write clipboard: {exc}") from exc
        self._last_hash = compute_hash(text)
        self._count += 1


def default_clipboard() -> Clipboard:
    if sys.platform == "darwin":
        return MacPasteboard()
    logger.info("Using pyperclip clipboard backend on %s", sys.platform)
    return PyperclipClipboard()

"""Error kinds raised by the persistence layer and the clipboard primitives.

None of these is fatal: the watcher, the history store and the controller
log them and carry on.
"""


class NovaBoardError(Exception):
    """Base class for all NovaBoard errors."""


class PersistenceReadError(NovaBoardError):
    """The history file exists but could not be read or parsed."""


class PersistenceWriteError(NovaBoardError):
    """A history snapshot could not be written."""


class ClipboardAccessError(NovaBoardError):
    """The OS clipboard could not be read or written."""

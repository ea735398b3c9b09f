import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RecurringTimer:
    """Calls ``callback`` every ``interval`` seconds on a background thread.

    Nothing runs until :meth:`start` is called; :meth:`stop` wakes the thread
    and waits for it to exit.
    """

    def __init__(self, callback: Callable[[], object], interval: float, name: str = "RecurringTimer"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name=self._name)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Error in %s callback", self._name)

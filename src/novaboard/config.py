import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("NOVABOARD_DATA_DIR", Path.home() / ".local" / "share" / "novaboard"))
HISTORY_PATH = DATA_DIR / "history.json"
LOG_PATH = DATA_DIR / "novaboard.log"

MAX_TEXT_SIZE = 1_000_000  # 1MB text limit
PREVIEW_LENGTH = 60  # characters shown in menu item


def _parse_int(name: str, default: int, low: int, high: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(low, min(high, value))


def _parse_float(name: str, default: float, low: float, high: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return max(low, min(high, value))


def _parse_max_items() -> int:
    return _parse_int("NOVABOARD_MAX_ITEMS", 50, 1, 1000)


def _parse_poll_interval() -> float:
    return _parse_float("NOVABOARD_POLL_INTERVAL", 0.5, 0.1, 5.0)


def _parse_menu_display_count() -> int:
    return _parse_int("NOVABOARD_MENU_DISPLAY_COUNT", 10, 5, 50)


MAX_ITEMS = _parse_max_items()  # history bound, oldest evicted first
POLL_INTERVAL = _parse_poll_interval()  # seconds between clipboard checks
MENU_DISPLAY_COUNT = _parse_menu_display_count()

import argparse
import logging
import signal
import sys
import threading

from novaboard.clipboard import default_clipboard
from novaboard.config import HISTORY_PATH, LOG_PATH, MAX_ITEMS, POLL_INTERVAL
from novaboard.controller import HistoryController, build_controller
from novaboard.scheduler import RecurringTimer
from novaboard.utils import ensure_dirs, format_timestamp


def setup_logging() -> None:
    ensure_dirs()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(LOG_PATH),
            logging.StreamHandler(sys.stderr),
        ],
    )


def create_controller() -> HistoryController:
    return build_controller(default_clipboard(), HISTORY_PATH, MAX_ITEMS)


def run_app() -> int:
    """Run the menu-bar application."""
    setup_logging()

    if sys.platform != "darwin":
        print("The menu-bar app needs macOS. Use 'novaboard watch' instead.", file=sys.stderr)
        return 1

    from novaboard.app import NovaBoardApp

    app = NovaBoardApp()
    app.run()
    return 0


def run_watch(controller: HistoryController, stop_event: threading.Event | None = None) -> int:
    """Poll the clipboard in the background until interrupted."""
    if stop_event is None:
        stop_event = threading.Event()
    timer = RecurringTimer(controller.watcher.poll, POLL_INTERVAL, name="ClipboardWatcher")

    def _handle_signal(_signum, _frame):
        stop_event.set()

    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGTERM, _handle_signal)

    print(f"Watching clipboard every {POLL_INTERVAL}s. Press Ctrl-C to stop.")
    timer.start()
    try:
        stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        timer.stop()
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)
    return 0


def list_entries(controller: HistoryController, query: str = "") -> int:
    entries = controller.visible_entries(query)
    if not entries:
        print("No matches found" if query else "No items copied yet")
        return 0
    for entry in entries:
        print(f"{entry.id}  {format_timestamp(entry.created_at)}  {entry.preview}")
    return 0


def show_entry(controller: HistoryController, entry_id: str) -> int:
    entry = controller.get(entry_id)
    if entry is None:
        print(f"No entry with id {entry_id}", file=sys.stderr)
        return 1
    print(f"Copied at: {format_timestamp(entry.created_at)}")
    print()
    print(entry.text)
    return 0


def copy_entry(controller: HistoryController, entry_id: str) -> int:
    if not controller.copy(entry_id):
        print(f"Could not copy entry {entry_id}", file=sys.stderr)
        return 1
    print("Copied to clipboard")
    return 0


def delete_entry(controller: HistoryController, entry_id: str) -> int:
    if not controller.delete(entry_id):
        print(f"No entry with id {entry_id}", file=sys.stderr)
        return 1
    print("Deleted")
    return 0


def clear_history(controller: HistoryController) -> int:
    controller.clear_all()
    print("History cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="novaboard",
        description="NovaBoard - Clipboard history manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  novaboard              # Run the menu-bar app (macOS)
  novaboard watch        # Record clipboard history without a UI
  novaboard list token   # Entries containing "token"
  novaboard copy <id>    # Put an entry back on the clipboard
""",
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="Run the menu-bar app (default)")
    sub.add_parser("watch", help="Record clipboard history in the foreground")
    list_parser = sub.add_parser("list", help="List entries, newest first")
    list_parser.add_argument("query", nargs="?", default="", help="Case-insensitive filter")
    for name, help_text in (
        ("show", "Print one entry in full"),
        ("copy", "Copy an entry back to the clipboard"),
        ("delete", "Delete an entry"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("entry_id", help="Entry id as shown by 'list'")
    sub.add_parser("clear", help="Delete all entries")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.command in (None, "run"):
        sys.exit(run_app())

    if args.command == "watch":
        setup_logging()

    controller = create_controller()

    if args.command == "watch":
        sys.exit(run_watch(controller))
    elif args.command == "list":
        sys.exit(list_entries(controller, args.query))
    elif args.command == "show":
        sys.exit(show_entry(controller, args.entry_id))
    elif args.command == "copy":
        sys.exit(copy_entry(controller, args.entry_id))
    elif args.command == "delete":
        sys.exit(delete_entry(controller, args.entry_id))
    elif args.command == "clear":
        sys.exit(clear_history(controller))


if __name__ == "__main__":
    main()

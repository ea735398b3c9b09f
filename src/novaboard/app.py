import logging

import rumps

from novaboard.clipboard import MacPasteboard
from novaboard.config import HISTORY_PATH, MAX_ITEMS, POLL_INTERVAL
from novaboard.controller import HistoryController, build_controller
from novaboard.menu import MenuActions, MenuItemSpec, compute_menu_specs, entry_key
from novaboard.models import Entry
from novaboard.utils import ensure_dirs

logger = logging.getLogger(__name__)


class NovaBoardApp(rumps.App):
    def __init__(self, controller: HistoryController | None = None):
        super().__init__("NovaBoard", title="📋", quit_button=None)
        self._init_app(controller)

    def _init_app(self, controller: HistoryController | None) -> None:
        """Initialize app components. Separated for testability."""
        ensure_dirs()
        self._controller = controller or build_controller(MacPasteboard(), HISTORY_PATH, MAX_ITEMS)
        self._entry_ids: dict[str, str] = {}
        self._query = ""
        self._rendered_version = -1
        self._actions = MenuActions(
            on_copy=self._on_copy,
            on_delete=self._on_delete,
            on_search=self._on_search,
            on_show_all=self._on_show_all,
            on_clear=self._on_clear,
            on_quit=self._on_quit,
        )
        self._timer = rumps.Timer(self._poll_clipboard, POLL_INTERVAL)
        self._timer.start()
        self._build_menu()

    def _build_menu(self) -> None:
        entries = self._controller.visible_entries(self._query)
        specs = compute_menu_specs(entries, self._actions, query=self._query)
        self._entry_ids.clear()
        self.menu.clear()
        self.menu = [self._render_single_spec(spec) for spec in specs]
        self._rendered_version = self._controller.version

    def _render_single_spec(self, spec: MenuItemSpec | None) -> rumps.MenuItem | None:
        if spec is None:
            return None

        item = rumps.MenuItem(spec.title, callback=spec.callback)
        if spec.entry_id is not None:
            key = entry_key(spec.entry_id)
            self._entry_ids[key] = spec.entry_id
            item._id = key

        if spec.is_submenu and spec.children:
            for child in spec.children:
                item.add(self._render_single_spec(child))
        return item

    def _poll_clipboard(self, _sender) -> None:
        self._controller.refresh()
        self._controller.watcher.poll()
        # The menu only rebuilds when the history actually changed.
        if self._controller.version != self._rendered_version:
            self._build_menu()

    def _entry_for(self, sender) -> Entry | None:
        entry_id = self._entry_ids.get(getattr(sender, "_id", ""))
        if entry_id is None:
            return None
        return self._controller.get(entry_id)

    def _on_copy(self, sender) -> None:
        entry = self._entry_for(sender)
        if entry is None:
            return
        if self._controller.copy(entry.id):
            rumps.notification("NovaBoard", "", "Copied to clipboard", sound=False)

    def _on_delete(self, sender) -> None:
        entry = self._entry_for(sender)
        if entry is None:
            return
        self._controller.delete(entry.id)
        self._build_menu()

    def _on_search(self, _sender) -> None:
        response = rumps.Window(
            message="Search clipboard history:",
            title="NovaBoard Search",
            default_text=self._query,
            ok="Search",
            cancel="Cancel",
            dimensions=(300, 24),
        ).run()

        if response.clicked:
            self._query = response.text.strip()
            self._build_menu()

    def _on_show_all(self, _sender) -> None:
        self._query = ""
        self._build_menu()

    def _on_clear(self, _sender) -> None:
        if rumps.alert("NovaBoard", "Clear all clipboard history?", ok="Clear All", cancel="Cancel"):
            self._controller.clear_all()
            self._build_menu()

    def _on_quit(self, _sender) -> None:
        self._timer.stop()
        rumps.quit_application()

"""Menu model for the menu-bar front end, kept free of any rumps dependency."""

from collections.abc import Callable
from dataclasses import dataclass

from novaboard import __version__
from novaboard.config import MENU_DISPLAY_COUNT
from novaboard.models import Entry
from novaboard.utils import format_timestamp

ENTRY_KEY_PREFIX = "novaboard_entry_"


@dataclass
class MenuItemSpec:
    """Specification for a menu item, separating logic from rumps rendering."""

    title: str
    callback: Callable | None = None
    entry_id: str | None = None
    is_submenu: bool = False
    children: list["MenuItemSpec | None"] | None = None


@dataclass
class MenuActions:
    """Callbacks the rendered menu dispatches to."""

    on_copy: Callable
    on_delete: Callable
    on_search: Callable
    on_show_all: Callable
    on_clear: Callable
    on_quit: Callable


def entry_key(entry_id: str) -> str:
    return f"{ENTRY_KEY_PREFIX}{entry_id}"


def unique_title(title: str, used: set[str]) -> str:
    if title not in used:
        return title
    n = 2
    while f"{title} ({n})" in used:
        n += 1
    return f"{title} ({n})"


def compute_entry_spec(entry: Entry, actions: MenuActions, title: str | None = None) -> MenuItemSpec:
    """Each entry becomes a submenu holding its actions and capture time."""
    children: list[MenuItemSpec | None] = [
        MenuItemSpec("Copy", callback=actions.on_copy, entry_id=entry.id),
        MenuItemSpec("Delete", callback=actions.on_delete, entry_id=entry.id),
        None,
        MenuItemSpec(f"Copied at {format_timestamp(entry.created_at)}"),
    ]
    return MenuItemSpec(title or entry.preview, entry_id=entry.id, is_submenu=True, children=children)


def compute_menu_specs(
    entries: list[Entry],
    actions: MenuActions,
    query: str = "",
    limit: int = MENU_DISPLAY_COUNT,
) -> list[MenuItemSpec | None]:
    """Compute the full menu. ``None`` stands for a separator."""
    if query:
        header = MenuItemSpec(f'Search: "{query}" ({len(entries)} results)')
    else:
        header = MenuItemSpec(f"NovaBoard v{__version__} - Clipboard History")

    specs: list[MenuItemSpec | None] = [
        header,
        None,
        MenuItemSpec("Search...", callback=actions.on_search),
    ]
    if query:
        specs.append(MenuItemSpec("Show All", callback=actions.on_show_all))
    specs.append(None)

    footer: list[MenuItemSpec | None] = []
    if entries and not query:
        footer.extend([
            None,
            MenuItemSpec("Clear History", callback=actions.on_clear),
        ])
    footer.extend([
        None,
        MenuItemSpec("Quit NovaBoard", callback=actions.on_quit),
    ])

    if not entries:
        specs.append(MenuItemSpec("No matches found" if query else "No items copied yet"))
    else:
        # rumps keys menu items by title
        used = {s.title for s in specs + footer if s is not None}
        for entry in entries[:limit]:
            title = unique_title(entry.preview, used)
            used.add(title)
            specs.append(compute_entry_spec(entry, actions, title))

    return specs + footer

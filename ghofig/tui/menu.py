"""Main menu screen"""

from typing import List, Optional, Tuple

from rich.console import Group
from rich.text import Text

from . import theme
from .events import Key


LOGO = r"""
 _____ _           __ _
|  __ | |         / _(_)
| |  \| |__   ___| |_  _  __ _
| | __| '_ \ / _ \   _| |/ _` |
| |_\ \ | | | (_) | | | | (_| |
 \____/_| |_|\___/|_| |_|\__, |
                          __/ |
                         |___/ """

MENU_BROWSE = 0
MENU_EDITOR = 1

MENU_ITEMS: List[Tuple[str, str]] = [
    ("Browse Options", "Search Ghostty configuration options"),
    ("Config Editor", "Edit your Ghostty config file directly"),
]


class MenuScreen:
    """Two-entry menu: browse the catalog or edit the config file"""

    def __init__(self):
        self.index = 0
        self.width = 80
        self.height = 24

    def set_size(self, width: int, height: int):
        self.width = width
        self.height = height

    def update(self, key: Key) -> Optional[int]:
        """
        Handle navigation

        Returns:
            Index of the chosen item when the user selects one, else None
        """
        name = key.name
        if name in ('up', 'k'):
            self.index = max(0, self.index - 1)
        elif name in ('down', 'j'):
            self.index = min(len(MENU_ITEMS) - 1, self.index + 1)
        elif name == 'enter':
            return self.index
        elif name.isdigit() and 1 <= int(name) <= len(MENU_ITEMS):
            self.index = int(name) - 1
            return self.index
        return None

    def render(self):
        logo = Text(LOGO.strip('\n'), style=theme.PRIMARY)
        tagline = Text("Browse and manage Ghostty config.", style=theme.TEXT_MUTED)

        items = Text()
        for i, (title, description) in enumerate(MENU_ITEMS):
            if i == self.index:
                items.append(f"➤ {i + 1}. {title:<16}", style=theme.PRIMARY)
            else:
                items.append(f"  {i + 1}. {title:<16}")
            items.append(f"  {description}", style=theme.TEXT_MUTED)
            if i < len(MENU_ITEMS) - 1:
                items.append("\n")

        help_line = Text("↑/↓: navigate • enter: select • q: quit", style=theme.TEXT_MUTED)

        return Group(logo, tagline, Text(), items, Text(), help_line)

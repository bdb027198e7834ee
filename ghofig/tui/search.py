"""Search screen - type to filter the option catalog"""

import logging
from typing import List, Optional

from rich.console import Group
from rich.text import Text

from . import theme
from .events import Command, Key, SearchResults, new_token
from .widgets import TextInput
from ..errors import StoreQueryError
from ..lookup_db import LookupStore
from ..models import ConfigEntry


logger = logging.getLogger(__name__)


def highlight(text: str, query: str, base_style: str = "", match_style: str = theme.MATCH) -> Text:
    """Text with every case-insensitive occurrence of query styled"""
    result = Text(text, style=base_style)
    if not query:
        return result

    lower, lower_q = text.lower(), query.lower()
    start = lower.find(lower_q)
    while start != -1:
        result.stylize(match_style, start, start + len(query))
        start = lower.find(lower_q, start + len(query))

    return result


class SearchScreen:
    """Query input plus a navigable result list"""

    def __init__(self, store: LookupStore):
        self.store = store
        self.token = new_token()
        self.input = TextInput(placeholder="type to search...", char_limit=100)
        self.input.focus()
        self.results: List[ConfigEntry] = []
        self.cursor = 0
        self.error: Optional[str] = None
        self.width = 80
        self.height = 24

    def set_size(self, width: int, height: int):
        self.width = width
        self.height = height

    @property
    def query(self) -> str:
        return self.input.value

    def is_input_focused(self) -> bool:
        return self.input.focused

    def selected_entry(self) -> Optional[ConfigEntry]:
        if 0 <= self.cursor < len(self.results):
            return self.results[self.cursor]
        return None

    def start(self) -> Command:
        """Initial listing for the empty query"""
        return self._search_command(self.query)

    def _search_command(self, query: str) -> Command:
        store = self.store
        token = self.token

        def run() -> SearchResults:
            try:
                return SearchResults(token, query, store.search(query))
            except StoreQueryError as e:
                return SearchResults(token, query, [], error=str(e))

        return run

    def on_results(self, msg: SearchResults):
        # Completions for a query the user already changed are stale
        if msg.query != self.query:
            logger.debug(f"Dropping stale results for {msg.query!r}")
            return

        self.results = msg.results
        self.error = msg.error
        self.cursor = 0

    def update(self, key: Key) -> Optional[Command]:
        name = key.name

        if name in ('up', 'down'):
            if self.results:
                self.input.blur()
                if name == 'up' and self.cursor > 0:
                    self.cursor -= 1
                elif name == 'down' and self.cursor < len(self.results) - 1:
                    self.cursor += 1
            return None

        if name in ('enter', 'esc'):
            return None

        self.input.focus()
        previous = self.query
        self.input.handle(key)

        if self.query != previous:
            self.cursor = 0
            return self._search_command(self.query)

        return None

    def render(self):
        title = Text("Search", style=f"bold {theme.PRIMARY}")
        if self.query:
            current = self.cursor + 1 if self.results else 0
            title.append(f"  {current}/{len(self.results)} results", style=theme.TEXT_MUTED)

        input_line = Text("> ", style=theme.TEXT_MUTED)
        input_line.append_text(self.input.render())

        # title, blank, input, blank ... blank, help
        list_height = max(3, self.height - 6)

        if self.error:
            results = Text(f"Search failed: {self.error}", style=theme.ERROR)
        elif self.results:
            start = 0
            if self.cursor >= list_height:
                start = self.cursor - list_height + 1

            results = Text()
            window = self.results[start:start + list_height]
            for i, entry in enumerate(window, start):
                if i == self.cursor:
                    results.append("➤ ○ ", style=theme.PRIMARY)
                    results.append_text(highlight(entry.title, self.query, theme.PRIMARY))
                else:
                    results.append("  ○ ")
                    results.append_text(highlight(entry.title, self.query))
                if i < start + len(window) - 1:
                    results.append("\n")
        elif self.query:
            results = Text("0 results", style=theme.TEXT_MUTED)
        else:
            results = Text()

        if self.results:
            help_text = "↑/↓: navigate • enter: select • esc: back • q: quit"
        else:
            help_text = "type to search • esc: back • q: quit"

        return Group(
            title,
            Text(),
            input_line,
            Text(),
            results,
            Text(),
            Text(help_text, style=theme.TEXT_MUTED),
        )

"""
View state machine

Owns the four screens, tracks which one is active and routes every event:
keys go to the active screen, resizes go to all of them, and messages from
background commands go back to the screen instance that issued them.
"""

import logging
from enum import Enum
from typing import Optional, Union

from .detail import DetailScreen
from .editor import EditorScreen
from .events import Command, Key, Message, Resize, SearchResults
from .menu import MenuScreen, MENU_BROWSE, MENU_EDITOR
from .search import SearchScreen
from ..config_file import ConfigFile
from ..lookup_db import LookupStore


logger = logging.getLogger(__name__)

QUIT_KEYS = ('q', 'ctrl+c')
DETAIL_BACK_KEYS = ('esc', 'backspace')

Event = Union[Key, Resize, Message]


class View(Enum):
    MENU = "menu"
    SEARCH = "search"
    DETAIL = "detail"
    EDITOR = "editor"


class App:
    """Top-level UI model driven one event at a time"""

    def __init__(self, store: LookupStore, config_file: ConfigFile):
        self.store = store
        self.config_file = config_file
        self.view = View.MENU
        self.width = 80
        self.height = 24
        self.should_quit = False

        self.menu = MenuScreen()
        self.search = SearchScreen(store)
        self.detail = DetailScreen(config_file)
        self.editor = EditorScreen(config_file)

    def is_composing(self) -> bool:
        """Whether the user is typing text, so 'q' must not quit"""
        if self.view == View.SEARCH:
            return self.search.is_input_focused()
        if self.view == View.DETAIL:
            return self.detail.is_editing()
        return self.view == View.EDITOR

    def update(self, event: Event) -> Optional[Command]:
        """
        Apply one event

        Returns:
            Command to run in the background, if the event started one
        """
        if isinstance(event, Resize):
            self._resize(event.width, event.height)
            return None

        if isinstance(event, Message):
            self._deliver(event)
            return None

        if event.name in QUIT_KEYS and not self.is_composing():
            logger.info("Quit requested")
            self.should_quit = True
            return None

        if self.view == View.MENU:
            return self._update_menu(event)
        if self.view == View.SEARCH:
            return self._update_search(event)
        if self.view == View.DETAIL:
            return self._update_detail(event)
        return self._update_editor(event)

    def _resize(self, width: int, height: int):
        self.width = width
        self.height = height
        for screen in (self.menu, self.search, self.detail, self.editor):
            screen.set_size(width, height)

    def _deliver(self, msg: Message):
        """Hand a completed result to the screen that asked for it"""
        if isinstance(msg, SearchResults):
            if msg.token == self.search.token:
                self.search.on_results(msg)
                return
        elif msg.token == self.detail.token:
            self.detail.on_message(msg)
            return
        elif msg.token == self.editor.token:
            self.editor.on_message(msg)
            return

        logger.debug(f"Dropping {type(msg).__name__} for a discarded screen")

    def _update_menu(self, key: Key) -> Optional[Command]:
        choice = self.menu.update(key)

        if choice == MENU_BROWSE:
            self.view = View.SEARCH
            return self.search.start()

        if choice == MENU_EDITOR:
            self.view = View.EDITOR
            self.editor.set_size(self.width, self.height)
            return self.editor.start()

        return None

    def _update_search(self, key: Key) -> Optional[Command]:
        if key.name == 'esc':
            # Leaving search forgets the query and results
            self.search = SearchScreen(self.store)
            self.search.set_size(self.width, self.height)
            self.view = View.MENU
            return None

        if key.name == 'enter':
            entry = self.search.selected_entry()
            if entry is not None:
                self.detail.set_entry(entry)
                self.view = View.DETAIL
            return None

        return self.search.update(key)

    def _update_detail(self, key: Key) -> Optional[Command]:
        if key.name in DETAIL_BACK_KEYS and not self.detail.is_editing():
            self.view = View.SEARCH
            return None

        return self.detail.update(key)

    def _update_editor(self, key: Key) -> Optional[Command]:
        if key.name == 'esc':
            # Unsaved edits are discarded
            self.editor = EditorScreen(self.config_file)
            self.editor.set_size(self.width, self.height)
            self.view = View.MENU
            return None

        return self.editor.update(key)

    def render(self):
        if self.view == View.MENU:
            return self.menu.render()
        if self.view == View.SEARCH:
            return self.search.render()
        if self.view == View.DETAIL:
            return self.detail.render()
        return self.editor.render()

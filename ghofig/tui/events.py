"""Events consumed by the view state machine

Keys and resizes come from the terminal. Everything else is a message
returned by a command that ran off the main loop.
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..models import ConfigEntry


_tokens = itertools.count(1)


def new_token() -> int:
    """Unique address for a screen instance"""
    return next(_tokens)


@dataclass(frozen=True)
class Key:
    """A decoded keypress, e.g. "a", "enter", "up", "ctrl+s" """
    name: str

    @property
    def is_printable(self) -> bool:
        return len(self.name) == 1 and self.name.isprintable()


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass
class Message:
    """Result of a background command, addressed to the screen that issued it"""
    token: int


@dataclass
class SearchResults(Message):
    query: str
    results: List[ConfigEntry] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ConfigAppended(Message):
    error: Optional[str] = None


@dataclass
class ConfigCommentedOut(Message):
    commented: bool = False
    error: Optional[str] = None


@dataclass
class ConfigLoaded(Message):
    content: str = ""
    path: str = ""
    error: Optional[str] = None


@dataclass
class ConfigSaved(Message):
    error: Optional[str] = None


@dataclass(frozen=True)
class Failure:
    """A command raised unexpectedly; the loop cannot continue"""
    error: BaseException


# Zero-argument callable run on the worker; returns the message to deliver
Command = Callable[[], Message]

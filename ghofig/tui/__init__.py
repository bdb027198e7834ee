"""Full-screen terminal UI"""

from .app import App, View
from .loop import EventLoop

__all__ = [
    'App',
    'View',
    'EventLoop',
]

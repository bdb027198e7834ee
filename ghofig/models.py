"""Data types for the option catalog"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigEntry:
    """One documented configuration option"""
    id: int
    title: str  # Option name, e.g. "font-family"
    description: str  # Full documentation text, may span many lines

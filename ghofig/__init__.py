"""ghofig - Browse Ghostty config options and apply them to your config file"""

__version__ = "0.1.0"

from .models import ConfigEntry
from .lookup_db import LookupStore
from .config_file import ConfigFile
from .reference_parser import ReferenceParser, write_database
from .errors import (
    GhofigError,
    StoreInitError,
    StoreQueryError,
    NotFoundError,
    FileIOError,
    ReferenceParseError,
)

__all__ = [
    'ConfigEntry',
    'LookupStore',
    'ConfigFile',
    'ReferenceParser',
    'write_database',
    'GhofigError',
    'StoreInitError',
    'StoreQueryError',
    'NotFoundError',
    'FileIOError',
    'ReferenceParseError',
]

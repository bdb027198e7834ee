"""Error kinds raised by ghofig components"""


class GhofigError(Exception):
    """Base class for all ghofig errors"""


class StoreInitError(GhofigError):
    """The lookup database could not be materialized or opened"""


class StoreQueryError(GhofigError):
    """A query against the lookup database failed"""


class NotFoundError(GhofigError):
    """No catalog entry has the requested id"""


class FileIOError(GhofigError):
    """Reading or writing the Ghostty config file failed"""


class ReferenceParseError(GhofigError):
    """The documentation dump could not be read"""

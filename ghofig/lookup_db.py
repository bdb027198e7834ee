"""Read-only SQLite lookup table of Ghostty configuration options"""

import os
import sqlite3
import logging
import tempfile
from pathlib import Path
from typing import List, Optional

from .errors import StoreInitError, StoreQueryError, NotFoundError, ReferenceParseError
from .models import ConfigEntry
from .reference_parser import ReferenceParser, write_database


logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50
EMBEDDED_REFERENCE = Path(__file__).parent / "data" / "reference.md"
MATERIALIZED_DB_PREFIX = "ghofig-"


def _like_pattern(query: str) -> str:
    """Build a LIKE pattern that matches query literally as a substring"""
    escaped = query.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f"%{escaped}%"


class LookupStore:
    """Read-only store of documented config options, searched by substring"""

    def __init__(self, db_path: Path, remove_on_close: bool = False):
        self.db_path = db_path
        self.remove_on_close = remove_on_close
        self.conn: Optional[sqlite3.Connection] = None
        self._open()

    @classmethod
    def from_embedded(cls, reference_path: Path = EMBEDDED_REFERENCE,
                      temp_dir: Optional[Path] = None) -> 'LookupStore':
        """
        Materialize the bundled catalog to a temp file and open it

        Args:
            reference_path: Documentation dump shipped with the package
            temp_dir: Directory for the materialized database (default: system temp)

        Returns:
            Opened store; the temp file is removed on close()
        """
        try:
            # One file per session
            fd, name = tempfile.mkstemp(prefix=MATERIALIZED_DB_PREFIX, suffix=".db", dir=temp_dir)
            os.close(fd)
        except OSError as e:
            raise StoreInitError(f"failed to create temp db: {e}") from e

        db_path = Path(name)

        try:
            entries = ReferenceParser().parse_file(reference_path)
            write_database(db_path, entries)
        except (ReferenceParseError, sqlite3.Error, OSError) as e:
            db_path.unlink(missing_ok=True)
            raise StoreInitError(f"failed to write temp db: {e}") from e

        try:
            return cls(db_path, remove_on_close=True)
        except StoreInitError:
            db_path.unlink(missing_ok=True)
            raise

    def _open(self):
        """Open the database read-only and verify the configs table"""
        uri = f"{self.db_path.resolve().as_uri()}?mode=ro"

        try:
            # Queries run on the background worker, never two at once
            self.conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row

            cursor = self.conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='configs'")
            if cursor.fetchone() is None:
                raise StoreInitError(f"no configs table in {self.db_path}")
        except sqlite3.Error as e:
            raise StoreInitError(f"failed to open database: {e}") from e

        logger.info(f"Lookup store opened at {self.db_path}")

    def search(self, query: str) -> List[ConfigEntry]:
        """
        Search options by title or description

        Title matches come before description-only matches; ties are
        ordered by title. An empty query lists everything by title.

        Args:
            query: Case-insensitive substring

        Returns:
            Up to SEARCH_LIMIT entries
        """
        if query == "":
            return self._all_entries()

        pattern = _like_pattern(query)

        try:
            cursor = self.conn.cursor()
            cursor.execute('''
                SELECT id, title, description
                FROM configs
                WHERE title LIKE ? ESCAPE '\\' OR description LIKE ? ESCAPE '\\'
                ORDER BY
                    CASE WHEN title LIKE ? ESCAPE '\\' THEN 0 ELSE 1 END,
                    title
                LIMIT ?
            ''', (pattern, pattern, pattern, SEARCH_LIMIT))
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Search failed for {query!r}: {e}")
            raise StoreQueryError(str(e)) from e

        return [self._to_entry(row) for row in rows]

    def _all_entries(self) -> List[ConfigEntry]:
        """All entries ordered by title, capped at SEARCH_LIMIT"""
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                'SELECT id, title, description FROM configs ORDER BY title LIMIT ?',
                (SEARCH_LIMIT,)
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Listing entries failed: {e}")
            raise StoreQueryError(str(e)) from e

        return [self._to_entry(row) for row in rows]

    def get_by_id(self, entry_id: int) -> ConfigEntry:
        """Get a single entry by id"""
        try:
            cursor = self.conn.cursor()
            cursor.execute('SELECT id, title, description FROM configs WHERE id = ?', (entry_id,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreQueryError(str(e)) from e

        if row is None:
            raise NotFoundError(f"config not found: {entry_id}")
        return self._to_entry(row)

    def count(self) -> int:
        """Number of entries in the catalog"""
        try:
            cursor = self.conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM configs')
            return cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise StoreQueryError(str(e)) from e

    @staticmethod
    def _to_entry(row: sqlite3.Row) -> ConfigEntry:
        return ConfigEntry(id=row['id'], title=row['title'], description=row['description'])

    def close(self):
        """Close database connection and drop the materialized file"""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("Lookup store closed")

        if self.remove_on_close:
            try:
                self.db_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove temp db {self.db_path}: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

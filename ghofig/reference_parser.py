"""Documentation dump parsing and lookup table generation"""

import logging
import re
import sqlite3
from pathlib import Path
from typing import List, Tuple

from .errors import ReferenceParseError

logger = logging.getLogger(__name__)


# Option headings look like: ## `font-family`
HEADING_PATTERN = re.compile(r'^## `(.+)`$')


class ReferenceParser:
    """Parser that turns a Ghostty reference dump into (title, description) rows"""

    def parse_file(self, reference_path: Path) -> List[Tuple[str, str]]:
        """Parse reference file from disk"""
        try:
            with open(reference_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ReferenceParseError(f"Cannot read {reference_path}: {e}") from e

        return self.parse_text(content)

    def parse_text(self, content: str) -> List[Tuple[str, str]]:
        """
        Extract option entries from reference text

        Consecutive headings with no text between them are aliases and
        share the description that follows the last of them.

        Args:
            content: Full reference document

        Returns:
            List of (title, description) tuples in document order
        """
        entries = []
        pending_titles = []
        description_lines = []
        in_description = False

        for line in content.split('\n'):
            match = HEADING_PATTERN.match(line)
            if match:
                if in_description and pending_titles:
                    description = '\n'.join(description_lines).strip()
                    entries.extend((title, description) for title in pending_titles)
                    pending_titles = []
                    description_lines = []

                pending_titles.append(match.group(1))
                in_description = False
                continue

            if not pending_titles:
                continue

            # Skip blank lines between the heading and the first paragraph
            if not in_description and not line.strip():
                continue

            in_description = True
            description_lines.append(line)

        # Trailing heading without a description is dropped
        if pending_titles and description_lines:
            description = '\n'.join(description_lines).strip()
            entries.extend((title, description) for title in pending_titles)

        logger.debug(f"Parsed {len(entries)} reference entries")
        return entries


def write_database(db_path: Path, entries: List[Tuple[str, str]]):
    """
    Write entries into a fresh lookup database

    Any existing file at db_path is replaced.

    Args:
        db_path: Output SQLite file
        entries: (title, description) rows
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    if db_path.exists():
        db_path.unlink()

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS configs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT NOT NULL
            )
        ''')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_configs_title ON configs(title)')
        cursor.executemany(
            'INSERT INTO configs (title, description) VALUES (?, ?)',
            entries
        )
        conn.commit()
    finally:
        conn.close()

    logger.info(f"Wrote {len(entries)} entries to {db_path}")

"""Line-preserving edits of the Ghostty config file"""

import os
import logging
import tempfile
from pathlib import Path
from typing import List, Optional

from .errors import FileIOError


logger = logging.getLogger(__name__)

COMMENT_PREFIX = "# "


def parse_option_key(line: str) -> Optional[str]:
    """
    Key of an active option line

    Args:
        line: Raw line from the config file

    Returns:
        Trimmed text before the first '=', or None for blank lines,
        comments and lines without '='
    """
    stripped = line.strip()
    if not stripped or stripped.startswith('#'):
        return None

    if '=' not in stripped:
        return None

    key, _ = stripped.split('=', 1)
    return key.strip()


class ConfigFile:
    """Reads and rewrites a single Ghostty config file"""

    def __init__(self, path: Path):
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def read_all(self) -> str:
        """Full file content, or an empty string if the file does not exist"""
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise FileIOError(f"cannot read {self.path}: {e}") from e

    def write_all(self, content: str):
        """
        Replace the file content

        Writes to a sibling temp file and renames it over the target, so a
        reader never sees a half-written file. Parent directories are created.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                    f.write(content)
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, self.path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
                raise
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise FileIOError(f"cannot write {self.path}: {e}") from e

        logger.info(f"Wrote {len(content)} bytes to {self.path}")

    def get_value(self, key: str) -> str:
        """
        Current value of an option

        Later assignments override earlier ones, as Ghostty itself reads
        the file.

        Returns:
            Trimmed right-hand side of the last matching line, or "" if unset
        """
        try:
            content = self.read_all()
        except FileIOError:
            return ""

        value = ""
        for line in content.split('\n'):
            if parse_option_key(line) == key:
                value = line.split('=', 1)[1].strip()

        return value

    def append_line(self, line: str):
        """
        Append an option line, commenting out earlier lines for the same key

        Args:
            line: Full option line, e.g. "font-size = 14"
        """
        key = None
        if '=' in line:
            key = line.split('=', 1)[0].strip()

        content = self.read_all()

        if content:
            lines = self._comment_matching(content.split('\n'), key) if key else content.split('\n')
            content = '\n'.join(lines)

        # Ensure trailing newline before appending
        if content and not content.endswith('\n'):
            content += '\n'

        content += line + '\n'

        self.write_all(content)
        logger.info(f"Appended to {self.path}: {line}")

    def comment_out(self, key: str) -> bool:
        """
        Comment out every active line that sets key

        Returns:
            True if any line was commented out; False (and no write) when
            the file is missing or nothing matched
        """
        if not self.exists():
            return False

        original = self.read_all().split('\n')
        lines = self._comment_matching(original, key)

        if lines == original:
            return False

        self.write_all('\n'.join(lines))
        logger.info(f"Commented out '{key}' in {self.path}")
        return True

    @staticmethod
    def _comment_matching(lines: List[str], key: str) -> List[str]:
        """Prefix active lines for key with a comment marker, others unchanged"""
        return [
            COMMENT_PREFIX + line if parse_option_key(line) == key else line
            for line in lines
        ]

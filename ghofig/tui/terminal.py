"""
Terminal helpers - raw keyboard input

Keys are read one byte at a time from a terminal in raw-ish mode and decoded
into names ("a", "enter", "up", "ctrl+s", ...). Output processing is left on
so rich can keep drawing normally.
"""

import os
import codecs
import select
import termios
from contextlib import contextmanager
from typing import Optional


# Time to wait for the rest of an escape sequence before treating ESC as a key
ESCAPE_TIMEOUT = 0.05

ESCAPE_SEQUENCES = {
    '[A': 'up',
    '[B': 'down',
    '[C': 'right',
    '[D': 'left',
    '[H': 'home',
    '[F': 'end',
    'OA': 'up',
    'OB': 'down',
    'OC': 'right',
    'OD': 'left',
    'OH': 'home',
    'OF': 'end',
    '[1~': 'home',
    '[7~': 'home',
    '[4~': 'end',
    '[8~': 'end',
    '[3~': 'delete',
    '[5~': 'pgup',
    '[6~': 'pgdown',
    '[Z': 'shift+tab',
}


def parse_sequence(sequence: str) -> Optional[str]:
    """Name for the bytes following ESC, or None if unknown"""
    if sequence in ESCAPE_SEQUENCES:
        return ESCAPE_SEQUENCES[sequence]

    # Alt+<char> arrives as ESC followed by the char
    if len(sequence) == 1 and sequence.isprintable():
        return f"alt+{sequence}"

    return None


def control_key_name(ch: str) -> Optional[str]:
    """Name for a single control character, or None for printable input"""
    if ch in ('\r', '\n'):
        return 'enter'
    if ch in ('\x7f', '\x08'):
        return 'backspace'
    if ch == '\t':
        return 'tab'
    if ch == '\x00':
        return 'ctrl+space'

    code = ord(ch)
    if 1 <= code <= 26:
        return f"ctrl+{chr(ord('a') + code - 1)}"

    return None


@contextmanager
def raw_mode(fd: int):
    """
    Put the terminal in character mode for the duration of the block

    Echo, line buffering, signals (so ctrl+c arrives as a key) and XON/XOFF
    flow control (so ctrl+s arrives as a key) are disabled.
    """
    old_settings = termios.tcgetattr(fd)
    new_settings = termios.tcgetattr(fd)

    new_settings[0] &= ~(termios.IXON | termios.ICRNL)
    new_settings[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
    new_settings[6][termios.VMIN] = 1
    new_settings[6][termios.VTIME] = 0

    termios.tcsetattr(fd, termios.TCSAFLUSH, new_settings)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class KeyReader:
    """Decodes keypresses from a terminal file descriptor"""

    def __init__(self, fd: int):
        self.fd = fd
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')

    def _ready(self, timeout: float) -> bool:
        readable, _, _ = select.select([self.fd], [], [], timeout)
        return bool(readable)

    def _read_char(self) -> str:
        """Read one full UTF-8 character"""
        while True:
            data = os.read(self.fd, 1)
            if not data:
                raise EOFError("terminal closed")
            ch = self._decoder.decode(data)
            if ch:
                return ch

    def wait(self, timeout: float) -> bool:
        """Whether input is available within timeout seconds"""
        return self._ready(timeout)

    def read_key(self) -> Optional[str]:
        """
        Read a single keypress without waiting for Enter

        Returns:
            Key name, or None for sequences that map to nothing
        """
        ch = self._read_char()

        if ch != '\x1b':
            return control_key_name(ch) or ch

        if not self._ready(ESCAPE_TIMEOUT):
            return 'esc'

        sequence = self._read_char()
        if sequence in ('[', 'O'):
            # CSI/SS3: parameters until a final byte in @..~
            while self._ready(ESCAPE_TIMEOUT):
                nxt = self._read_char()
                sequence += nxt
                if '@' <= nxt <= '~':
                    break

        return parse_sequence(sequence)

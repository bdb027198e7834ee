"""Small editing and scrolling widgets rendered with rich"""

import textwrap
from typing import List

from rich.text import Text

from . import theme
from .events import Key


class TextInput:
    """Single-line text input"""

    def __init__(self, placeholder: str = "", char_limit: int = 0):
        self.value = ""
        self.cursor = 0
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.focused = False

    def focus(self):
        self.focused = True

    def blur(self):
        self.focused = False

    def set_value(self, value: str):
        if self.char_limit:
            value = value[:self.char_limit]
        self.value = value
        self.cursor = min(self.cursor, len(value))

    def cursor_end(self):
        self.cursor = len(self.value)

    def handle(self, key: Key):
        """Apply an editing key; ignored when not focused"""
        if not self.focused:
            return

        name = key.name
        if key.is_printable:
            if self.char_limit and len(self.value) >= self.char_limit:
                return
            self.value = self.value[:self.cursor] + name + self.value[self.cursor:]
            self.cursor += 1
        elif name == 'backspace' and self.cursor > 0:
            self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
            self.cursor -= 1
        elif name == 'delete':
            self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]
        elif name == 'left':
            self.cursor = max(0, self.cursor - 1)
        elif name == 'right':
            self.cursor = min(len(self.value), self.cursor + 1)
        elif name in ('home', 'ctrl+a'):
            self.cursor = 0
        elif name in ('end', 'ctrl+e'):
            self.cursor = len(self.value)
        elif name == 'ctrl+u':
            self.value = self.value[self.cursor:]
            self.cursor = 0
        elif name == 'ctrl+k':
            self.value = self.value[:self.cursor]

    def render(self, style: str = theme.TEXT_INPUT) -> Text:
        if not self.value:
            text = Text(self.placeholder or " ", style=theme.TEXT_MUTED)
            if self.focused:
                text.stylize(theme.CURSOR, 0, 1)
            return text

        text = Text(self.value + " ", style=style)
        if self.focused:
            text.stylize(theme.CURSOR, self.cursor, self.cursor + 1)
        return text


class TextBuffer:
    """Multi-line editable text with line numbers"""

    def __init__(self):
        self.lines: List[str] = [""]
        self.row = 0
        self.col = 0
        self.top = 0
        self.height = 10

    @property
    def value(self) -> str:
        return '\n'.join(self.lines)

    def set_value(self, value: str):
        self.lines = value.split('\n')
        self.row = 0
        self.col = 0
        self.top = 0

    def _clamp_col(self):
        self.col = min(self.col, len(self.lines[self.row]))

    def handle(self, key: Key):
        name = key.name
        line = self.lines[self.row]

        if key.is_printable:
            self.lines[self.row] = line[:self.col] + name + line[self.col:]
            self.col += 1
        elif name == 'enter':
            self.lines[self.row] = line[:self.col]
            self.lines.insert(self.row + 1, line[self.col:])
            self.row += 1
            self.col = 0
        elif name == 'backspace':
            if self.col > 0:
                self.lines[self.row] = line[:self.col - 1] + line[self.col:]
                self.col -= 1
            elif self.row > 0:
                previous = self.lines[self.row - 1]
                self.lines[self.row - 1] = previous + line
                del self.lines[self.row]
                self.row -= 1
                self.col = len(previous)
        elif name == 'delete':
            if self.col < len(line):
                self.lines[self.row] = line[:self.col] + line[self.col + 1:]
            elif self.row < len(self.lines) - 1:
                self.lines[self.row] = line + self.lines[self.row + 1]
                del self.lines[self.row + 1]
        elif name == 'left':
            if self.col > 0:
                self.col -= 1
            elif self.row > 0:
                self.row -= 1
                self.col = len(self.lines[self.row])
        elif name == 'right':
            if self.col < len(line):
                self.col += 1
            elif self.row < len(self.lines) - 1:
                self.row += 1
                self.col = 0
        elif name == 'up' and self.row > 0:
            self.row -= 1
            self._clamp_col()
        elif name == 'down' and self.row < len(self.lines) - 1:
            self.row += 1
            self._clamp_col()
        elif name == 'pgup':
            self.row = max(0, self.row - self.height)
            self._clamp_col()
        elif name == 'pgdown':
            self.row = min(len(self.lines) - 1, self.row + self.height)
            self._clamp_col()
        elif name in ('home', 'ctrl+a'):
            self.col = 0
        elif name in ('end', 'ctrl+e'):
            self.col = len(line)

    def render(self, focused: bool = True) -> Text:
        # Keep the cursor row on screen
        if self.row < self.top:
            self.top = self.row
        elif self.row >= self.top + self.height:
            self.top = self.row - self.height + 1

        gutter = len(str(len(self.lines)))
        text = Text()
        visible = self.lines[self.top:self.top + self.height]

        for offset, line in enumerate(visible):
            index = self.top + offset
            is_current = index == self.row

            number_style = theme.PRIMARY if is_current else theme.TEXT_MUTED
            text.append(f"{index + 1:>{gutter}} ", style=number_style)

            start = len(text)
            text.append(line + " ", style=theme.BG_HIGHLIGHT if is_current else "")
            if is_current and focused:
                text.stylize(theme.CURSOR, start + self.col, start + self.col + 1)

            if offset < len(visible) - 1:
                text.append("\n")

        return text


class Viewport:
    """Scrollable, wrapped view of a block of text"""

    def __init__(self, width: int = 80, height: int = 10):
        self.width = width
        self.height = height
        self.content = ""
        self.lines: List[str] = []
        self.offset = 0

    def set_size(self, width: int, height: int):
        self.width = max(width, 10)
        self.height = max(height, 1)
        self.set_content(self.content)

    def set_content(self, content: str):
        self.content = content
        self.lines = []
        for line in content.split('\n'):
            if len(line) <= self.width:
                self.lines.append(line)
                continue
            indent = line[:len(line) - len(line.lstrip())]
            self.lines.extend(textwrap.wrap(line, self.width, subsequent_indent=indent) or [""])
        self.offset = min(self.offset, self.max_offset)

    @property
    def max_offset(self) -> int:
        return max(0, len(self.lines) - self.height)

    def line_up(self, n: int = 1):
        self.offset = max(0, self.offset - n)

    def line_down(self, n: int = 1):
        self.offset = min(self.max_offset, self.offset + n)

    def half_view_up(self):
        self.line_up(max(1, self.height // 2))

    def half_view_down(self):
        self.line_down(max(1, self.height // 2))

    def goto_top(self):
        self.offset = 0

    def goto_bottom(self):
        self.offset = self.max_offset

    def scroll_percent(self) -> float:
        if self.max_offset == 0:
            return 1.0
        return self.offset / self.max_offset

    def render(self) -> Text:
        return Text('\n'.join(self.lines[self.offset:self.offset + self.height]))

"""Detail screen - option documentation and a one-line config editor"""

from typing import Optional

from rich.console import Group
from rich.padding import Padding
from rich.text import Text

from . import theme
from .events import Command, ConfigAppended, ConfigCommentedOut, Key, Message, new_token
from .widgets import TextInput, Viewport
from ..config_file import ConfigFile
from ..errors import FileIOError
from ..models import ConfigEntry


def is_empty_value(value: str, option_name: str) -> bool:
    """Whether the submitted line means "unset this option"

    True for blank input or the bare option name, with or without a
    trailing '='.
    """
    trimmed = value.strip()
    return (
        trimmed == ""
        or trimmed == option_name
        or trimmed == f"{option_name} ="
        or trimmed == f"{option_name}="
    )


class DetailScreen:
    """Shows one entry; Enter opens an input that writes to the config file"""

    def __init__(self, config_file: ConfigFile):
        self.config_file = config_file
        self.token = new_token()
        self.entry: Optional[ConfigEntry] = None
        self.viewport = Viewport()
        self.input = TextInput(char_limit=500)
        self.editing = False
        self.success = False
        self.message = ""
        self.has_existing_value = False
        self.width = 80
        self.height = 24

    def set_size(self, width: int, height: int):
        self.width = width
        self.height = height
        # Room for title, editor line, hint, scroll indicator and help
        self.viewport.set_size(width - 6, height - 10)

    def set_entry(self, entry: ConfigEntry):
        # Results still in flight belong to the previous entry
        self.token = new_token()
        self.entry = entry
        self.editing = False
        self.success = False
        self.message = ""
        self.input.set_value("")
        self.input.blur()
        self.input.placeholder = f"{entry.title} = value"
        self.viewport.set_content(entry.description)
        self.viewport.goto_top()

    def is_editing(self) -> bool:
        return self.editing

    def start_editing(self):
        self.editing = True
        self.success = False
        self.message = ""

        existing = self.config_file.get_value(self.entry.title)
        self.has_existing_value = existing != ""
        if self.has_existing_value:
            self.input.set_value(f"{self.entry.title} = {existing}")
        else:
            self.input.set_value(f"{self.entry.title} = ")
        self.input.cursor_end()
        self.input.focus()

    def cancel_editing(self):
        self.editing = False
        self.input.blur()

    def _submit(self) -> Command:
        value = self.input.value
        option_name = self.entry.title
        config_file = self.config_file
        token = self.token

        if is_empty_value(value, option_name):
            def comment_out() -> ConfigCommentedOut:
                try:
                    return ConfigCommentedOut(token, commented=config_file.comment_out(option_name))
                except FileIOError as e:
                    return ConfigCommentedOut(token, error=str(e))
            return comment_out

        def append() -> ConfigAppended:
            try:
                config_file.append_line(value)
                return ConfigAppended(token)
            except FileIOError as e:
                return ConfigAppended(token, error=str(e))
        return append

    def on_message(self, msg: Message):
        if isinstance(msg, ConfigAppended):
            if msg.error:
                self.message = f"Error: {msg.error}"
            else:
                self.success = True
                self.message = "✓ Added to config file"
                self.cancel_editing()

        elif isinstance(msg, ConfigCommentedOut):
            if msg.error:
                self.message = f"Error: {msg.error}"
            elif msg.commented:
                self.success = True
                self.message = "✓ Commented out from config file"
                self.cancel_editing()
            else:
                self.message = "Option not found in config file"
                self.cancel_editing()

    def update(self, key: Key) -> Optional[Command]:
        if self.entry is None:
            return None

        name = key.name

        if self.editing:
            if name == 'enter':
                return self._submit()
            if name == 'esc':
                self.cancel_editing()
                return None
            self.input.handle(key)
            return None

        if name == 'enter':
            self.start_editing()
        elif name in ('up', 'k'):
            self.viewport.line_up()
        elif name in ('down', 'j'):
            self.viewport.line_down()
        elif name == 'pgup':
            self.viewport.half_view_up()
        elif name == 'pgdown':
            self.viewport.half_view_down()
        elif name in ('home', 'g'):
            self.viewport.goto_top()
        elif name in ('end', 'G'):
            self.viewport.goto_bottom()

        return None

    def render(self):
        if self.entry is None:
            return Text("No config selected")

        parts = [Text(self.entry.title, style=f"bold {theme.PRIMARY}"), Text()]

        if self.editing:
            line = Text("  > ")
            line.append_text(self.input.render(style=theme.SECONDARY))
            parts.append(line)

            hint = "  Enter: save to config, Esc: cancel"
            if self.has_existing_value:
                hint += " | Clear value to comment out"
            parts.append(Text(hint, style=theme.TEXT_MUTED))
            if self.message:
                parts.append(Text(f"  {self.message}", style=theme.ERROR))
        elif self.message:
            style = theme.SUCCESS if self.success else theme.TEXT_MUTED
            parts.append(Text(f"  {self.message}", style=style))
        else:
            parts.append(Text(f"  ➤ ○ Open Editor For `{self.entry.title}`", style=theme.PRIMARY))
        parts.append(Text())

        parts.append(Padding(self.viewport.render(), (0, 0, 0, 2)))

        if self.viewport.scroll_percent() < 1.0:
            parts.append(Text("↓ scroll for more", style=theme.TEXT_MUTED, justify="right"))

        parts.append(Text())
        if self.editing:
            help_text = "enter: save • esc: cancel"
        else:
            help_text = "enter: edit • ↑/↓: scroll • pgup/pgdn: page • esc: back • q: quit"
        parts.append(Text(help_text, style=theme.TEXT_MUTED))

        return Group(*parts)

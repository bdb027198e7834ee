"""Editor screen - edit the whole config file as text"""

from typing import Optional

from rich.console import Group
from rich.text import Text

from . import theme
from .events import Command, ConfigLoaded, ConfigSaved, Key, Message, new_token
from .widgets import TextBuffer
from ..config_file import ConfigFile
from ..errors import FileIOError


class EditorScreen:
    """Free-text buffer over the config file; ctrl+s writes it back"""

    def __init__(self, config_file: ConfigFile):
        self.config_file = config_file
        self.token = new_token()
        self.buffer = TextBuffer()
        self.config_path = ""
        self.message = ""
        self.is_error = False
        self.initial_text = ""
        self.saving_text = ""
        self.width = 80
        self.height = 24

    def set_size(self, width: int, height: int):
        self.width = width
        self.height = height
        # Title, path, blank, message, help
        self.buffer.height = max(3, height - 6)

    def start(self) -> Command:
        """Load the file content in the background"""
        config_file = self.config_file
        token = self.token

        def load() -> ConfigLoaded:
            path = str(config_file.path)
            try:
                return ConfigLoaded(token, content=config_file.read_all(), path=path)
            except FileIOError as e:
                return ConfigLoaded(token, path=path, error=str(e))

        return load

    def _save_command(self) -> Command:
        content = self.buffer.value
        self.saving_text = content
        config_file = self.config_file
        token = self.token

        def save() -> ConfigSaved:
            try:
                config_file.write_all(content)
                return ConfigSaved(token)
            except FileIOError as e:
                return ConfigSaved(token, error=str(e))

        return save

    def has_unsaved_changes(self) -> bool:
        return self.buffer.value != self.initial_text

    def on_message(self, msg: Message):
        if isinstance(msg, ConfigLoaded):
            self.config_path = msg.path
            if msg.error:
                self.message = f"Error loading config: {msg.error}"
                self.is_error = True
            else:
                self.buffer.set_value(msg.content)
                self.initial_text = msg.content
                self.message = ""
                self.is_error = False

        elif isinstance(msg, ConfigSaved):
            if msg.error:
                self.message = f"Error saving: {msg.error}"
                self.is_error = True
            else:
                self.message = "Saved successfully"
                self.is_error = False
                self.initial_text = self.saving_text

    def update(self, key: Key) -> Optional[Command]:
        if key.name == 'ctrl+s':
            return self._save_command()
        if key.name == 'esc':
            return None

        self.buffer.handle(key)
        return None

    def render(self):
        title = Text("Config Editor", style=f"bold {theme.PRIMARY}")
        if self.has_unsaved_changes():
            title.append("  [modified]", style=theme.TEXT_MUTED)

        path = Text(self.config_path, style=f"italic {theme.TEXT_MUTED}")

        if self.message:
            message = Text(self.message, style=theme.ERROR if self.is_error else theme.SUCCESS)
        else:
            message = Text()

        help_line = Text("Ctrl+S: save | Esc: back to menu", style=theme.TEXT_MUTED)

        return Group(title, path, Text(), self.buffer.render(), message, help_line)

"""Colors used across screens (rich style strings)"""

PRIMARY = "cyan"
SECONDARY = "magenta"
TEXT = "white"
TEXT_MUTED = "grey50"
TEXT_INPUT = "bright_white"
MATCH = "bold yellow"
SUCCESS = "green"
ERROR = "red"
BG_HIGHLIGHT = "on grey23"
CURSOR = "reverse"

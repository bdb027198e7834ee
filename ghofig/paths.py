"""Location of the Ghostty config file"""

import os
import sys
from pathlib import Path


def get_macos_config_path(home: Path) -> Path:
    """macOS application-support config path"""
    return home / "Library" / "Application Support" / "com.mitchellh.ghostty" / "config"


def get_xdg_config_path(home: Path) -> Path:
    """XDG config path, honoring XDG_CONFIG_HOME"""
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else home / ".config"
    return base / "ghostty" / "config"


def get_config_path() -> Path:
    """Get the path the Ghostty config is read from and written to.

    On macOS the application-support file takes priority when it exists.
    Everywhere else (and as the macOS fallback) the XDG path is used.
    """
    home = Path.home()

    if sys.platform == "darwin":
        mac_path = get_macos_config_path(home)
        if mac_path.exists():
            return mac_path

    return get_xdg_config_path(home)


def config_exists() -> bool:
    """Check if a config file exists at any known location"""
    home = Path.home()

    if sys.platform == "darwin" and get_macos_config_path(home).exists():
        return True

    return get_xdg_config_path(home).exists()

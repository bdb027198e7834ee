"""Optional user settings and logging setup"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import yaml


DEFAULT_LOG_LEVEL = "WARNING"


def get_settings_path() -> Path:
    """Settings file location (GHOFIG_SETTINGS overrides the XDG default)"""
    override = os.environ.get("GHOFIG_SETTINGS")
    if override:
        return Path(override).expanduser()

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / "ghofig" / "settings.yaml"


def get_default_log_file() -> Path:
    xdg_state = os.environ.get("XDG_STATE_HOME")
    base = Path(xdg_state) if xdg_state else Path.home() / ".local" / "state"
    return base / "ghofig" / "ghofig.log"


def load_settings(settings_path: Optional[Path] = None) -> dict:
    """
    Load settings file

    A missing file yields empty settings. A malformed file is reported on
    stderr and ignored, since the UI is still usable without it.
    """
    settings_path = settings_path or get_settings_path()

    if not settings_path.exists():
        return {}

    try:
        with open(settings_path) as f:
            settings = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Warning: ignoring settings file {settings_path}: {e}", file=sys.stderr)
        return {}

    if not isinstance(settings, dict):
        print(f"Warning: ignoring settings file {settings_path}: expected a mapping", file=sys.stderr)
        return {}

    return settings


def get_config_override(settings: dict) -> Optional[Path]:
    """Ghostty config path set in settings, if any"""
    config_path = settings.get('config_path')
    if not config_path:
        return None
    return Path(config_path).expanduser()


def setup_logging(settings: dict):
    """Setup logging

    The UI owns the terminal, so records always go to a file.
    """
    log_settings = settings.get('logging') or {}
    log_level = str(log_settings.get('level', DEFAULT_LOG_LEVEL)).upper()
    log_file = log_settings.get('file')

    log_file = Path(log_file).expanduser() if log_file else get_default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
        ]
    )

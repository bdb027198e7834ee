#!/usr/bin/env python3
"""
ghofig - Ghostty config browser

Entry points:
- ghofig: launch the full-screen UI
- ghofig-build-db: convert a reference dump into a lookup database
"""

import sys
import sqlite3
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from . import __version__
from .config_file import ConfigFile
from .errors import StoreInitError, ReferenceParseError
from .lookup_db import LookupStore
from .paths import config_exists, get_config_path
from .reference_parser import ReferenceParser, write_database
from .settings import load_settings, setup_logging, get_config_override


logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

DEFAULT_REFERENCE_FILE = "reference.mdx.txt"
DEFAULT_OUTPUT_DB = "data/ghofig.db"


def show_help():
    """Print usage"""
    console.print(f"[bold cyan]ghofig[/bold cyan] v{__version__}")
    console.print("Browse Ghostty configuration options and apply them to your config file")
    console.print("\n[bold]Usage:[/bold]")
    console.print("  ghofig              Launch interactive mode")
    console.print("  ghofig --version    Show version")
    console.print("  ghofig --help       Show this help")
    console.print("\n[bold]Files:[/bold]")
    status = "" if config_exists() else " [dim](not created yet)[/dim]"
    console.print(f"  • Ghostty config: {get_config_path()}{status}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv

    if argv:
        cmd = argv[0].lower()

        if cmd in ("--version", "-v"):
            console.print(f"ghofig {__version__}")
            return 0

        if cmd in ("--help", "-h"):
            show_help()
            return 0

    settings = load_settings()
    setup_logging(settings)

    try:
        store = LookupStore.from_embedded()
    except StoreInitError as e:
        logger.error(f"Startup failed: {e}")
        err_console.print(f"[red]Failed to initialize database: {e}[/red]")
        return 1

    # The UI needs termios; --version and --help do not
    from .tui import App, EventLoop

    config_path = get_config_override(settings) or get_config_path()

    try:
        logger.info(f"Catalog has {store.count()} options, config file is {config_path}")
        app = App(store, ConfigFile(config_path))
        EventLoop(app, console=console).run()
    except Exception as e:
        logger.exception("UI loop failed")
        err_console.print(f"[red]Error running program: {e}[/red]")
        return 1
    finally:
        store.close()

    return 0


def build_db_main(argv: Optional[List[str]] = None) -> int:
    """Convert a reference dump into the lookup database"""
    parser = argparse.ArgumentParser(
        prog='ghofig-build-db',
        description='Build the ghofig lookup database from a Ghostty reference dump',
    )
    parser.add_argument(
        'input',
        nargs='?',
        type=Path,
        default=Path(DEFAULT_REFERENCE_FILE),
        help=f'Reference file (default: {DEFAULT_REFERENCE_FILE})'
    )
    parser.add_argument(
        '-o', '--output',
        type=Path,
        default=Path(DEFAULT_OUTPUT_DB),
        help=f'Output database (default: {DEFAULT_OUTPUT_DB})'
    )

    args = parser.parse_args(argv)

    try:
        entries = ReferenceParser().parse_file(args.input)
    except ReferenceParseError as e:
        err_console.print(f"Error parsing file: {e}")
        return 1

    console.print(f"Parsed {len(entries)} config entries")

    try:
        write_database(args.output, entries)
    except (sqlite3.Error, OSError) as e:
        err_console.print(f"Error writing database: {e}")
        return 1

    console.print(f"Database written to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

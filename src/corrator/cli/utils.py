"""Shared utilities for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from corrator.core.cache import EolCache
from corrator.utils.config import CorratorSettings, load_settings
from corrator.utils.errors import ConfigurationError

# Shared console instance for the report
console = Console()

# Diagnostics go to stderr, next to the log output
err_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def load_settings_or_exit(config_directory: Path | None) -> CorratorSettings:
    """Load settings, exiting with a message on configuration errors."""
    try:
        return load_settings(config_directory)
    except ConfigurationError as e:
        fail(e.message)


def cache_from_settings(settings: CorratorSettings) -> EolCache | None:
    """Build the EOL cache described by settings, or None if disabled."""
    if not settings.cache.enabled:
        return None
    return EolCache(settings.cache.directory)


def print_plain(text: str) -> None:
    """Print text without rich markup or highlighting."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)

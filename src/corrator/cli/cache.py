"""CLI commands for the EOL cache."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from corrator.cli.utils import cache_from_settings, console, fail, load_settings_or_exit

app = typer.Typer(help="Manage the end-of-life lookup cache.")

ConfigDirectoryOption = typer.Option(
    None,
    "--config-directory",
    "-c",
    help="Directory with the corrator settings file",
)


@app.command("clear")
def clear_cmd(config_directory: Optional[Path] = ConfigDirectoryOption) -> None:
    """Delete every cached end-of-life record."""
    settings = load_settings_or_exit(config_directory)
    cache = cache_from_settings(settings)
    if cache is None:
        fail("The EOL cache is disabled in the settings")

    cache.clear()
    console.print(f"Cleared EOL cache at {cache.cache_dir}")


@app.command("stats")
def stats_cmd(config_directory: Optional[Path] = ConfigDirectoryOption) -> None:
    """Show the size and location of the EOL cache."""
    settings = load_settings_or_exit(config_directory)
    cache = cache_from_settings(settings)
    if cache is None:
        fail("The EOL cache is disabled in the settings")

    stats = cache.get_stats()
    table = Table(title="EOL Cache", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Directory", stats["cache_dir"])
    table.add_row("Entries", str(stats["entries"]))
    table.add_row("Size (bytes)", str(stats["total_size_bytes"]))
    console.print(table)

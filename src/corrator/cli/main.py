"""Main CLI entry point for corrator."""

import typer
from rich.console import Console

from corrator.cli import cache, run

app = typer.Typer(
    name="corrator",
    help="Audit application versions and end-of-life status in container images.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="run")(run.run_cmd)
app.add_typer(cache.app, name="cache")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    corrator: audit the applications inside your container images.

    - [bold]run[/bold]: Query application versions and end-of-life status
    - [bold]cache[/bold]: Inspect or clear the end-of-life lookup cache
    """
    from corrator.utils.logging import configure_logging, log_level

    configure_logging(level=log_level(verbose, quiet))


@app.command()
def version() -> None:
    """Show the corrator version."""
    from corrator import __version__

    console.print(f"corrator version {__version__}")


if __name__ == "__main__":
    app()

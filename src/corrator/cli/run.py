"""CLI command for auditing containers."""

from pathlib import Path
from typing import List, Optional

import typer

from corrator.cli.utils import (
    cache_from_settings,
    err_console,
    fail,
    load_settings_or_exit,
    print_plain,
)
from corrator.core.eol import EolResolver
from corrator.core.orchestrator import Orchestrator
from corrator.models.options import FilterFunction, RunOptions
from corrator.renderers import OutputFormat, RenderContext, get_renderer
from corrator.runtime.docker import DockerRunner
from corrator.utils.config import load_inventory
from corrator.utils.errors import ConfigurationError


def run_cmd(
    config_directory: Optional[Path] = typer.Option(
        None,
        "--config-directory",
        "-c",
        help="Directory with containers and applications files",
    ),
    format: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (text, json, table)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    clean: bool = typer.Option(
        False,
        "--clean",
        help="Remove images after version queries",
    ),
    tags: Optional[List[str]] = typer.Option(
        None,
        "--tags",
        "-t",
        help="Only audit containers with these tags (repeatable)",
    ),
    filter_function: FilterFunction = typer.Option(
        FilterFunction.ALL,
        "--filter",
        help="Require any or all of the given tags",
    ),
    names: Optional[List[str]] = typer.Option(
        None,
        "--name",
        "-n",
        help="Only audit these containers (repeatable)",
    ),
    clear_cache: bool = typer.Option(
        False,
        "--clear-cache",
        help="Clear the EOL cache before running",
    ),
    no_eol: bool = typer.Option(
        False,
        "--no-eol",
        help="Skip end-of-life lookups",
    ),
) -> None:
    """
    Audit application versions in the configured containers.

    Starts each container, runs the version command of every configured
    application inside it and reports versions and end-of-life status.

    Example:
        corrator run --tags web --filter any --format table
    """
    settings = load_settings_or_exit(config_directory)

    try:
        inventory = load_inventory(config_directory)
    except ConfigurationError as e:
        fail(e.message)

    cache = cache_from_settings(settings)
    resolver = None
    if settings.eol.enabled and not no_eol:
        resolver = EolResolver(
            cache,
            base_url=settings.eol.base_url,
            timeout=settings.eol.timeout,
            max_retries=settings.eol.max_retries,
        )

    options = RunOptions(
        clean_after_query=clean,
        tags=tags or None,
        filter_function=filter_function,
        names=names or None,
        clear_cache=clear_cache or settings.cache.clear_before_run,
        max_workers=settings.runtime.max_workers,
    )

    try:
        output_format = format or OutputFormat(settings.output.default_format)
    except ValueError:
        fail(f"Unknown output format in settings: {settings.output.default_format}")

    orchestrator = Orchestrator(DockerRunner(pull=settings.runtime.pull), resolver=resolver, cache=cache)
    with err_console.status("Auditing containers..."):
        report = orchestrator.run(inventory.containers, inventory.applications, options)

    renderer = get_renderer(output_format)
    context = RenderContext(
        format=output_format,
        output_path=output,
        color=settings.output.color,
    )

    if output:
        renderer.render_to_file(report, context)
        err_console.print(f"Report written to {output}")
    elif output_format == OutputFormat.TABLE:
        renderer.render(report, context)
    else:
        print_plain(renderer.render(report, context))

    if any(status.error is not None for status in report):
        err_console.print("[yellow]Some containers could not be audited completely; see the log above.[/yellow]")

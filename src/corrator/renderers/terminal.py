"""Terminal table renderer for corrator reports."""

from __future__ import annotations

import io

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from corrator.models.container import ContainerStatus
from corrator.models.lifecycle import ALIVE
from corrator.renderers.base import BaseRenderer, OutputFormat, RenderContext


class TerminalRenderer(BaseRenderer):
    """Renderer for a rich table in the terminal.

    One row per container, followed by one row per application.

    Example:
        renderer = TerminalRenderer()
        renderer.render(report, RenderContext(format=OutputFormat.TABLE))
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the terminal renderer.

        Args:
            console: Rich console to use. Creates a new one if None.
        """
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TABLE

    def build_table(self, report: list[ContainerStatus], context: RenderContext) -> Table:
        """Build the rich table for a report."""
        table = Table(title="Containers", header_style="bold")
        table.add_column("Container", style="bold", min_width=20)
        table.add_column("App", min_width=20)
        table.add_column("Version", min_width=20)
        table.add_column("EOL", min_width=20)

        for status in report:
            note = ""
            if status.error is not None:
                message = escape(status.error.message)
                note = f"[red]{message}[/red]" if context.color else message
            table.add_row(escape(status.name), "", "", note)

            for name, version, eol_status in status.as_rows():
                table.add_row("", escape(name), escape(version), self._eol_cell(eol_status, context))

        return table

    def render(self, report: list[ContainerStatus], context: RenderContext) -> str:
        """Print the report table to the console.

        Returns:
            Empty string (output is printed to console)
        """
        self._console.print(self.build_table(report, context))
        return ""

    def render_to_file(self, report: list[ContainerStatus], context: RenderContext) -> None:
        """Render the table to a file as plain text.

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(self.build_table(report, context))
        context.output_path.write_text(buffer.getvalue(), encoding="utf-8")

    @staticmethod
    def _eol_cell(eol_status: str, context: RenderContext) -> str:
        eol_status = escape(eol_status)
        if not context.color or not eol_status:
            return eol_status
        style = "green" if eol_status == ALIVE else "yellow"
        return f"[{style}]{eol_status}[/{style}]"

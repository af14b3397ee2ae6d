"""Plain text renderer for corrator reports."""

from __future__ import annotations

from corrator.models.container import ContainerStatus
from corrator.renderers.base import BaseRenderer, OutputFormat, RenderContext


class TextRenderer(BaseRenderer):
    """Renderer for plain, pipe-friendly text output.

    Example output::

        ---Container: ubuntu-----------------------------
                bash           5.1.16     alive
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TEXT

    def render(self, report: list[ContainerStatus], context: RenderContext) -> str:
        """Render a report as text, one block per container."""
        return "\n".join(self.render_container(status, context) for status in report)

    @staticmethod
    def render_container(status: ContainerStatus, context: RenderContext) -> str:
        lines = [f"\n---Container: {status.name:-<35}"]

        for app in status.apps:
            eol_status = app.eol_status or ""
            lines.append(f"\t{app.name:<15}{app.version:<10} {eol_status}".rstrip())

        if context.include_errors and status.error is not None:
            lines.append(f"\terror: {status.error}")

        return "\n".join(lines)

"""Output renderers for corrator reports."""

from corrator.renderers.base import BaseRenderer, OutputFormat, RenderContext, Renderer
from corrator.renderers.json import JSONRenderer
from corrator.renderers.terminal import TerminalRenderer
from corrator.renderers.text import TextRenderer


def get_renderer(output_format: OutputFormat | str) -> BaseRenderer:
    """Get the renderer for an output format.

    Raises:
        ValueError: If the format is unknown
    """
    output_format = OutputFormat(output_format)
    if output_format == OutputFormat.JSON:
        return JSONRenderer()
    if output_format == OutputFormat.TABLE:
        return TerminalRenderer()
    return TextRenderer()


__all__ = [
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "TerminalRenderer",
    "TextRenderer",
    "get_renderer",
]

"""Base renderer protocol and types."""

from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from corrator.models.container import ContainerStatus


class OutputFormat(str, Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"
    TABLE = "table"


class RenderContext(BaseModel):
    """Context for rendering operations."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TEXT, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    color: bool = Field(default=True, description="Enable color output (table only)")
    indent: int | None = Field(default=None, description="JSON indentation")
    include_errors: bool = Field(default=False, description="Include container errors in output")


@runtime_checkable
class Renderer(Protocol):
    """Protocol for report renderers.

    Renderers turn the sorted list of container statuses produced by an
    audit run into text for a terminal, a file or another program.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, report: list[ContainerStatus], context: RenderContext) -> str:
        """Render a report to a string.

        Args:
            report: Container statuses sorted by name
            context: Rendering context with options

        Returns:
            Rendered string output
        """
        ...

    def render_to_file(self, report: list[ContainerStatus], context: RenderContext) -> None:
        """Render a report directly to a file.

        Raises:
            ValueError: If context.output_path is not set
        """
        ...


class BaseRenderer:
    """Base implementation with common functionality.

    Subclasses implement the format property and render method.
    """

    def render_to_file(self, report: list[ContainerStatus], context: RenderContext) -> None:
        """Render a report directly to a file.

        Args:
            report: Container statuses sorted by name
            context: Rendering context (must have output_path set)

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        content = self.render(report, context)
        context.output_path.write_text(content, encoding="utf-8")

    def render(self, report: list[ContainerStatus], context: RenderContext) -> str:
        """Render a report to a string. Must be implemented by subclasses."""
        raise NotImplementedError

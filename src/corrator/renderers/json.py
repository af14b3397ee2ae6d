"""JSON renderer for corrator reports."""

from __future__ import annotations

import json
from typing import Any

from corrator.models.container import ContainerStatus
from corrator.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    The report is a JSON array of container objects, each with ``name``
    and ``apps``; ``error`` is included only when requested.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.JSON

    def render(self, report: list[ContainerStatus], context: RenderContext) -> str:
        """Render a report to a JSON string."""
        return json.dumps(
            [self._to_dict(status, context) for status in report],
            indent=context.indent,
            ensure_ascii=False,
        )

    @staticmethod
    def _to_dict(status: ContainerStatus, context: RenderContext) -> dict[str, Any]:
        exclude = None if context.include_errors else {"error"}
        return status.model_dump(mode="json", exclude=exclude)

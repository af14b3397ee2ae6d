"""Base environment runner protocol."""

from __future__ import annotations

import re
import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvironmentRunner(Protocol):
    """Protocol for container runtimes that host ephemeral environments.

    A runner starts a named instance of an image, executes commands inside
    it and finally stops it. Implementations raise
    ``EnvironmentLifecycleError`` subclasses instead of exiting, so a
    failure is confined to the container being audited.

    Example:
        class MyRunner:
            def start(self, name: str, image: str) -> None:
                ...

            def execute(self, name: str, command: str) -> str:
                return "bash, version 5.1.16(1)-release"

            def stop(self, name: str, remove_image: bool = False) -> None:
                ...
    """

    def start(self, name: str, image: str) -> None:
        """Start an instance of image called name.

        Raises:
            EnvironmentStartError: If the instance could not be started
        """
        ...

    def execute(self, name: str, command: str) -> str:
        """Run command inside the instance and return its stdout.

        Raises:
            CommandExecutionError: If the command could not be run
        """
        ...

    def stop(self, name: str, remove_image: bool = False) -> None:
        """Stop and remove the instance, optionally removing its image.

        Raises:
            EnvironmentStopError: If the instance could not be removed
        """
        ...


_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def instance_name(container_name: str) -> str:
    """Build a unique runtime instance name for a configured container."""
    safe = _INVALID_NAME_CHARS.sub("-", container_name).strip("-.") or "container"
    return f"corrator-{safe}-{uuid.uuid4().hex[:8]}"

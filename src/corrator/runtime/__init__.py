"""Container runtimes hosting ephemeral audit environments."""

from corrator.runtime.base import EnvironmentRunner, instance_name
from corrator.runtime.docker import DockerRunner

__all__ = [
    "EnvironmentRunner",
    "instance_name",
    "DockerRunner",
]

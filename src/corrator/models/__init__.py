"""Data models for corrator."""

from corrator.models.lifecycle import (
    ALIVE,
    DateOrAlive,
    LifecycleRecord,
    eol_display,
    is_alive,
)
from corrator.models.application import (
    Application,
    ApplicationMap,
    ApplicationStatus,
    EolConfig,
)
from corrator.models.container import AuditError, Container, ContainerMap, ContainerStatus
from corrator.models.options import FilterFunction, RunOptions

__all__ = [
    # Lifecycle
    "ALIVE",
    "DateOrAlive",
    "LifecycleRecord",
    "eol_display",
    "is_alive",
    # Application
    "Application",
    "ApplicationMap",
    "ApplicationStatus",
    "EolConfig",
    # Container
    "AuditError",
    "Container",
    "ContainerMap",
    "ContainerStatus",
    # Options
    "FilterFunction",
    "RunOptions",
]

"""corrator: audit application versions across a fleet of container images.

For each configured container corrator starts an ephemeral instance, runs
the version command of every configured application inside it, extracts
the version with a regular expression and, optionally, looks up the
release cycle's end-of-life status on endoflife.date. Lookups with a
concrete end-of-life date are cached locally.

Usage:
    # Library API
    from corrator import EolCache, EolResolver, Orchestrator, DockerRunner, load_inventory

    inventory = load_inventory("~/.config/corrator")
    cache = EolCache()
    orchestrator = Orchestrator(DockerRunner(), EolResolver(cache), cache)
    report = orchestrator.run(inventory.containers, inventory.applications)

    for status in report:
        for app in status.apps:
            print(status.name, app.name, app.version, app.eol_status)

CLI:
    corrator run --config-directory ~/.config/corrator --format table
    corrator run --tags web --filter any --clean
    corrator cache clear
"""

__version__ = "0.1.0"

# Models
from corrator.models import (
    Application,
    ApplicationStatus,
    AuditError,
    Container,
    ContainerStatus,
    EolConfig,
    FilterFunction,
    LifecycleRecord,
    RunOptions,
    eol_display,
)

# Core
from corrator.core.extract import extract_version
from corrator.core.cache import EolCache
from corrator.core.eol import EolResolver
from corrator.core.worker import ContainerWorker
from corrator.core.orchestrator import Orchestrator, filter_containers, run

# Runtime
from corrator.runtime import DockerRunner, EnvironmentRunner

# Configuration
from corrator.utils.config import Inventory, load_inventory

# Renderers
from corrator.renderers import OutputFormat, RenderContext, get_renderer

__all__ = [
    # Version
    "__version__",
    # Models
    "Application",
    "ApplicationStatus",
    "AuditError",
    "Container",
    "ContainerStatus",
    "EolConfig",
    "FilterFunction",
    "LifecycleRecord",
    "RunOptions",
    "eol_display",
    # Core
    "extract_version",
    "EolCache",
    "EolResolver",
    "ContainerWorker",
    "Orchestrator",
    "filter_containers",
    "run",
    # Runtime
    "DockerRunner",
    "EnvironmentRunner",
    # Configuration
    "Inventory",
    "load_inventory",
    # Renderers
    "OutputFormat",
    "RenderContext",
    "get_renderer",
]

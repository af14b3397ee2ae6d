"""Concurrent audit of all configured containers."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from corrator.core.cache import EolCache
from corrator.core.eol import EolResolver
from corrator.core.worker import ContainerWorker
from corrator.models.application import ApplicationMap
from corrator.models.container import AuditError, Container, ContainerMap, ContainerStatus
from corrator.models.options import FilterFunction, RunOptions
from corrator.runtime.base import EnvironmentRunner
from corrator.utils.logging import get_logger

logger = get_logger("orchestrator")


def filter_containers(
    containers: ContainerMap,
    names: list[str] | None = None,
    tags: list[str] | None = None,
    filter_function: FilterFunction = FilterFunction.ALL,
) -> ContainerMap:
    """Select the containers to audit.

    Args:
        containers: All configured containers
        names: Exact container names to keep, or None for all
        tags: Requested tags, or None to skip tag filtering
        filter_function: Whether any or all requested tags must be present

    Returns:
        The matching containers
    """
    selected = dict(containers)

    if names is not None:
        wanted = set(names)
        selected = {k: v for k, v in selected.items() if k in wanted}

    if tags is not None:
        require_all = filter_function == FilterFunction.ALL
        selected = {k: v for k, v in selected.items() if v.matches_tags(tags, require_all)}

    return selected


class ResultCollector:
    """Thread-safe accumulator of finished container statuses."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: list[ContainerStatus] = []

    def add(self, status: ContainerStatus) -> None:
        with self._lock:
            self._results.append(status)

    def report(self) -> list[ContainerStatus]:
        """Return the collected statuses sorted by container name."""
        with self._lock:
            return sorted(self._results, key=lambda s: s.name)


class Orchestrator:
    """Runs one ContainerWorker per container and gathers a sorted report.

    Example:
        orchestrator = Orchestrator(DockerRunner(), EolResolver(EolCache()))
        report = orchestrator.run(containers, applications, RunOptions(tags=["web"]))
        for status in report:
            print(status.name, [app.version for app in status.apps])
    """

    def __init__(
        self,
        runner: EnvironmentRunner,
        resolver: EolResolver | None = None,
        cache: EolCache | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            runner: Runtime hosting the environments
            resolver: EOL resolver shared by all workers
            cache: EOL cache, cleared before the run if requested
        """
        self._runner = runner
        self._resolver = resolver
        self._cache = cache

    def run(
        self,
        containers: ContainerMap,
        applications: ApplicationMap,
        options: RunOptions | None = None,
    ) -> list[ContainerStatus]:
        """Audit every selected container concurrently.

        Args:
            containers: Configured containers
            applications: Configured applications
            options: Filters and run switches

        Returns:
            Container statuses sorted by container name
        """
        options = options or RunOptions()

        if options.clear_cache and self._cache is not None:
            self._cache.clear()

        selected = filter_containers(
            containers,
            names=options.names,
            tags=options.tags,
            filter_function=options.filter_function,
        )
        if not selected:
            logger.warning("No containers matched the configured filters")
            return []

        worker = ContainerWorker(
            self._runner,
            applications,
            resolver=self._resolver,
            clean_after_query=options.clean_after_query,
        )
        collector = ResultCollector()
        max_workers = options.max_workers or len(selected)

        def audit(name: str, container: Container) -> None:
            try:
                status = worker.process(name, container)
            except Exception as e:
                logger.error(f"Audit of {name} failed: {e}")
                status = ContainerStatus(
                    name=name,
                    error=AuditError(code="WORKER_ERROR", message=str(e)),
                )
            collector.add(status)

        logger.info(f"Auditing {len(selected)} container(s)")
        # Leaving the executor block joins every worker.
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="corrator") as executor:
            for name, container in selected.items():
                executor.submit(audit, name, container)

        return collector.report()


def run(
    containers: ContainerMap,
    applications: ApplicationMap,
    options: RunOptions | None = None,
    runner: EnvironmentRunner | None = None,
    resolver: EolResolver | None = None,
    cache: EolCache | None = None,
) -> list[ContainerStatus]:
    """Audit containers with a Docker runner unless another is given."""
    if runner is None:
        from corrator.runtime.docker import DockerRunner

        runner = DockerRunner()
    return Orchestrator(runner, resolver=resolver, cache=cache).run(containers, applications, options)

"""Per-container audit worker."""

from __future__ import annotations

from corrator.core.eol import EolResolver
from corrator.core.extract import extract_version
from corrator.models.application import Application, ApplicationMap, ApplicationStatus
from corrator.models.container import Container, ContainerStatus
from corrator.runtime.base import EnvironmentRunner, instance_name
from corrator.utils.errors import (
    CommandExecutionError,
    EnvironmentLifecycleError,
    EolError,
    ExtractionError,
)
from corrator.utils.logging import ContextAdapter, get_logger_with_context


class ContainerWorker:
    """Audits the applications of a single container.

    The worker starts one environment for the container, queries each
    configured application in name order and always stops the environment
    again. Failures of a single application are logged and skipped; a
    failure to start the environment ends this container's audit only.

    Example:
        worker = ContainerWorker(DockerRunner(), applications, resolver)
        status = worker.process("ubuntu", containers["ubuntu"])
    """

    def __init__(
        self,
        runner: EnvironmentRunner,
        applications: ApplicationMap,
        resolver: EolResolver | None = None,
        clean_after_query: bool = False,
    ) -> None:
        """Initialize the worker.

        Args:
            runner: Runtime hosting the environments
            applications: Application definitions shared by all containers
            resolver: EOL resolver; EOL lookups are skipped if None
            clean_after_query: Remove the image after the audit
        """
        self._runner = runner
        self._applications = applications
        self._resolver = resolver
        self._clean_after_query = clean_after_query

    def process(self, name: str, container: Container) -> ContainerStatus:
        """Audit one container.

        Args:
            name: Configured container name
            container: Container definition

        Returns:
            The container's status with one entry per successfully
            queried application, sorted by application name
        """
        log = get_logger_with_context("worker", container=name)
        status = ContainerStatus(name=name)
        instance = instance_name(name)

        try:
            self._runner.start(instance, container.image)
        except EnvironmentLifecycleError as e:
            log.error(f"Unable to start {container.image}: {e.message}")
            status.error = e.to_audit_error()
            self._release(instance, status, log)
            return status

        try:
            for app_name in sorted(container.apps):
                app_status = self._query(instance, name, app_name, log)
                if app_status is not None:
                    status.apps.append(app_status)
        finally:
            self._release(instance, status, log)

        return status

    def _release(self, instance: str, status: ContainerStatus, log: ContextAdapter) -> None:
        try:
            self._runner.stop(instance, self._clean_after_query)
        except EnvironmentLifecycleError as e:
            log.error(f"Unable to clean up {instance}: {e.message}")
            if status.error is None:
                status.error = e.to_audit_error()

    def _query(self, instance: str, name: str, app_name: str, log: ContextAdapter) -> ApplicationStatus | None:
        """Query one application, returning None if it must be skipped."""
        log = log.bind(app=app_name)
        app = self._applications.get(app_name)
        if app is None:
            log.warning(f"Config error for {app_name} on {name}: App is not defined")
            log.warning(f"-- hint: If you're sure you have a config for {app_name}, look for typos.")
            return None

        try:
            output = self._runner.execute(instance, app.version_command)
        except CommandExecutionError as e:
            log.error(f"Error running version command for {app_name} on {name}: {e.message}")
            log.error(f"-- hint: Your version command was: {app.version_command}")
            return None

        try:
            version = extract_version(app.version_pattern, output)
        except ExtractionError:
            log.warning(f"Error querying app version for {app_name} on {name}")
            log.warning(f"-- hint: Your version command was: {app.version_command}")
            log.warning(f"         Your regex query was: {app.version_pattern.pattern}")
            log.warning(f"         Your regex input was: {output}")
            return None

        return ApplicationStatus(
            name=app_name,
            version=version,
            eol_status=self._eol_status(app, app_name, version, log),
        )

    def _eol_status(self, app: Application, app_name: str, version: str, log: ContextAdapter) -> str | None:
        if app.eol is None or self._resolver is None:
            return None

        try:
            return self._resolver.resolve(app.eol, version).status
        except EolError as e:
            log.warning(f"Unable to resolve EOL status for {app_name} {version}: {e.message}")
            return None

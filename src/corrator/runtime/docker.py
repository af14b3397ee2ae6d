"""Docker environment runner implementation."""

from __future__ import annotations

import threading
from typing import Any

import docker
from docker.errors import DockerException, ImageNotFound, NotFound

from corrator.utils.errors import (
    CommandExecutionError,
    EnvironmentLifecycleError,
    EnvironmentStartError,
    EnvironmentStopError,
)
from corrator.utils.logging import get_logger

logger = get_logger("runtime.docker")


class DockerRunner:
    """Environment runner for the local Docker daemon.

    Each environment is a detached container running ``bash`` with the
    image's entrypoint reset, kept alive with a tty so commands can be
    executed in it one after another.

    Example:
        runner = DockerRunner()
        runner.start("corrator-ubuntu", "ubuntu:22.04")
        print(runner.execute("corrator-ubuntu", "bash --version"))
        runner.stop("corrator-ubuntu", remove_image=True)
    """

    def __init__(self, pull: bool = True, client: Any = None) -> None:
        """Initialize the Docker runner.

        Args:
            pull: Always pull the image before starting it
            client: Docker client to use. Connects from the environment if None.
        """
        self._pull = pull
        self._client: Any = client
        self._client_lock = threading.Lock()
        self._images: dict[str, str] = {}

    @property
    def client(self) -> Any:
        """Get the Docker client, creating it if necessary."""
        with self._client_lock:
            if self._client is None:
                try:
                    self._client = docker.from_env()
                except DockerException as e:
                    raise EnvironmentLifecycleError(
                        f"Failed to connect to Docker daemon: {e}",
                        code="CONNECTION_ERROR",
                    ) from e
        return self._client

    def start(self, name: str, image: str) -> None:
        """Pull image and start a detached instance of it.

        Raises:
            EnvironmentStartError: If the image cannot be pulled or run
        """
        try:
            if self._pull:
                logger.debug(f"Pulling {image}")
                self.client.images.pull(image)

            self._images[name] = image
            self.client.containers.run(
                image,
                command="bash",
                entrypoint=[""],
                name=name,
                detach=True,
                tty=True,
                stdin_open=True,
            )
        except EnvironmentLifecycleError as e:
            raise EnvironmentStartError(image, e.message) from e
        except DockerException as e:
            raise EnvironmentStartError(image, str(e)) from e

        logger.debug(f"Started {name} from {image}")

    def execute(self, name: str, command: str) -> str:
        """Run a command in a running instance and return its stdout.

        The command is split on single spaces; no shell is involved.

        Raises:
            CommandExecutionError: If the instance is missing or the
                daemon rejects the command
        """
        try:
            container = self.client.containers.get(name)
            exit_code, output = container.exec_run(command.split(" "), stdout=True, stderr=False)
        except EnvironmentLifecycleError as e:
            raise CommandExecutionError(name, command, e.message) from e
        except DockerException as e:
            raise CommandExecutionError(name, command, str(e)) from e

        if exit_code:
            logger.debug(f"'{command}' exited with {exit_code} in {name}")

        if output is None:
            return ""
        return output.decode("utf-8", errors="replace")

    def stop(self, name: str, remove_image: bool = False) -> None:
        """Force-remove the instance, and its image if requested.

        Raises:
            EnvironmentStopError: If the instance cannot be removed
        """
        image = self._images.pop(name, None)
        try:
            self.client.containers.get(name).remove(force=True)
        except NotFound:
            logger.debug(f"{name} was already removed")
        except EnvironmentLifecycleError as e:
            raise EnvironmentStopError(name, e.message) from e
        except DockerException as e:
            raise EnvironmentStopError(name, str(e)) from e
        finally:
            if remove_image and image:
                self._remove_image(image)

    def _remove_image(self, image: str) -> None:
        try:
            self.client.images.remove(image, force=True)
            logger.debug(f"Removed image {image}")
        except ImageNotFound:
            logger.debug(f"Image {image} was already removed")
        except EnvironmentLifecycleError as e:
            logger.warning(f"Unable to remove image {image}: {e.message}")
        except DockerException as e:
            logger.warning(f"Unable to remove image {image}: {e}")

"""Shared test fixtures for corrator tests."""

import threading
import time
from typing import Any

import httpx
import pytest

from corrator.core.cache import EolCache
from corrator.core.eol import EolResolver
from corrator.models.application import Application, EolConfig
from corrator.models.container import Container
from corrator.utils.errors import CommandExecutionError, EnvironmentStartError, EnvironmentStopError

BASH_OUTPUT = "GNU bash, version 5.1.16(1)-release (x86_64-pc-linux-gnu)"
PYTHON_OUTPUT = "Python 3.11.4"
UBUNTU_OUTPUT = 'PRETTY_NAME="Ubuntu 22.04.3 LTS"'


class FakeRunner:
    """In-memory environment runner.

    Maps image references to ``{command: output}``. Commands unknown for an
    image return an empty string.
    """

    def __init__(
        self,
        outputs: dict[str, dict[str, str]] | None = None,
        delays: dict[str, float] | None = None,
        fail_start: set[str] | None = None,
        fail_stop: set[str] | None = None,
        fail_commands: set[str] | None = None,
    ) -> None:
        self.outputs = outputs or {}
        self.delays = delays or {}
        self.fail_start = fail_start or set()
        self.fail_stop = fail_stop or set()
        self.fail_commands = fail_commands or set()
        self.images: dict[str, str] = {}
        self.started: list[str] = []
        self.stopped: list[tuple[str, bool]] = []
        self.executed: list[tuple[str, str]] = []
        self.completion_order: list[str] = []
        self._lock = threading.Lock()

    def start(self, name: str, image: str) -> None:
        with self._lock:
            self.started.append(image)
            self.images[name] = image
        if image in self.fail_start:
            raise EnvironmentStartError(image, "pull access denied")

    def execute(self, name: str, command: str) -> str:
        image = self.images[name]
        with self._lock:
            self.executed.append((image, command))
        if command in self.fail_commands:
            raise CommandExecutionError(name, command, "exec failed")
        return self.outputs.get(image, {}).get(command, "")

    def stop(self, name: str, remove_image: bool = False) -> None:
        image = self.images[name]
        time.sleep(self.delays.get(image, 0))
        with self._lock:
            self.stopped.append((image, remove_image))
            self.completion_order.append(image)
        if image in self.fail_stop:
            raise EnvironmentStopError(name, "device busy")


class LifecycleService:
    """Fake endoflife.date backed by httpx.MockTransport."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses or {}
        self.requests: list[str] = []
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        with self._lock:
            self.requests.append(path)
        if path not in self.responses:
            return httpx.Response(404, json={"error": "not found"})
        body = self.responses[path]
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


def cycle(eol: Any, **extra: Any) -> dict[str, Any]:
    """Build a lifecycle service payload."""
    payload = {
        "eol": eol,
        "support": "2025-06-01",
        "latest": "22.04.4",
        "latestReleaseDate": "2024-02-22",
        "releaseDate": "2022-04-21",
        "lts": True,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def applications() -> dict[str, Application]:
    """Application definitions used across tests."""
    return {
        "bash": Application(
            version_command="bash --version",
            version_pattern=r"version (?P<version>[0-9]+\.[0-9]+\.[0-9]+)",
        ),
        "python": Application(
            version_command="python3 --version",
            version_pattern=r"Python (?P<version>[0-9.]+)",
            eol=EolConfig(product_name="python", version_pattern=r"^[0-9]+\.[0-9]+"),
        ),
        "ubuntu": Application(
            version_command="cat /etc/os-release",
            version_pattern=r"Ubuntu (?P<version>[0-9.]+)",
            eol=EolConfig(product_name="ubuntu", version_pattern=r"(?P<version>[0-9]+\.[0-9]+)"),
        ),
    }


@pytest.fixture
def containers() -> dict[str, Container]:
    """Container definitions used across tests."""
    return {
        "web": Container(image="ubuntu:22.04", apps=["ubuntu", "bash"], tags=["x", "y"]),
        "worker": Container(image="python:3.11", apps=["python", "bash"], tags=["x"]),
        "db": Container(image="postgres:16", apps=["bash"]),
    }


@pytest.fixture
def outputs() -> dict[str, dict[str, str]]:
    """Command outputs per image."""
    return {
        "ubuntu:22.04": {
            "bash --version": BASH_OUTPUT,
            "cat /etc/os-release": UBUNTU_OUTPUT,
        },
        "python:3.11": {
            "bash --version": BASH_OUTPUT,
            "python3 --version": PYTHON_OUTPUT,
        },
        "postgres:16": {
            "bash --version": "GNU bash, version 5.2.15(1)-release",
        },
    }


@pytest.fixture
def runner(outputs) -> FakeRunner:
    """Fake runner for the default outputs."""
    return FakeRunner(outputs)


@pytest.fixture
def cache(tmp_path) -> EolCache:
    """EOL cache in a temporary directory."""
    return EolCache(cache_dir=tmp_path / "eol-cache")


@pytest.fixture
def service() -> LifecycleService:
    """Fake lifecycle service with an EOL-dated ubuntu and an alive python."""
    return LifecycleService(
        {
            "/api/ubuntu/22.04.json": cycle("2027-04-01"),
            "/api/python/3.11.json": cycle(False, lts=False),
        }
    )


@pytest.fixture
def resolver(cache, service) -> EolResolver:
    """Resolver wired to the fake service and temporary cache."""
    return EolResolver(cache, client=service.client())

"""Configuration file support for corrator.

A configuration directory holds the audit inventory and optional settings:

    ~/.config/corrator/
        containers.toml     # or containers.yaml
        applications.toml   # or applications.yaml
        settings.yaml       # optional
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from corrator.models.application import Application, ApplicationMap
from corrator.models.container import Container, ContainerMap
from corrator.utils.errors import ConfigurationError

CONFIG_DIR_ENV = "CORRATOR_CONFIG_DIR"
INVENTORY_SUFFIXES = (".toml", ".yaml", ".yml")
SETTINGS_FILES = ("settings.yaml", "settings.yml")


class CacheConfig(BaseModel):
    """EOL cache configuration."""

    enabled: bool = Field(default=True, description="Enable the EOL cache")
    directory: str | None = Field(default=None, description="Cache directory")
    clear_before_run: bool = Field(default=False, description="Clear the cache before each run")


class EolServiceConfig(BaseModel):
    """Lifecycle service configuration."""

    enabled: bool = Field(default=True, description="Resolve EOL status")
    base_url: str = Field(default="https://endoflife.date", description="Service base URL")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Connection retries")


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="text", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")


class RuntimeConfig(BaseModel):
    """Container runtime configuration."""

    pull: bool = Field(default=True, description="Always pull images before auditing")
    max_workers: int | None = Field(default=None, description="Cap on concurrent containers")


class CorratorSettings(BaseModel):
    """Settings for corrator."""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    eol: EolServiceConfig = Field(default_factory=EolServiceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)


class Inventory(BaseModel):
    """The containers and applications to audit."""

    containers: ContainerMap = Field(default_factory=dict)
    applications: ApplicationMap = Field(default_factory=dict)


def default_config_dir() -> Path:
    """Get the default configuration directory.

    ``CORRATOR_CONFIG_DIR`` wins over the XDG config home.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / "corrator"


def _read_mapping(path: Path) -> dict[str, Any]:
    """Read a TOML or YAML file into a mapping."""
    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigurationError(f"Could not read config file: {e}", path=str(path))

    try:
        if path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}", path=str(path))

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", path=str(path))
    return data


def _find(config_dir: Path, stem: str) -> Path:
    for suffix in INVENTORY_SUFFIXES:
        path = config_dir / f"{stem}{suffix}"
        if path.exists():
            return path
    raise ConfigurationError(
        f"No {stem} file found in {config_dir} (expected {stem}.toml or {stem}.yaml)",
        path=str(config_dir),
    )


def load_containers(path: Path | str) -> ContainerMap:
    """Load container definitions from a file.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    path = Path(path)
    data = _read_mapping(path)
    try:
        return {name: Container.model_validate(entry) for name, entry in data.items()}
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid container definition in {path}: {e}", path=str(path))


def load_applications(path: Path | str) -> ApplicationMap:
    """Load application definitions from a file.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    path = Path(path)
    data = _read_mapping(path)
    try:
        return {name: Application.model_validate(entry) for name, entry in data.items()}
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid application definition in {path}: {e}", path=str(path))


def load_inventory(config_dir: Path | str | None = None) -> Inventory:
    """Load containers and applications from a configuration directory.

    Args:
        config_dir: Directory to read. Defaults to default_config_dir().

    Returns:
        The loaded inventory
    """
    config_dir = Path(config_dir).expanduser() if config_dir is not None else default_config_dir()
    if not config_dir.is_dir():
        raise ConfigurationError(f"Config directory not found: {config_dir}", path=str(config_dir))

    return Inventory(
        containers=load_containers(_find(config_dir, "containers")),
        applications=load_applications(_find(config_dir, "applications")),
    )


def load_settings(config_dir: Path | str | None = None) -> CorratorSettings:
    """Load settings from the configuration directory.

    Returns the default settings if no settings file exists.
    """
    config_dir = Path(config_dir).expanduser() if config_dir is not None else default_config_dir()

    for name in SETTINGS_FILES:
        path = config_dir / name
        if path.exists():
            try:
                return CorratorSettings.model_validate(_read_mapping(path))
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid settings in {path}: {e}", path=str(path))

    return CorratorSettings()


def save_settings(settings: CorratorSettings, config_dir: Path | str | None = None) -> Path:
    """Save settings to the configuration directory.

    Returns:
        Path where settings were saved
    """
    config_dir = Path(config_dir).expanduser() if config_dir is not None else default_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    path = config_dir / SETTINGS_FILES[0]
    data = settings.model_dump(mode="json", exclude_defaults=True)
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
    return path

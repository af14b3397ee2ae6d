"""Utility functions for corrator."""

from corrator.utils.logging import (
    ContextAdapter,
    configure_logging,
    get_logger,
    get_logger_with_context,
    log_level,
)
from corrator.utils.errors import (
    CorratorError,
    ValidationError,
    ConfigurationError,
    ExtractionError,
    EolError,
    VersionNormalizationError,
    LookupFailedError,
    LookupNetworkError,
    LookupParseError,
    EnvironmentLifecycleError,
    EnvironmentStartError,
    EnvironmentStopError,
    CommandExecutionError,
    validate_image_reference,
)
from corrator.utils.config import (
    CorratorSettings,
    CacheConfig,
    EolServiceConfig,
    OutputConfig,
    RuntimeConfig,
    Inventory,
    default_config_dir,
    load_applications,
    load_containers,
    load_inventory,
    load_settings,
    save_settings,
)

__all__ = [
    # Logging
    "ContextAdapter",
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    "log_level",
    # Errors
    "CorratorError",
    "ValidationError",
    "ConfigurationError",
    "ExtractionError",
    "EolError",
    "VersionNormalizationError",
    "LookupFailedError",
    "LookupNetworkError",
    "LookupParseError",
    "EnvironmentLifecycleError",
    "EnvironmentStartError",
    "EnvironmentStopError",
    "CommandExecutionError",
    "validate_image_reference",
    # Config
    "CorratorSettings",
    "CacheConfig",
    "EolServiceConfig",
    "OutputConfig",
    "RuntimeConfig",
    "Inventory",
    "default_config_dir",
    "load_applications",
    "load_containers",
    "load_inventory",
    "load_settings",
    "save_settings",
]

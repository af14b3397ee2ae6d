"""Error types for corrator."""

from __future__ import annotations

from typing import Any

from corrator.models.container import AuditError

NORMALIZATION_HINT = (
    "the version token may need additional normalisation; "
    "check the eol version_regex for this application"
)


class CorratorError(Exception):
    """Base exception for corrator."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_audit_error(self) -> AuditError:
        """Convert to AuditError model."""
        return AuditError(code=self.code, message=self.message, details=self.details)


class ValidationError(CorratorError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(CorratorError):
    """Configuration error."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ExtractionError(CorratorError):
    """A version pattern did not match the command output."""

    def __init__(self, pattern: str, text: str):
        super().__init__(
            "Could not capture version from input",
            code="NO_MATCH",
            details={"pattern": pattern, "input": text},
        )
        self.pattern = pattern
        self.text = text


class EolError(CorratorError):
    """Base class for end-of-life resolution failures."""


class VersionNormalizationError(EolError):
    """The EOL version pattern did not match the extracted version."""

    def __init__(self, product: str, version: str, pattern: str):
        super().__init__(
            f"Could not normalise version {version!r} for {product}",
            code="VERSION_NORMALIZATION_FAILED",
            details={"product": product, "version": version, "pattern": pattern},
        )


class LookupFailedError(EolError):
    """The lifecycle service answered with a non-success status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Lifecycle lookup failed with HTTP {status_code}: {url}",
            code="LOOKUP_FAILED",
            details={"url": url, "status_code": status_code, "hint": NORMALIZATION_HINT},
        )
        self.url = url
        self.status_code = status_code


class LookupNetworkError(EolError):
    """The lifecycle service could not be reached."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Lifecycle lookup request failed: {reason}",
            code="NETWORK_ERROR",
            details={"url": url},
        )
        self.url = url


class LookupParseError(EolError):
    """The lifecycle service returned a body that is not a valid cycle."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Invalid lifecycle response from {url}: {reason}",
            code="LOOKUP_PARSE_ERROR",
            details={"url": url},
        )
        self.url = url


class EnvironmentLifecycleError(CorratorError):
    """Base class for container runtime failures."""


class EnvironmentStartError(EnvironmentLifecycleError):
    """An ephemeral environment could not be started."""

    def __init__(self, image: str, reason: str):
        super().__init__(
            f"Unable to start container from {image}: {reason}",
            code="ENVIRONMENT_START_ERROR",
            details={"image": image},
        )


class EnvironmentStopError(EnvironmentLifecycleError):
    """An ephemeral environment could not be stopped or removed."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            f"Unable to clean up container {name}: {reason}",
            code="ENVIRONMENT_STOP_ERROR",
            details={"name": name},
        )


class CommandExecutionError(EnvironmentLifecycleError):
    """A command could not be executed inside an environment."""

    def __init__(self, name: str, command: str, reason: str):
        super().__init__(
            f"Unable to run {command!r} in {name}: {reason}",
            code="COMMAND_EXECUTION_ERROR",
            details={"name": name, "command": command},
        )
        self.command = command


_REFERENCE_INVALID_CHARS = set("<>|\"'\\ \t\n")


def validate_image_reference(reference: str) -> None:
    """Validate an image reference string.

    Args:
        reference: Image reference to validate

    Raises:
        ValidationError: If reference is invalid
    """
    if not reference:
        raise ValidationError("Image reference cannot be empty", field="reference")

    if reference.startswith("-"):
        raise ValidationError("Image reference cannot start with '-'", field="reference")

    for char in sorted(_REFERENCE_INVALID_CHARS):
        if char in reference:
            raise ValidationError(
                f"Image reference contains invalid character: {char!r}",
                field="reference",
            )

    parts = reference.split("/")
    if len(parts) > 10:
        raise ValidationError("Image reference has too many path components", field="reference")

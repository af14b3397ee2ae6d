"""Application configuration and status models."""

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EolConfig(BaseModel):
    """How to look up an application's end-of-life status.

    The version pattern is applied to the already extracted version to
    obtain the release cycle token the lifecycle service knows about,
    e.g. ``22.04`` from ``22.04.3``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_name: str = Field(description="Product name on the lifecycle service")
    version_pattern: re.Pattern[str] = Field(
        validation_alias=AliasChoices("version_pattern", "version_regex"),
        description="Pattern selecting the release cycle from a version",
    )


class Application(BaseModel):
    """An application whose version is queried inside containers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version_command: str = Field(description="Command printing the version, e.g. 'bash --version'")
    version_pattern: re.Pattern[str] = Field(
        validation_alias=AliasChoices("version_pattern", "version_regex"),
        description="Pattern with a named group 'version'",
    )
    eol: EolConfig | None = Field(default=None, description="Optional end-of-life lookup")

    @field_validator("version_pattern")
    @classmethod
    def _require_version_group(cls, value: re.Pattern[str]) -> re.Pattern[str]:
        if "version" not in value.groupindex:
            raise ValueError(f"pattern {value.pattern!r} must define a named group 'version'")
        return value


class ApplicationStatus(BaseModel):
    """The version found for one application in one container."""

    model_config = {"frozen": True}

    name: str = Field(description="Application name")
    version: str = Field(description="Extracted version")
    eol_status: str | None = Field(
        default=None,
        description="End-of-life date, 'alive', or None when not resolved",
    )

    def as_row(self) -> list[str]:
        """Cells for tabular output."""
        return [self.name, self.version, self.eol_status or ""]


ApplicationMap = dict[str, Application]

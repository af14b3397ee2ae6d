"""Container configuration and status models."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from corrator.models.application import ApplicationStatus


class AuditError(BaseModel):
    """Why a container could not be audited completely.

    Built from a CorratorError through ``to_audit_error()`` so the code and
    details survive into the report.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Error code, e.g. ENVIRONMENT_START_ERROR")
    message: str = Field(description="Human-readable description")
    details: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class Container(BaseModel):
    """A container image to audit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image: str = Field(
        validation_alias=AliasChoices("image", "path"),
        description="Image reference, e.g. 'ubuntu:22.04'",
    )
    apps: list[str] = Field(default_factory=list, description="Names of applications to query")
    tags: list[str] | None = Field(default=None, description="Tags used for filtering")

    @field_validator("image")
    @classmethod
    def _validate_image(cls, value: str) -> str:
        from corrator.utils.errors import ValidationError, validate_image_reference

        try:
            validate_image_reference(value)
        except ValidationError as e:
            raise ValueError(e.message) from e
        return value

    def matches_tags(self, tags: list[str], require_all: bool) -> bool:
        """Check this container's tags against a requested tag set.

        A container without tags never matches.
        """
        if not self.tags:
            return False
        if require_all:
            return all(tag in self.tags for tag in tags)
        return any(tag in tags for tag in self.tags)


class ContainerStatus(BaseModel):
    """Audit results for one container."""

    name: str = Field(description="Container name")
    apps: list[ApplicationStatus] = Field(default_factory=list, description="Per-application results")
    error: AuditError | None = Field(
        default=None,
        description="Set when the container could not be audited completely",
    )

    def as_rows(self) -> list[list[str]]:
        """Cells for tabular output, one row per application."""
        return [app.as_row() for app in self.apps]


ContainerMap = dict[str, Container]

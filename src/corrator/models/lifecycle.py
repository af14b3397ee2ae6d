"""End-of-life lifecycle data models."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Either a concrete end-of-life date or the service's boolean sentinel
# meaning no date has been assigned yet.
DateOrAlive = date | bool

ALIVE = "alive"


def is_alive(value: DateOrAlive) -> bool:
    """Return True if value is the boolean "no date assigned" sentinel."""
    return isinstance(value, bool)


def eol_display(value: DateOrAlive) -> str:
    """Render a DateOrAlive value for display."""
    if isinstance(value, bool):
        return ALIVE
    return value.isoformat()


class LifecycleRecord(BaseModel):
    """Lifecycle metadata for one product release cycle.

    Parsed from the lifecycle service's camelCase payload; stored in the
    cache using the Python field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    eol: DateOrAlive = Field(default=False, description="End-of-life date or alive sentinel")
    support: DateOrAlive | None = Field(default=None, description="End of active support")
    latest: str = Field(default="", description="Latest release in this cycle")
    latest_release_date: str = Field(default="", alias="latestReleaseDate")
    release_date: str = Field(default="", alias="releaseDate")
    is_lts: bool = Field(default=False, alias="lts")

    @field_validator("latest", "latest_release_date", "release_date", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("is_lts", mode="before")
    @classmethod
    def _coerce_lts(cls, value: Any) -> bool:
        # The service reports lts as a boolean or as the date LTS began.
        return bool(value)

    @property
    def alive(self) -> bool:
        """Whether no end-of-life date has been assigned yet."""
        return is_alive(self.eol)

    @property
    def status(self) -> str:
        """Display string for the EOL column of a report."""
        return eol_display(self.eol)

    def to_cache(self) -> dict[str, Any]:
        """Serialize using field names for the local cache."""
        return self.model_dump(mode="json", by_alias=False)

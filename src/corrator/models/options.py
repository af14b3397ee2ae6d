"""Run option models."""

from enum import Enum

from pydantic import BaseModel, Field


class FilterFunction(str, Enum):
    """How a tag filter combines requested tags."""

    ANY = "any"
    ALL = "all"


class RunOptions(BaseModel):
    """Options controlling a single audit run."""

    model_config = {"frozen": True}

    clean_after_query: bool = Field(
        default=False,
        description="Remove images after their versions have been queried",
    )
    tags: list[str] | None = Field(default=None, description="Only audit containers with these tags")
    filter_function: FilterFunction = Field(
        default=FilterFunction.ALL,
        description="Whether a container needs any or all of the requested tags",
    )
    names: list[str] | None = Field(default=None, description="Only audit these containers")
    clear_cache: bool = Field(default=False, description="Clear the EOL cache before running")
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Cap on concurrently audited containers (default: one per container)",
    )

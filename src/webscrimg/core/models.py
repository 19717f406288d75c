# ABOUTME: Result models returned by the extraction service
# ABOUTME: Per-source success/failure outcomes, pagination metadata and the fan-out report

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class ImageResult(BaseModel):
    """One accepted image, numbered within its page."""

    id: int = Field(ge=1, description="1-based position within the returned page")
    url: str = Field(description="Absolute http(s) URL of the full image")
    thumbnail: str = Field(description="Thumbnail URL; equals url when the source has no thumbnail")
    title: str | None = Field(default=None, description="Caption or alt text when available")
    width: int | None = Field(default=None, description="Declared width in pixels")
    height: int | None = Field(default=None, description="Declared height in pixels")
    source: str = Field(description="Id of the source that produced the image")


class PaginationInfo(BaseModel):
    """Window metadata; serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int = Field(ge=1)
    has_next_page: bool
    next_page: int
    total: int = Field(ge=0, description="Unique accepted images before slicing")


class EngineResult(BaseModel):
    """Successful extraction from a single source."""

    status: Literal["success"] = "success"
    engine: str
    url: str = Field(description="The search URL that was fetched")
    images: list[ImageResult] = Field(default_factory=list)
    pagination: PaginationInfo


class EngineFailure(BaseModel):
    """A source that could not be fetched or parsed."""

    status: Literal["failure"] = "failure"
    engine: str
    error: str


Outcome = Annotated[EngineResult | EngineFailure, Field(discriminator="status")]


class FanOutReport(BaseModel):
    """Outcomes of one query across many sources, in completion order."""

    query: str
    engines: list[str] = Field(description="Source ids that were requested")
    results: list[Outcome] = Field(default_factory=list)

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.results if isinstance(outcome, EngineResult))

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.results if isinstance(outcome, EngineFailure))

    @computed_field
    @property
    def total_images(self) -> int:
        return sum(len(outcome.images) for outcome in self.results if isinstance(outcome, EngineResult))

    def successes(self) -> list[EngineResult]:
        return [outcome for outcome in self.results if isinstance(outcome, EngineResult)]

    def failures(self) -> list[EngineFailure]:
        return [outcome for outcome in self.results if isinstance(outcome, EngineFailure)]

# ABOUTME: Strategy protocol, raw candidate model and error taxonomy for image extraction
# ABOUTME: Every source family implements ExtractionStrategy; failures derive from ExtractionError

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from .document import Document


class ExtractionError(Exception):
    """Base class for failures while extracting images from a source."""

    pass


class InvalidSourceError(ExtractionError):
    """Raised when a source id is not present in the registry."""

    def __init__(self, source_id: str):
        super().__init__(f"Unknown source: {source_id}")
        self.source_id = source_id


class FetchError(ExtractionError):
    """Raised when a source document could not be fetched."""

    pass


class FetchStatusError(FetchError):
    """Raised when a source answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """Raised when a source does not answer within the request timeout."""

    pass


class FetchConnectionError(FetchError):
    """Raised when the connection to a source fails."""

    pass


class DocumentParseError(ExtractionError):
    """Raised when a document body (or an embedded blob) is not valid JSON."""

    pass


class ElementMetadata(BaseModel):
    """Attributes of the element a candidate was found on."""

    model_config = ConfigDict(frozen=True)

    css_class: str | None = None
    alt: str | None = None
    role: str | None = None


class RawCandidate(BaseModel):
    """An unresolved image URL as found in a document, before filtering."""

    url: str
    thumbnail: str | None = None
    title: str | None = None
    width: int | None = None
    height: int | None = None
    metadata: ElementMetadata | None = None
    # Set when the engine itself serves the URL as a result (Google encrypted thumbnails)
    known_result: bool = False


class ExtractionStrategy(Protocol):
    """Protocol for pulling candidate images out of a parsed document.

    Implementations yield lazily, in document (or array) order, and stop once
    ``budget`` candidates were produced.
    """

    name: str

    def extract(self, document: "Document", budget: int) -> Iterator[RawCandidate]:
        """Yield raw candidates found in the document.

        Args:
            document: The fetched document and the URL it came from
            budget: Maximum number of candidates to produce

        Returns:
            A finite, non-restartable iterator of candidates
        """
        ...

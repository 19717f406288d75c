# ABOUTME: Per-source pipeline turning a fetched document into a page of ImageResults
# ABOUTME: Strategy extraction → tracking-pixel/URL/chrome filtering → de-duplication → pagination

from collections.abc import Iterable, Iterator
from itertools import islice

from webscrimg.extraction.base import RawCandidate
from webscrimg.extraction.classifier import ImageClassifier
from webscrimg.extraction.document import Document
from webscrimg.extraction.strategies import get_strategy
from webscrimg.extraction.urls import normalize_url
from webscrimg.utils.logging import get_logger, log_extraction_step

from .models import EngineResult, ImageResult, PaginationInfo
from .pagination import coerce_positive, dedupe, paginate
from .registry import SourceDescriptor

logger = get_logger(__name__)


class ImagePipeline:
    """Deterministic processing of one source document.

    The same document, source, page and limit always produce the same result.
    """

    def __init__(self, classifier: ImageClassifier | None = None, candidate_multiplier: int = 3):
        self.classifier = classifier or ImageClassifier()
        self.candidate_multiplier = max(1, candidate_multiplier)

    def candidate_budget(self, page: int, limit: int) -> int:
        """How many raw candidates a strategy may produce for this window."""
        return self.candidate_multiplier * page * limit

    def accept(self, candidates: Iterable[RawCandidate], base_url: str) -> Iterator[RawCandidate]:
        """Drop pixels, unresolvable URLs and chrome; yield candidates with absolute URLs.

        Candidates flagged ``known_result`` only get the narrow result-chrome check.
        """
        for candidate in candidates:
            if self.classifier.is_tracking_pixel(candidate.url):
                continue
            url = normalize_url(candidate.url, base_url)
            if url is None:
                continue
            if candidate.known_result:
                if self.classifier.is_result_chrome(url):
                    continue
            elif self.classifier.is_system_image(url, candidate.metadata):
                continue
            thumbnail = normalize_url(candidate.thumbnail, base_url) if candidate.thumbnail else None
            yield candidate.model_copy(update={"url": url, "thumbnail": thumbnail})

    @log_extraction_step("process_document")
    def run(
        self,
        *,
        source: SourceDescriptor,
        url: str,
        text: str,
        page: int = 1,
        limit: int = 20,
        base_url: str | None = None,
        strategy_name: str | None = None,
        server_side: bool | None = None,
    ) -> EngineResult:
        """Extract one page of images from an already-fetched document.

        Args:
            source: Source the document was fetched from
            url: Search URL that was requested
            text: Response body (HTML or JSON)
            page: Requested page, clamped to at least 1
            limit: Images per page, clamped to at least 1
            base_url: URL relative image paths resolve against (defaults to ``url``)
            strategy_name: Strategy to use instead of the source's own
            server_side: Whether the document already is the requested window
                (defaults to the source's template)

        Returns:
            EngineResult with 1-based ids within the page
        """
        page = coerce_positive(page)
        limit = coerce_positive(limit)
        document = Document(base_url or url, text)
        strategy = get_strategy(strategy_name or source.strategy)
        if server_side is None:
            server_side = source.paginates_server_side

        budget = self.candidate_budget(page, limit)
        raw = islice(strategy.extract(document, budget), budget)
        unique = dedupe(self.accept(raw, document.url), key=lambda candidate: candidate.url)

        if server_side:
            # The fetched page already is the requested window
            window = paginate(unique, 1, limit)
            offset = (page - 1) * limit
            pagination = PaginationInfo(
                current_page=page,
                has_next_page=window.pagination.has_next_page,
                next_page=page + 1,
                total=offset + window.pagination.total,
            )
        else:
            window = paginate(unique, page, limit)
            pagination = window.pagination

        images = [
            ImageResult(
                id=position,
                url=candidate.url,
                thumbnail=candidate.thumbnail or candidate.url,
                title=candidate.title,
                width=candidate.width,
                height=candidate.height,
                source=source.id,
            )
            for position, candidate in enumerate(window.data, start=1)
        ]
        logger.debug(
            "Processed source document",
            source=source.id,
            strategy=strategy.name,
            accepted=len(unique),
            returned=len(images),
            page=page,
        )
        return EngineResult(engine=source.id, url=url, images=images, pagination=pagination)

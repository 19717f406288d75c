# ABOUTME: JSON records strategy for image APIs answering with a list of result objects
# ABOUTME: DuckDuckGo i.js style {"results": [{"image", "thumbnail", "title", "width", "height"}]}

from collections.abc import Iterator
from typing import Any

from webscrimg.utils.logging import get_logger

from ..base import DocumentParseError, RawCandidate
from ..document import Document
from .metadata import as_dimension, as_text

logger = get_logger(__name__)


class JsonRecordsStrategy:
    """Candidate extraction from an array of flat result records."""

    name = "records"

    def __init__(
        self,
        results_key: str = "results",
        url_key: str = "image",
        thumbnail_key: str = "thumbnail",
        title_key: str = "title",
        width_key: str = "width",
        height_key: str = "height",
    ):
        self.results_key = results_key
        self.url_key = url_key
        self.thumbnail_key = thumbnail_key
        self.title_key = title_key
        self.width_key = width_key
        self.height_key = height_key

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        if budget <= 0:
            return
        produced = 0
        for record in self._records(document):
            url = as_text(record.get(self.url_key))
            if url is None:
                continue
            yield RawCandidate(
                url=url,
                thumbnail=as_text(record.get(self.thumbnail_key)),
                title=as_text(record.get(self.title_key)),
                width=as_dimension(record.get(self.width_key)),
                height=as_dimension(record.get(self.height_key)),
            )
            produced += 1
            if produced >= budget:
                return

    def _records(self, document: Document) -> Iterator[dict[str, Any]]:
        try:
            payload = document.json()
        except DocumentParseError as e:
            logger.debug("Results body is not JSON", url=document.url, error=str(e))
            return
        records = payload.get(self.results_key) if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            return
        for record in records:
            if isinstance(record, dict):
                yield record

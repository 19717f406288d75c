# ABOUTME: Embedded-metadata strategy - anchors carrying a JSON blob describing the result
# ABOUTME: Bing-style a.iusc[m] payloads with murl/turl/t/w/h keys; bad blobs are skipped

import json
from collections.abc import Iterator
from typing import Any

from webscrimg.utils.logging import get_logger

from ..base import RawCandidate
from ..document import Document

logger = get_logger(__name__)


class EmbeddedMetadataStrategy:
    """Candidate extraction from per-element JSON metadata attributes."""

    name = "metadata"

    def __init__(
        self,
        selector: str = "a.iusc",
        attribute: str = "m",
        url_key: str = "murl",
        thumbnail_key: str = "turl",
        title_key: str = "t",
        width_key: str = "w",
        height_key: str = "h",
    ):
        self.selector = selector
        self.attribute = attribute
        self.url_key = url_key
        self.thumbnail_key = thumbnail_key
        self.title_key = title_key
        self.width_key = width_key
        self.height_key = height_key

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        if budget <= 0:
            return
        produced = 0
        for index, element in enumerate(document.select(self.selector)):
            blob = element.get(self.attribute)
            if not blob or not isinstance(blob, str):
                continue
            try:
                payload = json.loads(blob)
            except json.JSONDecodeError as e:
                logger.debug("Skipping malformed metadata blob", element_index=index, error=str(e))
                continue
            if not isinstance(payload, dict):
                continue

            url = payload.get(self.url_key)
            if not url or not isinstance(url, str):
                continue

            yield RawCandidate(
                url=url,
                thumbnail=as_text(payload.get(self.thumbnail_key)),
                title=as_text(payload.get(self.title_key)),
                width=as_dimension(payload.get(self.width_key)),
                height=as_dimension(payload.get(self.height_key)),
            )
            produced += 1
            if produced >= budget:
                return


def as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def as_dimension(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    return None

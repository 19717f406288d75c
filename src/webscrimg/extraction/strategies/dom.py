# ABOUTME: Generic DOM scan strategy - every <img> element in document order
# ABOUTME: Reads the first present of src/data-src/data-lazy and keeps class/alt/role for classification

from collections.abc import Iterator

from bs4 import Tag

from ..base import ElementMetadata, RawCandidate
from ..document import Document

DEFAULT_SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy")


class DomScanStrategy:
    """Candidate extraction from plain ``<img>`` elements."""

    name = "dom"

    def __init__(self, attributes: tuple[str, ...] = DEFAULT_SOURCE_ATTRIBUTES, selector: str = "img"):
        self.attributes = attributes
        self.selector = selector

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        if budget <= 0:
            return
        produced = 0
        for element in document.select(self.selector):
            src = self._source_of(element)
            if not src:
                continue
            metadata = _element_metadata(element)
            yield RawCandidate(
                url=src,
                title=metadata.alt or _attr(element, "title"),
                width=_int_attr(element, "width"),
                height=_int_attr(element, "height"),
                metadata=metadata,
            )
            produced += 1
            if produced >= budget:
                return

    def _source_of(self, element: Tag) -> str | None:
        for attribute in self.attributes:
            value = _attr(element, attribute)
            if value:
                return value
        return None


def _attr(element: Tag, name: str) -> str | None:
    value = element.get(name)
    if isinstance(value, list):
        # bs4 returns multi-valued attributes (class, rel) as lists
        value = " ".join(value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int_attr(element: Tag, name: str) -> int | None:
    value = _attr(element, name)
    if value and value.isdecimal():
        return int(value)
    return None


def _element_metadata(element: Tag) -> ElementMetadata:
    return ElementMetadata(
        css_class=_attr(element, "class"),
        alt=_attr(element, "alt"),
        role=_attr(element, "role"),
    )

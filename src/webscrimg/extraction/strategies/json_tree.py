# ABOUTME: Structured-JSON tree walk strategy for engines answering with nested arrays
# ABOUTME: Finds [full_url, [thumbnail, ...], ...] tuples depth-first, pre-order

import re
from collections.abc import Iterator
from typing import Any

from webscrimg.utils.logging import get_logger

from ..base import DocumentParseError, RawCandidate
from ..document import Document, parse_json
from .script import DEFAULT_MARKERS

logger = get_logger(__name__)

# AF_initDataCallback({key: 'ds:1', hash: '2', data:[...], sideChannel: {}});
CALLBACK_DATA_PATTERN = re.compile(r"data:(\[.*?\])\s*,\s*sideChannel", re.DOTALL)


def iter_image_tuples(tree: Any) -> Iterator[RawCandidate]:
    """Walk a JSON tree pre-order and yield every image tuple found.

    A tuple is a list whose first item is a string starting with ``http`` and
    whose second item is a list; the second list's first item is taken as the
    thumbnail. Walking continues into the tuple's own children.
    """
    stack: list[Any] = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, list):
            if len(node) >= 2 and isinstance(node[0], str) and node[0].startswith("http") and isinstance(node[1], list):
                thumbnail = node[1][0] if node[1] and isinstance(node[1][0], str) else None
                yield RawCandidate(url=node[0], thumbnail=thumbnail)
            stack.extend(reversed(node))
        elif isinstance(node, dict):
            stack.extend(reversed(list(node.values())))


class JsonTreeStrategy:
    """Candidate extraction from nested JSON result arrays."""

    name = "json"

    def __init__(self, markers: tuple[str, ...] = DEFAULT_MARKERS):
        self.markers = markers

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        if budget <= 0:
            return
        produced = 0
        for tree in self._trees(document):
            for candidate in iter_image_tuples(tree):
                yield candidate
                produced += 1
                if produced >= budget:
                    return

    def _trees(self, document: Document) -> Iterator[Any]:
        if document.looks_like_json():
            try:
                yield document.json()
            except DocumentParseError as e:
                logger.debug("Document body is not JSON", url=document.url, error=str(e))
            return

        for body in document.scripts():
            if self.markers and not any(marker in body for marker in self.markers):
                continue
            for match in CALLBACK_DATA_PATTERN.finditer(body):
                try:
                    yield parse_json(match.group(1))
                except DocumentParseError:
                    continue

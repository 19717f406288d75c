# ABOUTME: Inline-script regex strategy for engines that ship results as serialized script data
# ABOUTME: Scans <script> bodies with a data-callback marker for quoted image URLs

import re
from collections.abc import Iterator

from ..base import RawCandidate
from ..document import Document

DEFAULT_MARKERS = ("AF_initDataCallback",)

# Quoted http(s) URL with an image extension somewhere in its path, or a
# Google encrypted thumbnail (those carry no extension)
IMAGE_URL_PATTERN = re.compile(
    r'"(https?://(?:encrypted-tbn\d\.gstatic\.com/images\?[^"\s]+|[^"\s]*?\.(?:jpe?g|png|gif|webp)[^"\s]*))"',
    re.IGNORECASE,
)

ENCRYPTED_THUMBNAIL_PATTERN = re.compile(r"^https?://encrypted-tbn\d\.gstatic\.com/", re.IGNORECASE)

JS_ESCAPES = {
    "\\u003d": "=",
    "\\u003D": "=",
    "\\u0026": "&",
    "\\/": "/",
}


def unescape_script(body: str) -> str:
    """Undo the JS string escapes Google applies inside serialized result data."""
    for escaped, plain in JS_ESCAPES.items():
        body = body.replace(escaped, plain)
    return body


class ScriptRegexStrategy:
    """Candidate extraction from inline script payloads."""

    name = "script"

    def __init__(self, markers: tuple[str, ...] = DEFAULT_MARKERS, pattern: re.Pattern[str] = IMAGE_URL_PATTERN):
        self.markers = markers
        self.pattern = pattern

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        if budget <= 0:
            return
        produced = 0
        for body in document.scripts():
            if self.markers and not any(marker in body for marker in self.markers):
                continue
            for match in self.pattern.finditer(unescape_script(body)):
                url = match.group(1).rstrip("\\")
                yield RawCandidate(url=url, known_result=bool(ENCRYPTED_THUMBNAIL_PATTERN.match(url)))
                produced += 1
                if produced >= budget:
                    return

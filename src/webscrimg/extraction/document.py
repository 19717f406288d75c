# ABOUTME: Parsed view over a fetched response body (HTML via BeautifulSoup, JSON via json)
# ABOUTME: Parsing is lazy so strategies only pay for the representation they use

import json
from collections.abc import Iterator
from typing import Any

from bs4 import BeautifulSoup, Tag

from .base import DocumentParseError

# Google prefixes JSON responses with this to defeat JSON hijacking
XSSI_PREFIX = ")]}'"


class Document:
    """A response body together with the URL it was fetched from."""

    def __init__(self, url: str, text: str):
        self.url = url
        self.text = text or ""
        self._soup: BeautifulSoup | None = None
        self._json: Any = None
        self._json_parsed = False

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.text, "html.parser")
        return self._soup

    def select(self, selector: str) -> list[Tag]:
        """Return elements matching a CSS selector, in document order."""
        return self.soup.select(selector)

    def iter_elements(self, name: str) -> Iterator[Tag]:
        """Lazily iterate elements with the given tag name, in document order."""
        for element in self.soup.find_all(name):
            if isinstance(element, Tag):
                yield element

    def scripts(self) -> Iterator[str]:
        """Iterate the text bodies of inline ``<script>`` elements."""
        for script in self.iter_elements("script"):
            body = script.string if script.string is not None else script.get_text()
            if body:
                yield body

    def json(self) -> Any:
        """Parse the body as JSON, stripping an XSSI prefix if present.

        Raises:
            DocumentParseError: If the body is not JSON
        """
        if not self._json_parsed:
            self._json = parse_json(self.text)
            self._json_parsed = True
        return self._json

    def looks_like_json(self) -> bool:
        stripped = self.text.lstrip()
        return stripped.startswith(("{", "[", XSSI_PREFIX))


def parse_json(text: str) -> Any:
    """Parse a JSON payload, tolerating the XSSI guard prefix."""
    payload = text.lstrip()
    if payload.startswith(XSSI_PREFIX):
        payload = payload[len(XSSI_PREFIX) :]
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, TypeError) as e:
        raise DocumentParseError(f"Invalid JSON payload: {e}") from e

# ABOUTME: Registry of named image sources and their search URL templates
# ABOUTME: Maps a source id to a URL template plus the extraction strategy that reads its pages

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from webscrimg.config import Config, get_config
from webscrimg.extraction.base import InvalidSourceError
from webscrimg.extraction.strategies import STRATEGIES
from webscrimg.utils.logging import get_logger

logger = get_logger(__name__)

# Characters JavaScript's encodeURIComponent leaves alone besides alphanumerics and -_.
_UNRESERVED = "!~*'()"

_SERVER_PAGING_PLACEHOLDERS = ("{page}", "{offset}")


def encode_query(query: str) -> str:
    """Percent-encode a search query the way browsers build query strings."""
    return quote(query, safe=_UNRESERVED)


def _check_strategy_name(value: str) -> str:
    if value not in STRATEGIES:
        raise ValueError(f"Unknown extraction strategy: {value}")
    return value


class TokenHandshake(BaseModel):
    """Landing page fetched first to obtain the session token a results endpoint requires.

    When the landing page carries no token, the landing page itself is scanned
    with ``fallback_strategy`` and paginated locally.
    """

    model_config = ConfigDict(frozen=True)

    url_template: str = Field(min_length=1, description="Landing page URL with {query}")
    token_pattern: str = Field(default=r"vqd=['\"]([^'\"]+)['\"]", description="Regex with one group for the token")
    fallback_strategy: str = "dom"

    @field_validator("fallback_strategy")
    @classmethod
    def _known_fallback(cls, value: str) -> str:
        return _check_strategy_name(value)

    def build_url(self, query: str) -> str:
        return self.url_template.replace("{query}", encode_query(query))

    def find_token(self, text: str) -> str | None:
        match = re.search(self.token_pattern, text)
        return match.group(1) if match else None


class SourceDescriptor(BaseModel):
    """A search source: where to fetch and how to read the result page."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    url_template: str = Field(
        min_length=1, description="URL with {query} and optional {page}/{offset}/{limit}/{token}"
    )
    strategy: str = Field(default="dom", description="Name of the extraction strategy variant")
    handshake: TokenHandshake | None = None

    @field_validator("strategy")
    @classmethod
    def _known_strategy(cls, value: str) -> str:
        return _check_strategy_name(value)

    @model_validator(mode="after")
    def _token_needs_handshake(self) -> SourceDescriptor:
        if "{token}" in self.url_template and self.handshake is None:
            raise ValueError("A {token} placeholder needs a handshake")
        return self

    @property
    def paginates_server_side(self) -> bool:
        """Whether the fetched page already is the requested window."""
        return any(placeholder in self.url_template for placeholder in _SERVER_PAGING_PLACEHOLDERS)

    def build_url(self, query: str, page: int = 1, limit: int = 20, token: str | None = None) -> str:
        """Fill the template for one search.

        Templates without a ``{query}`` placeholder get the encoded query appended.
        ``token`` fills ``{token}`` for sources with a handshake.
        """
        encoded = encode_query(query)
        template = self.url_template
        if "{query}" not in template:
            template = template + "{query}"
        return (
            template.replace("{query}", encoded)
            .replace("{page}", str(page))
            .replace("{offset}", str((page - 1) * limit))
            .replace("{limit}", str(limit))
            .replace("{token}", encode_query(token or ""))
        )


DEFAULT_SOURCES: tuple[SourceDescriptor, ...] = (
    # Search engines
    SourceDescriptor(
        id="google",
        url_template="https://www.google.com/search?q={query}&tbm=isch&start={offset}",
        strategy="google",
    ),
    SourceDescriptor(
        id="bing",
        url_template="https://www.bing.com/images/search?q={query}&first={offset}&count={limit}",
        strategy="metadata",
    ),
    SourceDescriptor(
        id="duckduckgo",
        url_template="https://duckduckgo.com/i.js?l=us-en&o=json&q={query}&vqd={token}&f=,,,&p=1&s={offset}",
        strategy="records",
        handshake=TokenHandshake(url_template="https://duckduckgo.com/?q={query}&iax=images&ia=images"),
    ),
    SourceDescriptor(id="brave", url_template="https://search.brave.com/images?q={query}"),
    SourceDescriptor(id="yandex", url_template="https://yandex.com/images/search?text={query}"),
    # Reference and stock photo sites
    SourceDescriptor(id="wikipedia", url_template="https://pt.wikipedia.org/wiki/{query}"),
    SourceDescriptor(id="unsplash", url_template="https://unsplash.com/s/photos/{query}"),
    SourceDescriptor(id="pexels", url_template="https://www.pexels.com/search/{query}"),
    SourceDescriptor(id="pixabay", url_template="https://pixabay.com/images/search/{query}"),
    SourceDescriptor(id="flickr", url_template="https://www.flickr.com/search/?text={query}"),
    # Parts catalogs
    SourceDescriptor(id="gaprisa", url_template="https://www.gaprisa.com.br/catalogsearch/result/?q={query}"),
    SourceDescriptor(id="autoexperts", url_template="https://www.autoexperts.parts/pt/br/search?q={query}"),
    SourceDescriptor(id="hipervarejo", url_template="https://www.hipervarejo.com.br/search?paged={page}&q={query}"),
    SourceDescriptor(id="jocar", url_template="https://www.jocar.com.br/{query}"),
    SourceDescriptor(id="jbs", url_template="https://www.jbs.com.br/produtos/bp.asp?busca={query}"),
    # Regional distributors share one storefront layout
    *(
        SourceDescriptor(id=region, url_template=f"https://www.{region}.com.br/produtos/bp.asp?busca={{query}}")
        for region in (
            "alagoasdistribuidora",
            "bahiadistribuidora",
            "cearadistribuidora",
            "cuiabadistribuidora",
            "espiritosantodistribuidora",
            "goiasedistribuidora",
            "maranhaodistribuidora",
            "matogrossodistribuidora",
            "matogrossodosuldistribuidora",
        )
    ),
)


class SourceRegistry:
    """Mutable mapping of source id to SourceDescriptor.

    Writes are last-write-wins; iteration follows insertion order.
    """

    def __init__(self, sources: Iterable[SourceDescriptor] | None = None):
        self._sources: dict[str, SourceDescriptor] = {}
        for source in sources or ():
            self._sources[source.id] = source

    def get(self, source_id: str) -> SourceDescriptor:
        try:
            return self._sources[source_id]
        except KeyError:
            raise InvalidSourceError(source_id) from None

    def set(self, source_id: str, url_template: str, strategy: str = "dom") -> SourceDescriptor:
        """Add or replace a source."""
        source = SourceDescriptor(id=source_id, url_template=url_template, strategy=strategy)
        if source_id in self._sources:
            logger.debug("Replacing source", source=source_id, url_template=url_template)
        self._sources[source_id] = source
        return source

    def delete(self, source_id: str) -> bool:
        """Remove a source; returns False when it was not registered."""
        return self._sources.pop(source_id, None) is not None

    def build_url(self, source_id: str, query: str, page: int = 1, limit: int = 20) -> str:
        return self.get(source_id).build_url(query, page, limit)

    def ids(self) -> list[str]:
        return list(self._sources)

    def list(self) -> list[SourceDescriptor]:
        return list(self._sources.values())

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[SourceDescriptor]:
        return iter(self._sources.values())


def default_registry(config: Config | None = None) -> SourceRegistry:
    """Build the built-in source table plus any sources added through settings."""
    config = config or get_config()
    registry = SourceRegistry(DEFAULT_SOURCES)
    for source_id, url_template in config.extra_sources.items():
        registry.set(source_id, url_template)
    if config.extra_sources:
        logger.info("Loaded extra sources from settings", count=len(config.extra_sources))
    return registry

# ABOUTME: HTTP fetch collaborator that retrieves source documents
# ABOUTME: Async httpx client with browser-like headers, timeouts and transport retries

from typing import Protocol

import httpx
from pydantic import BaseModel, Field

from webscrimg.config import Config, get_config
from webscrimg.extraction.base import FetchError
from webscrimg.utils.logging import get_logger, log_api_call
from webscrimg.utils.retry import fetch_retry

logger = get_logger(__name__)


class FetchResponse(BaseModel):
    """A fetched document."""

    url: str = Field(description="Final URL after redirects")
    status_code: int
    text: str
    headers: dict[str, str] = Field(default_factory=dict)


class Fetcher(Protocol):
    """Anything that can turn a URL into a FetchResponse or raise FetchError."""

    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> FetchResponse: ...

    async def close(self) -> None: ...


def build_headers(config: Config) -> dict[str, str]:
    return {
        "User-Agent": config.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": config.accept_language,
    }


class HttpxFetcher:
    """Default fetcher backed by an httpx.AsyncClient.

    Non-2xx answers raise FetchStatusError, timeouts FetchTimeoutError and
    transport failures FetchConnectionError (retried up to ``fetch_retries``
    total attempts).
    """

    def __init__(self, config: Config | None = None, http_client: httpx.AsyncClient | None = None):
        self.config = config or get_config()
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            headers=build_headers(self.config),
            timeout=self.config.request_timeout,
            follow_redirects=True,
        )
        self._get_with_retry = fetch_retry(max_attempts=self.config.fetch_retries)(self._get)

    @log_api_call("source")
    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> FetchResponse:
        return await self._get_with_retry(url, headers)

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> FetchResponse:
        try:
            response = await self.http_client.get(url, headers=headers)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL: {url}") from e
        response.raise_for_status()
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

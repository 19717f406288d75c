# ABOUTME: High-level service API for extracting images from one or many sources
# ABOUTME: Fetches documents, runs the pipeline and isolates per-source failures during fan-out

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable, Iterable

from webscrimg.config import Config, get_config
from webscrimg.extraction.base import ExtractionError
from webscrimg.extraction.classifier import ClassifierRules, ImageClassifier
from webscrimg.utils.logging import get_logger, with_pipeline_context, with_source_context

from .fetcher import Fetcher, HttpxFetcher
from .models import EngineFailure, EngineResult, FanOutReport, Outcome
from .pagination import coerce_positive
from .pipeline import ImagePipeline
from .registry import SourceDescriptor, SourceRegistry, default_registry

ProgressCallback = Callable[[str, int, int], None]


class ImageExtractionService:
    """Service for extracting images from registered search sources."""

    def __init__(
        self,
        registry: SourceRegistry | None = None,
        fetcher: Fetcher | None = None,
        pipeline: ImagePipeline | None = None,
        config: Config | None = None,
    ):
        self.config = config or get_config()
        self.registry = registry if registry is not None else default_registry(self.config)
        self.fetcher = fetcher or HttpxFetcher(self.config)
        self.pipeline = pipeline or ImagePipeline(
            classifier=ImageClassifier(ClassifierRules.from_config(self.config)),
            candidate_multiplier=self.config.candidate_multiplier,
        )
        self.logger = get_logger(__name__)

    async def __aenter__(self) -> ImageExtractionService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    def process_document(
        self, source: SourceDescriptor, url: str, text: str, page: int = 1, limit: int | None = None
    ) -> EngineResult:
        """Run the pipeline over a document that was already fetched."""
        return self.pipeline.run(source=source, url=url, text=text, page=page, limit=self._limit(limit))

    async def extract_one(self, source_id: str, query: str, page: int = 1, limit: int | None = None) -> Outcome:
        """Fetch and process one page of results from a single source.

        Raises:
            InvalidSourceError: If ``source_id`` is not registered
        """
        source = self.registry.get(source_id)
        page = coerce_positive(page)
        limit = self._limit(limit)

        with with_source_context(source.id, query) as logger:
            try:
                result = await self._fetch_and_process(source, query, page, limit)
            except ExtractionError as e:
                logger.warning("Source failed", error=str(e), error_type=type(e).__name__)
                return EngineFailure(engine=source.id, error=str(e))

            logger.info(
                "Source succeeded", url=result.url, images=len(result.images), total=result.pagination.total
            )
            return result

    async def _fetch_and_process(self, source: SourceDescriptor, query: str, page: int, limit: int) -> EngineResult:
        if source.handshake is None:
            url = source.build_url(query, page, limit)
            response = await self.fetcher.fetch(url)
            return self.pipeline.run(
                source=source, url=url, text=response.text, page=page, limit=limit, base_url=response.url
            )

        landing_url = source.handshake.build_url(query)
        landing = await self.fetcher.fetch(landing_url)
        token = source.handshake.find_token(landing.text)
        if token is None:
            self.logger.info("No session token on landing page, scanning it instead", source=source.id)
            return self.pipeline.run(
                source=source,
                url=landing_url,
                text=landing.text,
                page=page,
                limit=limit,
                base_url=landing.url,
                strategy_name=source.handshake.fallback_strategy,
                server_side=False,
            )

        url = source.build_url(query, page, limit, token=token)
        response = await self.fetcher.fetch(url, headers={"Referer": landing.url})
        return self.pipeline.run(
            source=source, url=url, text=response.text, page=page, limit=limit, base_url=response.url
        )

    async def extract_many(
        self,
        source_ids: Iterable[str] | None,
        query: str,
        page: int = 1,
        limit: int | None = None,
        concurrency: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> FanOutReport:
        """Query many sources concurrently.

        Sources are pulled from a shared queue by at most ``concurrency``
        workers. A failing source becomes an EngineFailure and never stops its
        siblings. Outcomes are listed in completion order.

        Args:
            source_ids: Sources to query; empty or None means every registered source
            query: Search text
            page: Requested page
            limit: Images per page
            concurrency: Maximum sources in flight (defaults to settings)
            progress_callback: Called with (source_id, completed, total) as sources finish

        Returns:
            FanOutReport with one outcome per requested source
        """
        ids = list(source_ids or []) or self.registry.ids()
        workers = coerce_positive(concurrency, default=self.config.default_concurrency)
        queue = deque(ids)
        results: list[Outcome] = []

        async def worker() -> None:
            while queue:
                source_id = queue.popleft()
                results.append(await self._extract_isolated(source_id, query, page, limit))
                if progress_callback:
                    progress_callback(source_id, len(results), len(ids))

        with with_pipeline_context("fan_out", query=query, sources=len(ids), concurrency=workers) as logger:
            logger.info("Starting fan-out")
            await asyncio.gather(*(worker() for _ in range(min(workers, len(ids)))))
            report = FanOutReport(query=query, engines=ids, results=results)
            logger.info(
                "Fan-out completed",
                succeeded=report.succeeded,
                failed=report.failed,
                total_images=report.total_images,
            )
        return report

    async def _extract_isolated(self, source_id: str, query: str, page: int, limit: int | None) -> Outcome:
        try:
            return await self.extract_one(source_id, query, page, limit)
        except Exception as exc:
            self.logger.error(
                "Source raised during fan-out",
                source=source_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return EngineFailure(engine=source_id, error=str(exc) or type(exc).__name__)

    def _limit(self, limit: int | None) -> int:
        return coerce_positive(limit, default=self.config.default_limit)

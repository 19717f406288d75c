# ABOUTME: Tests for the scrape progress display
# ABOUTME: Spinner-only single source view and the fan-out bar driven by the progress callback

import io

import pytest
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn

from webscrimg.config import Config
from webscrimg.core.fetcher import FetchResponse
from webscrimg.core.registry import SourceRegistry
from webscrimg.core.service import ImageExtractionService
from webscrimg.utils.logging.progress import SourceProgress, create_fanout_progress, create_source_progress


def _console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestSourceProgress:
    def test_single_source_is_spinner_only(self):
        progress = create_source_progress(_console(), "bing")

        assert progress.description == "🔎 Searching bing..."
        assert not any(isinstance(column, BarColumn) for column in progress.progress.columns)

    def test_fan_out_adds_bar(self):
        progress = create_fanout_progress(_console())

        columns = progress.progress.columns
        assert any(isinstance(column, BarColumn) for column in columns)
        assert any(isinstance(column, MofNCompleteColumn) for column in columns)
        assert progress.progress.tasks[0].total is None

    def test_source_finished_advances_bar(self):
        progress = create_fanout_progress(_console())

        progress.source_finished("bing", 1, 3)
        progress.source_finished("google", 2, 3)

        task = progress.progress.tasks[0]
        assert (task.completed, task.total) == (2, 3)
        assert progress.description == "🔎 google finished"
        assert progress.finished == ["bing", "google"]

    def test_done_replaces_description(self):
        with SourceProgress(_console(), "working") as progress:
            progress.done("✅ 2 succeeded, 1 failed")

        assert progress.description == "✅ 2 succeeded, 1 failed"


class StaticFetcher:
    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> FetchResponse:
        return FetchResponse(url=url, status_code=200, text='<img src="https://img.example.com/pump.jpg">')

    async def close(self) -> None:
        pass


@pytest.mark.asyncio
async def test_fan_out_drives_bar_to_completion():
    registry = SourceRegistry()
    for source_id in ("a", "b", "c"):
        registry.set(source_id, f"https://{source_id}.example.com/?q={{query}}")
    service = ImageExtractionService(registry=registry, fetcher=StaticFetcher(), config=Config())

    with create_fanout_progress(_console()) as progress:
        report = await service.extract_many(None, "pump", concurrency=2, progress_callback=progress.source_finished)

    task = progress.progress.tasks[0]
    assert (task.completed, task.total) == (3, 3)
    assert sorted(progress.finished) == ["a", "b", "c"]
    assert report.succeeded == 3

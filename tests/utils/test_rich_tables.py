# ABOUTME: Tests for the rich table builders used by the CLI
# ABOUTME: Row counts and titles for results, sources and fan-out summaries

from rich.console import Console

from webscrimg.core.models import EngineFailure, EngineResult, FanOutReport, ImageResult, PaginationInfo
from webscrimg.core.registry import SourceDescriptor
from webscrimg.utils.rich_tables import (
    create_fanout_summary_table,
    create_images_table,
    create_sources_table,
    print_rich_table,
)


def _result() -> EngineResult:
    return EngineResult(
        engine="shop",
        url="https://shop.example.com/search?q=pump",
        images=[
            ImageResult(id=1, url="https://img.example.com/1.jpg", thumbnail="t", width=640, height=480, source="shop"),
            ImageResult(id=2, url="https://img.example.com/2.jpg", thumbnail="t", title="Pump", source="shop"),
        ],
        pagination=PaginationInfo(current_page=1, has_next_page=True, next_page=2, total=7),
    )


def test_images_table():
    table = create_images_table(_result())

    assert table.row_count == 2
    assert "shop" in str(table.title)
    assert "2 of 7" in str(table.title)


def test_sources_table():
    sources = [
        SourceDescriptor(id="a", url_template="https://a.example.com/{query}"),
        SourceDescriptor(id="b", url_template="https://b.example.com/{query}", strategy="metadata"),
    ]
    assert create_sources_table(sources).row_count == 2


def test_fanout_summary_table_renders():
    report = FanOutReport(
        query="pump",
        engines=["shop", "down"],
        results=[EngineFailure(engine="down", error="HTTP 503"), _result()],
    )
    table = create_fanout_summary_table(report)
    console = Console(record=True, width=200)

    print_rich_table(console, table)
    output = console.export_text()

    assert table.row_count == 2
    assert "1 succeeded, 1 failed, 2 images" in output
    assert "HTTP 503" in output

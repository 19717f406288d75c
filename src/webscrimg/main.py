# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to scrape one source, fan out across many, and inspect sources and logging

import json

import asyncclick as click
from rich.console import Console

from webscrimg.config import get_config
from webscrimg.core.models import EngineFailure, FanOutReport
from webscrimg.core.registry import default_registry
from webscrimg.extraction.base import InvalidSourceError
from webscrimg.utils.logging import (
    LoggingMode,
    configure_logging,
    create_fanout_progress,
    create_source_progress,
    get_logging_status,
    with_pipeline_context,
)
from webscrimg.utils.rich_tables import (
    create_fanout_summary_table,
    create_images_table,
    create_logging_status_table,
    create_sources_table,
    print_rich_table,
)

console = Console()


def _parse_sources(sources: str | None) -> list[str]:
    if not sources:
        return []
    return [source.strip() for source in sources.split(",") if source.strip()]


@click.command()
@click.argument("source")
@click.argument("query")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Result page to return")
@click.option("--limit", "-l", type=int, default=None, help="Images per page (defaults to settings)")
@click.pass_context
async def scrape(ctx, source: str, query: str, page: int, limit: int | None):
    """
    🔎 Scrape one page of images for QUERY from a single SOURCE.
    """
    await _scrape_async(source, query, page, limit, ctx.obj["json_output"])


async def _scrape_async(source_id: str, query: str, page: int, limit: int | None, json_output: bool):
    from webscrimg.core.service import ImageExtractionService

    async with ImageExtractionService() as service:
        try:
            if json_output:
                outcome = await service.extract_one(source_id, query, page, limit)
            else:
                with create_source_progress(console, source_id) as progress:
                    outcome = await service.extract_one(source_id, query, page, limit)
                    progress.done()
        except InvalidSourceError as e:
            raise click.ClickException(f"{e}. Run 'webscrimg sources' to list them.") from e

    if json_output:
        click.echo(outcome.model_dump_json(by_alias=True, indent=2))
        return

    if isinstance(outcome, EngineFailure):
        console.print(f"[red]❌ {outcome.engine}: {outcome.error}[/red]")
        return

    if not outcome.images:
        console.print(f"[yellow]No images found on {outcome.engine} for '{query}' (page {page}).[/yellow]")
        return

    print_rich_table(console, create_images_table(outcome))
    if outcome.pagination.has_next_page:
        console.print(f"[dim]More results: --page {outcome.pagination.next_page}[/dim]")


@click.command(name="scrape-all")
@click.argument("query")
@click.option("--sources", "-s", help="Comma-separated source ids (default: every registered source)")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Result page to return")
@click.option("--limit", "-l", type=int, default=None, help="Images per page (defaults to settings)")
@click.option("--concurrency", "-c", type=int, default=None, help="Sources fetched at once (defaults to settings)")
@click.pass_context
async def scrape_all(ctx, query: str, sources: str | None, page: int, limit: int | None, concurrency: int | None):
    """
    🌐 Search QUERY across many sources concurrently.

    Sources that fail are reported alongside the ones that succeed.
    """
    await _scrape_all_async(query, _parse_sources(sources), page, limit, concurrency, ctx.obj["json_output"])


async def _scrape_all_async(
    query: str, source_ids: list[str], page: int, limit: int | None, concurrency: int | None, json_output: bool
):
    from webscrimg.core.service import ImageExtractionService

    with with_pipeline_context("scrape_all_cli", query=query) as logger:
        async with ImageExtractionService() as service:
            if json_output:
                report = await service.extract_many(source_ids, query, page, limit, concurrency)
            else:
                with create_fanout_progress(console) as progress:
                    report = await service.extract_many(
                        source_ids, query, page, limit, concurrency, progress_callback=progress.source_finished
                    )
                    progress.done(f"✅ {report.succeeded} succeeded, {report.failed} failed")

        logger.info("Scrape-all finished", succeeded=report.succeeded, failed=report.failed)

    if json_output:
        click.echo(report.model_dump_json(by_alias=True, indent=2))
        return

    _display_report(report)


def _display_report(report: FanOutReport) -> None:
    print_rich_table(console, create_fanout_summary_table(report))
    for result in report.successes():
        if result.images:
            print_rich_table(console, create_images_table(result))


@click.command()
@click.pass_context
def sources(ctx):
    """
    📚 List the registered image sources.
    """
    registry = default_registry()
    if ctx.obj["json_output"]:
        click.echo(_sources_json(registry.list()))
        return
    print_rich_table(console, create_sources_table(registry.list()))


def _sources_json(descriptors) -> str:
    return json.dumps([descriptor.model_dump() for descriptor in descriptors], indent=2)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else config.log_mode

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Parallel test runs can race on the log directory
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🖼️ webscrimg - image search scraping across many sources

    Fetch search result pages from search engines, stock photo sites and
    parts catalogs, and return clean, de-duplicated, paginated image lists.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(scrape)
app.add_command(scrape_all)
app.add_command(sources)
app.add_command(logging_status)


if __name__ == "__main__":
    app()

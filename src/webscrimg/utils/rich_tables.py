# ABOUTME: Rich table utilities for displaying image results, sources and fan-out summaries
# ABOUTME: Provides pre-configured table generators for common data display patterns

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def _dimensions(image: Any) -> str:
    if image.width and image.height:
        return f"{image.width}×{image.height}"
    return "-"


def create_images_table(result: Any) -> Table:
    """Create a table of the images one source returned.

    Args:
        result: EngineResult for a single source

    Returns:
        Table with one row per image
    """
    pagination = result.pagination
    rows = [[str(image.id), image.title or "-", _dimensions(image), image.url] for image in result.images]
    return create_multi_column_table(
        title=f"🖼️ {result.engine}: page {pagination.current_page} ({len(result.images)} of {pagination.total})",
        columns=[("#", "cyan"), ("Title", "white"), ("Size", "yellow"), ("URL", "blue")],
        rows=rows,
    )


def create_sources_table(sources: list[Any]) -> Table:
    """Create a table listing registered sources."""
    rows = [[source.id, source.strategy, source.url_template] for source in sources]
    return create_multi_column_table(
        title="🌐 Registered Sources",
        columns=[("Source", "bold cyan"), ("Strategy", "magenta"), ("URL Template", "white")],
        rows=rows,
    )


def create_fanout_summary_table(report: Any) -> Table:
    """Create a per-source summary of a fan-out report.

    Args:
        report: FanOutReport with success and failure outcomes

    Returns:
        Table with one row per source, successes first
    """
    rows = [
        ["✅", outcome.engine, str(len(outcome.images)), str(outcome.pagination.total), ""]
        for outcome in report.successes()
    ]
    rows.extend(["❌", outcome.engine, "0", "-", outcome.error] for outcome in report.failures())
    return create_multi_column_table(
        title=f"🔎 '{report.query}': {report.succeeded} succeeded, {report.failed} failed, "
        f"{report.total_images} images",
        columns=[("", "white"), ("Source", "bold cyan"), ("Images", "green"), ("Total", "yellow"), ("Error", "red")],
        rows=rows,
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    # Add log files if they exist
    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after

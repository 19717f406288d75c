# ABOUTME: Rich progress display for scrape commands
# ABOUTME: Spinner for a single source, completed/total bar fed by the fan-out progress callback

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class SourceProgress:
    """Transient progress line for one scrape command.

    A single-source scrape only shows a spinner. A fan-out adds a bar whose
    total is learned from the first ``source_finished`` call, so callers do
    not need to know how many sources an empty selection expands to.
    """

    def __init__(self, console: Console, description: str, fan_out: bool = False):
        columns = [SpinnerColumn(), TextColumn("[progress.description]{task.description}")]
        if fan_out:
            columns += [BarColumn(), MofNCompleteColumn(), TimeElapsedColumn()]
        self.progress = Progress(*columns, console=console, transient=True)
        self.task_id = self.progress.add_task(description, total=None)
        self.finished: list[str] = []

    def __enter__(self) -> "SourceProgress":
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.progress.stop()

    def source_finished(self, source_id: str, completed: int, total: int) -> None:
        """Record one finished source; matches the ``extract_many`` progress callback."""
        self.finished.append(source_id)
        self.progress.update(
            self.task_id, completed=completed, total=total, description=f"🔎 {source_id} finished"
        )

    def done(self, description: str = "✅ Done") -> None:
        self.progress.update(self.task_id, description=description)

    @property
    def description(self) -> str:
        return self.progress.tasks[0].description


def create_source_progress(console: Console, source_id: str) -> SourceProgress:
    return SourceProgress(console, f"🔎 Searching {source_id}...")


def create_fanout_progress(console: Console) -> SourceProgress:
    """Create the progress bar shown while many sources are searched.

    Args:
        console: Rich console instance

    Returns:
        SourceProgress whose ``source_finished`` is passed as ``progress_callback``
    """
    return SourceProgress(console, "🌐 Searching image sources...", fan_out=True)

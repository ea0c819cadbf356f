"""progress and output handling for batch rendering."""

from typing import Any, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TaskID,
    TextColumn,
)

DESCRIPTION_COLUMN = "[progress.description]{task.description}"


class ProgressHandler:
    """
    reports batch rendering on stderr.

    With show_progress a transient rich display runs: a spinner while sources
    are discovered, then a bar advanced once per post. Errors always print;
    informational lines only print when neither quiet nor showing a bar.
    """

    def __init__(self, quiet: bool = False, show_progress: bool = False) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self._console = Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ProgressHandler":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def _start(
        self,
        columns: list[ProgressColumn],
        description: str,
        total: Optional[int],
        **fields: Any,
    ) -> None:
        """replaces any running display with a new single-task one."""
        self._stop()
        self._progress = Progress(*columns, console=self._console, transient=True)
        self._progress.start()
        self._task_id = self._progress.add_task(description, total=total, **fields)

    def start_discovery(self) -> None:
        """shows a spinner while source files are found and counted."""
        if self.show_progress:
            self._start(
                [SpinnerColumn(), TextColumn(DESCRIPTION_COLUMN)],
                "Discovering posts...",
                None,
            )

    def set_total(self, total: int) -> None:
        """swaps the spinner for a bar sized to the number of posts."""
        if self.show_progress:
            self._start(
                [
                    SpinnerColumn(),
                    TextColumn(DESCRIPTION_COLUMN),
                    BarColumn(),
                    MofNCompleteColumn(),
                    TextColumn("- {task.fields[title]}"),
                ],
                "Rendering",
                total,
                title="",
            )

    def update(self, title: str) -> None:
        """advances the bar by one post."""
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(self._task_id, advance=1, title=title)

    def log_error(self, message: str) -> None:
        self._console.print(f"[red]ERROR:[/red] {message}")

    def log_info(self, message: str) -> None:
        if not (self.quiet or self.show_progress):
            self._console.print(message)

    def finish(self, rendered: int, skipped: int, failed: int) -> None:
        """stops the display and prints the tally unless quiet."""
        self._stop()
        if self.quiet:
            return
        total = rendered + skipped + failed
        self._console.print(
            f"Processed {total} post(s): {rendered} rendered, {skipped} skipped, {failed} failed"
        )

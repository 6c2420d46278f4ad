"""
Console reporter for ingested fields.

Formats a GridFrame summary using Rich.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gridframe.fields import Grid, GridFrame


class ConsoleReporter:
    """Formats and displays a field summary on the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_frame(self, frame: GridFrame[Any, Grid[Any, Any]], title: str) -> None:
        """
        Print one row per field, sorted by key.

        Args:
            frame: Ingested fields.
            title: Table title (usually the source path).
        """
        table = Table(title=title, show_header=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Samples", justify="right")
        table.add_column("Times", justify="right")
        table.add_column("Time range", style="blue")
        table.add_column("Bounds", style="dim")

        for key in sorted(frame, key=str):
            grid = frame.get(key)
            table.add_row(
                str(key),
                str(len(grid)),
                str(len(grid.times)),
                self._format_time_range(grid),
                self._format_bounds(grid),
            )

        self.console.print(table)
        self.console.print(f"[green]{len(frame)} field(s) loaded[/green]")

    def print_error(self, error: Exception) -> None:
        """Print an ingestion error in red."""
        self.console.print(
            f"[red]Error ({type(error).__name__}): {escape(str(error))}[/red]"
        )

    def _format_time_range(self, grid: Grid[Any, Any]) -> str:
        time_range = grid.time_range()
        if time_range is None:
            return "-"
        first, last = time_range
        return f"{first} .. {last}"

    def _format_bounds(self, grid: Grid[Any, Any]) -> str:
        bounds = grid.bounds()
        if bounds is None:
            return "-"
        low, high = bounds
        return "({:g}, {:g}, {:g}) .. ({:g}, {:g}, {:g})".format(*low, *high)

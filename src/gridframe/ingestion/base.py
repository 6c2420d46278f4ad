"""
Base class for tabular sources.

A tabular source exposes a header, a column count, a diagnostic path and a
single forward pass over rows of text cells. The ingestion pipeline only
depends on this interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence


class TabularSource(ABC):
    """
    Abstract base class for row-oriented text sources.

    Implementations must yield rows in file order and may refuse to be
    traversed more than once.
    """

    @property
    @abstractmethod
    def header(self) -> list[str]:
        """Ordered column names; empty when the source has no header row."""
        ...

    @property
    @abstractmethod
    def num_columns(self) -> int:
        """Number of columns in every row."""
        ...

    @property
    @abstractmethod
    def path(self) -> str:
        """Identifier of the source used in diagnostics."""
        ...

    @abstractmethod
    def data(self) -> Iterator[Sequence[str]]:
        """
        Iterate over data rows (header excluded).

        Returns:
            Lazy iterator of rows; each row supports indexed access to
            its text cells.
        """
        ...

    def describe(self) -> str:
        """One-line summary for log and error output."""
        header = ", ".join(self.header) if self.header else "no header"
        return f"{self.path} ({self.num_columns} columns: {header})"

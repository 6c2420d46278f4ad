"""
Comma-separated text source.

Reads a delimited file (or text stream) with pandas in chunks, keeping
every cell as text. Only one chunk is held in memory at a time.
"""

import io
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import pandas as pd
from pandas.io.parsers import TextFileReader

from gridframe.errors import ParseError, SourceConsumedError
from gridframe.ingestion.base import TabularSource
from gridframe.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


class CSVFile(TabularSource):
    """
    Delimited text file with an optional header row.

    The header (if any) and the column count are read eagerly from the
    first chunk; data rows are produced lazily by data(), which may be
    called once.
    """

    def __init__(
        self,
        source: str | Path | TextIO,
        *,
        has_header: bool = True,
        delimiter: str = ",",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = "utf-8",
        name: str | None = None,
    ) -> None:
        """
        Open a delimited source.

        Args:
            source: File path or an open text stream.
            has_header: Whether the first row holds column names.
            delimiter: Single-character field separator.
            chunk_size: Rows parsed per pandas chunk.
            encoding: Text encoding (used for paths only).
            name: Diagnostic identifier overriding the path or stream name.

        Raises:
            FileNotFoundError: If a path does not exist.
            ParseError: If the first chunk is malformed.
        """
        if isinstance(source, (str, Path)):
            self._path = str(source)
        else:
            self._path = str(getattr(source, "name", "<stream>"))
        if name is not None:
            self._path = name

        self._header: list[str] = []
        self._num_columns = 0
        self._consumed = False
        self._pending: pd.DataFrame | None = None
        self._reader: TextFileReader | None = None

        try:
            self._reader = pd.read_csv(
                source,
                sep=delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                chunksize=chunk_size,
                encoding=encoding,
            )
            first = next(self._reader, None)
        except pd.errors.EmptyDataError:
            log.debug("Empty source", path=self._path)
            self.close()
            return
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            self.close()
            raise ParseError(str(e), path=self._path) from e

        if first is None or first.empty:
            self.close()
            return

        self._num_columns = first.shape[1]
        if has_header:
            self._header = [str(cell).strip() for cell in first.iloc[0]]
            first = first.iloc[1:]
        self._pending = first

        log.debug(
            "Opened tabular source",
            path=self._path,
            columns=self._num_columns,
            header=self._header,
        )

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "CSVFile":
        """Build a source from in-memory text (path reported as '<string>')."""
        kwargs.setdefault("name", "<string>")
        return cls(io.StringIO(text), **kwargs)  # type: ignore[arg-type]

    @property
    def header(self) -> list[str]:
        return list(self._header)

    @property
    def num_columns(self) -> int:
        return self._num_columns

    @property
    def path(self) -> str:
        return self._path

    def data(self) -> Iterator[tuple[str, ...]]:
        """
        Iterate over data rows in file order.

        Raises:
            SourceConsumedError: If called a second time.
        """
        if self._consumed:
            msg = "source has already been read; open it again to re-ingest"
            raise SourceConsumedError(msg, path=self._path)
        self._consumed = True
        return self._iter_rows()

    def _iter_rows(self) -> Iterator[tuple[str, ...]]:
        row_number = 0
        try:
            for chunk in self._chunks():
                for row in chunk.itertuples(index=False, name=None):
                    row_number += 1
                    if any(not isinstance(cell, str) for cell in row):
                        msg = (
                            f"row {row_number} has fewer than "
                            f"{self._num_columns} cells"
                        )
                        raise ParseError(msg, path=self._path, row=row_number)
                    yield row
        finally:
            self.close()

    def _chunks(self) -> Iterator[pd.DataFrame]:
        if self._pending is not None:
            pending, self._pending = self._pending, None
            yield pending
        if self._reader is None:
            return
        try:
            yield from self._reader
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            self.close()
            raise ParseError(str(e), path=self._path) from e

    def close(self) -> None:
        """Release the underlying file handle."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self) -> "CSVFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

"""
Field ingestion pipeline.

Resolves column roles, makes a single pass over the source rows feeding
one GridBuilder per data column, then finalizes the builders into a
GridFrame keyed by column name. A call either returns a fully populated
frame or raises; no partial frame is ever returned.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from gridframe.errors import ParseError, SchemaError
from gridframe.fields.frame import GridFrame
from gridframe.fields.grid import Grid, GridBuilder
from gridframe.ingestion.base import TabularSource
from gridframe.ingestion.columns import (
    DEFAULT_COORDINATE_INDICES,
    DEFAULT_TIME_INDEX,
    ColumnIndexSet,
    resolve_by_index,
    resolve_by_name,
)
from gridframe.ingestion.csv_file import CSVFile
from gridframe.ingestion.decoders import FLOAT, STRING, Decoder
from gridframe.utils.logging import get_logger, log_context

if TYPE_CHECKING:
    from gridframe.config.settings import IngestionConfig

log = get_logger(__name__)

K = TypeVar("K")
T = TypeVar("T")
V = TypeVar("V")

DEFAULT_KEY_PREFIX = "var"


def read_from_columns(
    source: TabularSource,
    time_column: str,
    coordinate_columns: Sequence[str],
    *,
    key_decoder: Decoder[K] = STRING,  # type: ignore[assignment]
    time_decoder: Decoder[T] = FLOAT,  # type: ignore[assignment]
    value_decoder: Decoder[V] = FLOAT,  # type: ignore[assignment]
    key_prefix: str = DEFAULT_KEY_PREFIX,
) -> GridFrame[K, Grid[T, V]]:
    """
    Load fields, locating time and coordinate columns by header name.

    Args:
        source: Tabular source with a header row.
        time_column: Header name of the time column.
        coordinate_columns: Header names of the x, y and z columns.
        key_decoder: Decoder applied to each field key.
        time_decoder: Decoder for time cells.
        value_decoder: Decoder for data cells.
        key_prefix: Prefix of synthesized keys (unused when a header exists).

    Returns:
        GridFrame with one field per remaining column.

    Raises:
        SchemaError: If the header is empty or a column is missing.
        RangeError: If two roles name the same column.
        ParseError: If any cell or key cannot be decoded.
    """
    columns = resolve_by_name(
        source.header, time_column, coordinate_columns, path=source.path
    )
    return _ingest(
        source,
        columns,
        key_decoder=key_decoder,
        time_decoder=time_decoder,
        value_decoder=value_decoder,
        key_prefix=key_prefix,
    )


def read_from_indices(
    source: TabularSource,
    time_index: int = DEFAULT_TIME_INDEX,
    coordinate_indices: Sequence[int] = DEFAULT_COORDINATE_INDICES,
    *,
    key_decoder: Decoder[K] = STRING,  # type: ignore[assignment]
    time_decoder: Decoder[T] = FLOAT,  # type: ignore[assignment]
    value_decoder: Decoder[V] = FLOAT,  # type: ignore[assignment]
    key_prefix: str = DEFAULT_KEY_PREFIX,
) -> GridFrame[K, Grid[T, V]]:
    """
    Load fields, taking time and coordinates from explicit column indices.

    Without a header, fields are keyed key_prefix + column index
    (e.g. "var4").

    Raises:
        RangeError: If an index is out of range or two roles collide.
        SchemaError: If two data columns map to the same key.
        ParseError: If any cell or key cannot be decoded.
    """
    columns = resolve_by_index(
        source.num_columns, time_index, coordinate_indices, path=source.path
    )
    return _ingest(
        source,
        columns,
        key_decoder=key_decoder,
        time_decoder=time_decoder,
        value_decoder=value_decoder,
        key_prefix=key_prefix,
    )


def read_from(
    source: TabularSource,
    time: str | int = DEFAULT_TIME_INDEX,
    coordinates: Sequence[str] | Sequence[int] = DEFAULT_COORDINATE_INDICES,
    **options: Any,
) -> GridFrame[Any, Grid[Any, Any]]:
    """
    Load fields using either names or indices for the column roles.

    Names and indices cannot be mixed within one call.

    Raises:
        TypeError: If the hints mix names and indices.
    """
    hints = (time, *coordinates)
    if all(isinstance(h, str) for h in hints):
        return read_from_columns(source, time, coordinates, **options)  # type: ignore[arg-type]
    if all(isinstance(h, int) and not isinstance(h, bool) for h in hints):
        return read_from_indices(source, time, coordinates, **options)  # type: ignore[arg-type]
    msg = "column hints must be all names or all indices"
    raise TypeError(msg)


def read_csv_fields(
    path: str | Path,
    config: "IngestionConfig",
) -> GridFrame[Any, Grid[Any, Any]]:
    """
    Open a delimited file and load its fields as configured.

    Args:
        path: Path to the delimited file.
        config: Ingestion configuration (roles, dialect, decoders).

    Returns:
        Populated GridFrame.
    """
    decoding = config.decoding
    options: dict[str, Any] = {
        "key_decoder": decoding.key_type.decoder,
        "time_decoder": decoding.time_type.decoder,
        "value_decoder": decoding.value_type.decoder,
        "key_prefix": decoding.key_prefix,
    }
    with CSVFile(
        path,
        has_header=config.source.has_header,
        delimiter=config.source.delimiter,
        chunk_size=config.source.chunk_size,
        encoding=config.source.encoding,
    ) as source:
        roles = config.columns
        if roles.time_column is not None and roles.coordinate_columns is not None:
            return read_from_columns(
                source, roles.time_column, roles.coordinate_columns, **options
            )
        return read_from_indices(
            source, roles.time_index, roles.coordinate_indices, **options
        )


def _ingest(
    source: TabularSource,
    columns: ColumnIndexSet,
    *,
    key_decoder: Decoder[K],
    time_decoder: Decoder[T],
    value_decoder: Decoder[V],
    key_prefix: str,
) -> GridFrame[K, Grid[T, V]]:
    header = source.header
    path = source.path

    with log_context(path=path):
        log.info(
            "Ingesting fields",
            source=source.describe(),
            time_index=columns.time_index,
            coordinate_indices=list(columns.coordinate_indices),
            data_indices=list(columns.data_indices),
        )

        # Decode keys before reading any rows
        keys = [
            _decode_key(
                header, index, key_decoder=key_decoder, prefix=key_prefix, path=path
            )
            for index in columns.data_indices
        ]
        _check_unique_keys(header, columns, keys, key_prefix, path)

        builders: list[GridBuilder[T, V]] = [
            GridBuilder() for _ in columns.data_indices
        ]
        rows = 0
        for row in source.data():
            rows += 1
            time = _decode_cell(row, columns.time_index, time_decoder, header, rows, path)
            position = tuple(
                _decode_cell(row, index, FLOAT, header, rows, path)
                for index in columns.coordinate_indices
            )
            for builder, index in zip(builders, columns.data_indices):
                value = _decode_cell(row, index, value_decoder, header, rows, path)
                builder.add_point(time, position, value)

        frame: GridFrame[K, Grid[T, V]] = GridFrame(path=path)
        for key, builder in zip(keys, builders):
            frame[key] = builder.build()

        log.info("Ingested fields", rows=rows, fields=len(frame))
        return frame


def _column_label(header: Sequence[str], index: int) -> str | int:
    return header[index] if header else index


def _decode_cell(
    row: Sequence[str],
    index: int,
    decoder: Decoder[Any],
    header: Sequence[str],
    row_number: int,
    path: str,
) -> Any:
    column = _column_label(header, index)
    try:
        text = row[index]
    except IndexError:
        msg = f"row {row_number} has no cell for column {column!r}"
        raise ParseError(msg, path=path, row=row_number, column=column) from None
    try:
        return decoder.decode(text)
    except ValueError as e:
        msg = f"row {row_number}, column {column!r}: {e}"
        log.debug("Cell decode failed", row=row_number, column=column, text=text)
        raise ParseError(
            msg, path=path, row=row_number, column=column, text=text
        ) from e


def _decode_key(
    header: Sequence[str],
    index: int,
    *,
    key_decoder: Decoder[K],
    prefix: str,
    path: str,
) -> K:
    text = header[index] if header else f"{prefix}{index}"
    try:
        return key_decoder.decode(text)
    except ValueError as e:
        msg = f"field key for column {index}: {e}"
        raise ParseError(msg, path=path, column=index, text=text) from e


def _check_unique_keys(
    header: Sequence[str],
    columns: ColumnIndexSet,
    keys: list[Any],
    prefix: str,
    path: str,
) -> None:
    seen: dict[Any, int] = {}
    for index, key in zip(columns.data_indices, keys):
        if key in seen:
            name = header[index] if header else f"{prefix}{index}"
            msg = (
                f"columns {seen[key]} and {index} both map to field key {key!r}"
            )
            raise SchemaError(msg, path=path, column=name)
        seen[key] = index

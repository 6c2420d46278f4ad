"""
Column role resolution.

Assigns the time, coordinate and data roles to the columns of a tabular
source, either from header names or from explicit indices.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from gridframe.errors import RangeError, SchemaError
from gridframe.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_TIME_INDEX = 0
DEFAULT_COORDINATE_INDICES: tuple[int, int, int] = (1, 2, 3)


@dataclass(frozen=True)
class ColumnIndexSet:
    """
    Validated assignment of column roles.

    Attributes:
        time_index: Column holding the sample time.
        coordinate_indices: Columns holding the x, y and z position.
        data_indices: Remaining columns in ascending column order.
        num_columns: Total number of columns in the source.
    """

    time_index: int
    coordinate_indices: tuple[int, int, int]
    data_indices: tuple[int, ...]
    num_columns: int

    @property
    def reserved_indices(self) -> tuple[int, int, int, int]:
        """Time index followed by the three coordinate indices."""
        return (self.time_index, *self.coordinate_indices)


def resolve_by_index(
    num_columns: int,
    time_index: int = DEFAULT_TIME_INDEX,
    coordinate_indices: Sequence[int] = DEFAULT_COORDINATE_INDICES,
    *,
    path: str | None = None,
) -> ColumnIndexSet:
    """
    Validate reserved column indices and derive the data columns.

    Args:
        num_columns: Total number of columns in the source.
        time_index: Index of the time column.
        coordinate_indices: Indices of the three coordinate columns.
        path: Source identifier for error messages.

    Returns:
        ColumnIndexSet with data indices in ascending order.

    Raises:
        RangeError: If a reserved index is outside [0, num_columns) or two
            roles share an index.
    """
    if len(coordinate_indices) != 3:
        msg = f"expected 3 coordinate indices, got {len(coordinate_indices)}"
        raise ValueError(msg)

    reserved = (time_index, *coordinate_indices)
    seen: set[int] = set()
    for index in reserved:
        # bool is an int subclass but never a meaningful column index
        if (
            not isinstance(index, int)
            or isinstance(index, bool)
            or not 0 <= index < num_columns
        ):
            msg = f"column index {index!r} is out of range for {num_columns} columns"
            raise RangeError(msg, path=path, index=index)
        if index in seen:
            msg = f"column index {index} is assigned to more than one role"
            raise RangeError(msg, path=path, index=index)
        seen.add(index)

    data_indices = tuple(i for i in range(num_columns) if i not in seen)

    return ColumnIndexSet(
        time_index=time_index,
        coordinate_indices=(
            coordinate_indices[0],
            coordinate_indices[1],
            coordinate_indices[2],
        ),
        data_indices=data_indices,
        num_columns=num_columns,
    )


def resolve_by_name(
    header: Sequence[str],
    time_column: str,
    coordinate_columns: Sequence[str],
    *,
    path: str | None = None,
) -> ColumnIndexSet:
    """
    Look up role columns by header name.

    The time column is searched first, then each coordinate column; the
    first name that is missing is reported.

    Args:
        header: Ordered column names of the source.
        time_column: Name of the time column.
        coordinate_columns: Names of the three coordinate columns.
        path: Source identifier for error messages.

    Returns:
        ColumnIndexSet for the matching indices.

    Raises:
        SchemaError: If the header is empty or a name is not found.
        RangeError: If two roles name the same column.
    """
    if len(coordinate_columns) != 3:
        msg = f"expected 3 coordinate columns, got {len(coordinate_columns)}"
        raise ValueError(msg)
    if not header:
        msg = "source has no header"
        raise SchemaError(msg, path=path)

    indices: list[int] = []
    for name in (time_column, *coordinate_columns):
        index = _find_column(header, name)
        if index is None:
            msg = f"source has no {name!r} column"
            raise SchemaError(msg, path=path, column=name)
        indices.append(index)

    log.debug(
        "Resolved named columns",
        time=time_column,
        coordinates=list(coordinate_columns),
        indices=indices,
    )
    return resolve_by_index(len(header), indices[0], indices[1:], path=path)


def _find_column(header: Sequence[str], name: str) -> int | None:
    for index, column in enumerate(header):
        if column == name:
            return index
    return None

"""
Time-varying volumetric fields.

GridBuilder accumulates (time, position, value) samples in arrival order.
build() turns them into an immutable Grid exactly once.
"""

import bisect
from collections.abc import Iterator, Sequence
from typing import Any, Generic, NamedTuple, TypeVar

import numpy as np
import pandas as pd

from gridframe.errors import BuilderConsumedError
from gridframe.schemas.samples import GridSampleSchema

T = TypeVar("T")
V = TypeVar("V")

Position = tuple[float, float, float]


class Sample(NamedTuple):
    """One recorded field value at a point in time and space."""

    time: Any
    position: Position
    value: Any


def as_position(position: Sequence[float] | np.ndarray) -> Position:
    """Convert a 3-component sequence into a tuple of floats."""
    if len(position) != 3:
        msg = f"position must have 3 components, got {len(position)}"
        raise ValueError(msg)
    return (float(position[0]), float(position[1]), float(position[2]))


class Grid(Generic[T, V]):
    """
    Immutable field queryable by time and position.

    Samples are kept sorted by time. Samples with equal times keep the
    order in which they were added, and when the same (time, position)
    was recorded more than once, lookup() returns the last one.
    """

    __slots__ = ("_index", "_positions", "_times", "_values")

    def __init__(
        self,
        times: Sequence[T],
        positions: np.ndarray,
        values: Sequence[V],
    ) -> None:
        """
        Wrap already time-sorted sample columns.

        Use GridBuilder to create grids from unsorted samples.
        """
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        if not len(times) == len(positions) == len(values):
            msg = "times, positions and values must have equal length"
            raise ValueError(msg)
        positions.flags.writeable = False

        self._times: tuple[T, ...] = tuple(times)
        self._positions = positions
        self._values: tuple[V, ...] = tuple(values)
        self._index: dict[tuple[Any, Position], V] = {
            (t, as_position(p)): v
            for t, p, v in zip(self._times, positions, self._values)
        }

    @classmethod
    def empty(cls) -> "Grid[T, V]":
        """A grid without samples."""
        return cls((), np.empty((0, 3)), ())

    def __len__(self) -> int:
        return len(self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._times == other._times
            and self._values == other._values
            and np.array_equal(self._positions, other._positions)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(samples={len(self)}, times={len(self.times)})"

    @property
    def times(self) -> tuple[T, ...]:
        """Distinct sample times in ascending order."""
        return tuple(dict.fromkeys(self._times))

    @property
    def positions(self) -> np.ndarray:
        """Read-only (n, 3) array of sample positions in time order."""
        return self._positions

    def samples(self) -> Iterator[Sample]:
        """Iterate over all samples in time order."""
        for t, p, v in zip(self._times, self._positions, self._values):
            yield Sample(t, as_position(p), v)

    def time_range(self) -> tuple[T, T] | None:
        """First and last sample time, or None for an empty grid."""
        if not self._times:
            return None
        return self._times[0], self._times[-1]

    def bounds(self) -> tuple[Position, Position] | None:
        """Axis-aligned bounding box of all positions, or None if empty."""
        if not len(self._positions):
            return None
        low = self._positions.min(axis=0)
        high = self._positions.max(axis=0)
        return as_position(low), as_position(high)

    def at_time(self, time: T) -> list[tuple[Position, V]]:
        """All (position, value) pairs recorded at exactly this time."""
        start = bisect.bisect_left(self._times, time)
        stop = bisect.bisect_right(self._times, time)
        return [
            (as_position(self._positions[i]), self._values[i])
            for i in range(start, stop)
        ]

    def lookup(self, time: T, position: Sequence[float]) -> V | None:
        """
        Value recorded at exactly this time and position.

        Returns:
            The stored value, or None when no such sample exists.
        """
        return self._index.get((time, as_position(position)))

    def to_frame(self) -> pd.DataFrame:
        """
        Samples as a validated DataFrame.

        Returns:
            DataFrame with columns time, x, y, z, value in time order.
        """
        df = pd.DataFrame(
            {
                "time": list(self._times),
                "x": self._positions[:, 0],
                "y": self._positions[:, 1],
                "z": self._positions[:, 2],
                "value": list(self._values),
            }
        )
        return GridSampleSchema.validate(df)


class GridBuilder(Generic[T, V]):
    """
    Mutable, single-use accumulator for one field.

    Samples must be added in source row order. After build() the builder
    is consumed and rejects further use.
    """

    def __init__(self) -> None:
        self._times: list[T] = []
        self._positions: list[Position] = []
        self._values: list[V] = []
        self._consumed = False

    def __len__(self) -> int:
        return len(self._times)

    @property
    def consumed(self) -> bool:
        """Whether build() has been called."""
        return self._consumed

    def add_point(self, time: T, position: Sequence[float], value: V) -> None:
        """
        Record one sample.

        Raises:
            BuilderConsumedError: If build() was already called.
        """
        self._ensure_open()
        self._times.append(time)
        self._positions.append(as_position(position))
        self._values.append(value)

    def build(self) -> Grid[T, V]:
        """
        Finalize the accumulated samples into a Grid.

        Raises:
            BuilderConsumedError: If build() was already called.
        """
        self._ensure_open()
        self._consumed = True

        # sorted() is stable, so equal times keep their arrival order
        order = sorted(range(len(self._times)), key=self._times.__getitem__)
        times = [self._times[i] for i in order]
        positions = np.array(
            [self._positions[i] for i in order], dtype=np.float64
        ).reshape(-1, 3)
        values = [self._values[i] for i in order]

        self._times, self._positions, self._values = [], [], []
        return Grid(times, positions, values)

    def _ensure_open(self) -> None:
        if self._consumed:
            msg = "GridBuilder has already been built"
            raise BuilderConsumedError(msg)

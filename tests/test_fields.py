"""Tests for GridBuilder, Grid and GridFrame."""

import numpy as np
import pandas as pd
import pytest

from gridframe.errors import BuilderConsumedError, FieldLookupError
from gridframe.fields import Grid, GridBuilder, GridFrame


@pytest.fixture
def built_grid() -> Grid[float, float]:
    """Grid with out-of-order times and one duplicate point."""
    builder: GridBuilder[float, float] = GridBuilder()
    builder.add_point(1.0, (0, 0, 0), 10.0)
    builder.add_point(0.0, (1, 0, 0), 1.0)
    builder.add_point(0.0, (0, 0, 0), 2.0)
    builder.add_point(1.0, (0, 0, 0), 11.0)
    return builder.build()


class TestGridBuilder:
    """Tests for the single-use builder."""

    def test_build_once(self) -> None:
        """Test that a builder cannot be reused after build()."""
        builder: GridBuilder[float, float] = GridBuilder()
        builder.add_point(0.0, (0, 0, 0), 1.0)
        assert len(builder) == 1
        builder.build()
        assert builder.consumed
        with pytest.raises(BuilderConsumedError):
            builder.add_point(1.0, (0, 0, 0), 2.0)
        with pytest.raises(BuilderConsumedError):
            builder.build()

    def test_position_must_be_3d(self) -> None:
        """Test that positions need exactly three components."""
        builder: GridBuilder[float, float] = GridBuilder()
        with pytest.raises(ValueError, match="3 components"):
            builder.add_point(0.0, (0, 0), 1.0)


class TestGrid:
    """Tests for the immutable grid."""

    def test_sorted_by_time_stable(self, built_grid: Grid[float, float]) -> None:
        """Test that samples are time-sorted with arrival order kept on ties."""
        assert [s.value for s in built_grid.samples()] == [1.0, 2.0, 10.0, 11.0]

    def test_times_and_range(self, built_grid: Grid[float, float]) -> None:
        """Test distinct times and the time range."""
        assert built_grid.times == (0.0, 1.0)
        assert built_grid.time_range() == (0.0, 1.0)
        assert len(built_grid) == 4

    def test_bounds(self, built_grid: Grid[float, float]) -> None:
        """Test the bounding box of positions."""
        assert built_grid.bounds() == ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))

    def test_at_time(self, built_grid: Grid[float, float]) -> None:
        """Test all samples at one time."""
        assert built_grid.at_time(0.0) == [((1.0, 0.0, 0.0), 1.0), ((0.0, 0.0, 0.0), 2.0)]
        assert built_grid.at_time(0.5) == []

    def test_lookup_last_duplicate_wins(self, built_grid: Grid[float, float]) -> None:
        """Test exact lookup with a repeated (time, position)."""
        assert built_grid.lookup(1.0, (0, 0, 0)) == 11.0
        assert built_grid.lookup(0.0, np.array([1.0, 0.0, 0.0])) == 1.0
        assert built_grid.lookup(2.0, (0, 0, 0)) is None

    def test_positions_read_only(self, built_grid: Grid[float, float]) -> None:
        """Test that the position array cannot be modified."""
        with pytest.raises(ValueError):
            built_grid.positions[0, 0] = 5.0

    def test_empty(self) -> None:
        """Test the empty default grid."""
        grid: Grid[float, float] = Grid.empty()
        assert len(grid) == 0
        assert grid.time_range() is None
        assert grid.bounds() is None
        assert grid == GridBuilder().build()

    def test_equality(self) -> None:
        """Test that grids built from the same samples are equal."""
        first: GridBuilder[float, float] = GridBuilder()
        second: GridBuilder[float, float] = GridBuilder()
        for builder in (first, second):
            builder.add_point(0.0, (1, 2, 3), 4.0)
        assert first.build() == second.build()

    def test_to_frame(self, built_grid: Grid[float, float]) -> None:
        """Test the validated tabular view."""
        df = built_grid.to_frame()
        assert list(df.columns) == ["time", "x", "y", "z", "value"]
        assert df["value"].tolist() == [1.0, 2.0, 10.0, 11.0]
        assert isinstance(df, pd.DataFrame)


class TestGridFrame:
    """Tests for the keyed container."""

    def test_has_and_get_or_insert(self) -> None:
        """Test that get_or_insert inserts a default value."""
        frame: GridFrame[str, Grid[float, float]] = GridFrame()
        assert not frame.has("temp")
        grid = frame.get_or_insert("temp")
        assert frame.has("temp")
        assert len(grid) == 0
        assert frame.get_or_insert("temp") is grid

    def test_get_missing_never_inserts(self) -> None:
        """Test that get() raises LookupError and leaves the frame unchanged."""
        frame: GridFrame[str, Grid[float, float]] = GridFrame(path="a.csv")
        with pytest.raises(LookupError, match="'wind'") as excinfo:
            frame.get("wind")
        assert isinstance(excinfo.value, FieldLookupError)
        assert excinfo.value.key == "wind"
        assert not frame.has("wind")
        assert len(frame) == 0

    def test_mapping_protocol(self) -> None:
        """Test item assignment, membership, iteration and keys."""
        frame: GridFrame[int, Grid[float, float]] = GridFrame()
        frame[4] = Grid.empty()
        frame[5] = Grid.empty()
        assert 4 in frame
        assert frame.keys() == {4, 5}
        assert sorted(frame) == [4, 5]
        assert dict(frame.items())[5] == Grid.empty()
        with pytest.raises(KeyError):
            frame[6]

    def test_custom_default_factory(self) -> None:
        """Test a frame holding plain lists."""
        frame: GridFrame[str, list[int]] = GridFrame(list)
        frame.get_or_insert("a").append(1)
        assert frame.get("a") == [1]

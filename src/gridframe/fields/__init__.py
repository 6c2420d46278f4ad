"""
Field containers.

GridBuilder accumulates samples, Grid is the immutable result and
GridFrame maps field keys to grids.
"""

from gridframe.fields.frame import GridFrame
from gridframe.fields.grid import Grid, GridBuilder, Position, Sample

__all__ = ["Grid", "GridBuilder", "GridFrame", "Position", "Sample"]

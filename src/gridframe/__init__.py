"""
Gridframe: spatiotemporal field ingestion.

This package loads time- and position-tagged columns from delimited text
files into a keyed collection of immutable, queryable grids.
"""

from importlib.metadata import version

from gridframe.fields import Grid, GridBuilder, GridFrame, Sample
from gridframe.ingestion import (
    CSVFile,
    read_csv_fields,
    read_from,
    read_from_columns,
    read_from_indices,
)

__version__ = version("gridframe")

__all__ = [
    "CSVFile",
    "Grid",
    "GridBuilder",
    "GridFrame",
    "Sample",
    "__version__",
    "read_csv_fields",
    "read_from",
    "read_from_columns",
    "read_from_indices",
]

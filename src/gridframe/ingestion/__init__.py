"""
Ingestion layer: tabular sources, cell decoders, column role resolution
and the pipeline that turns rows into fields.
"""

from gridframe.ingestion.base import TabularSource
from gridframe.ingestion.columns import (
    ColumnIndexSet,
    resolve_by_index,
    resolve_by_name,
)
from gridframe.ingestion.csv_file import CSVFile
from gridframe.ingestion.decoders import (
    FLOAT,
    INT,
    STRING,
    TIMESTAMP,
    Decoder,
    DecoderName,
)
from gridframe.ingestion.pipeline import (
    read_csv_fields,
    read_from,
    read_from_columns,
    read_from_indices,
)

__all__ = [
    "FLOAT",
    "INT",
    "STRING",
    "TIMESTAMP",
    "CSVFile",
    "ColumnIndexSet",
    "Decoder",
    "DecoderName",
    "TabularSource",
    "read_csv_fields",
    "read_from",
    "read_from_columns",
    "read_from_indices",
    "resolve_by_index",
    "resolve_by_name",
]

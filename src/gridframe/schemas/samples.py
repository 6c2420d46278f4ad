"""
Pandera schema for grid sample tables.

Grid.to_frame() output is validated against this schema so that every
tabular view of a field has the same columns and coordinate dtypes.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series


class GridSampleSchema(pa.DataFrameModel):
    """
    Schema for the samples of a single field.

    Time and value columns may hold any dtype (the decoders decide), so
    only their presence is checked.
    """

    x: Series[float] = pa.Field(description="First position coordinate")
    y: Series[float] = pa.Field(description="Second position coordinate")
    z: Series[float] = pa.Field(description="Third position coordinate")

    @pa.dataframe_check
    def has_time_and_value(cls, df: pd.DataFrame) -> bool:
        """Time and value columns are always present."""
        return {"time", "value"}.issubset(df.columns)

    class Config:
        """Schema configuration."""

        name = "GridSampleSchema"
        strict = False
        coerce = True

"""
Typed configuration models using Pydantic.

Column roles, source dialect and decoder choices for an ingestion run.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gridframe.ingestion.decoders import DecoderName


class ColumnRolesConfig(BaseModel):
    """Which columns hold time and position.

    Either both names are given (lookup by header name) or neither
    (lookup by index).
    """

    model_config = ConfigDict(frozen=True)

    time_column: str | None = Field(
        default=None, description="Header name of the time column"
    )
    coordinate_columns: tuple[str, str, str] | None = Field(
        default=None, description="Header names of the x, y and z columns"
    )
    time_index: int = Field(default=0, ge=0, description="Index of the time column")
    coordinate_indices: tuple[int, int, int] = Field(
        default=(1, 2, 3), description="Indices of the x, y and z columns"
    )

    @model_validator(mode="after")
    def validate_names_together(self) -> "ColumnRolesConfig":
        """Names must be given for all roles or for none."""
        if (self.time_column is None) != (self.coordinate_columns is None):
            msg = "time_column and coordinate_columns must be set together"
            raise ValueError(msg)
        return self

    @field_validator("coordinate_indices")
    @classmethod
    def validate_indices(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        """Coordinate indices are non-negative."""
        if any(i < 0 for i in v):
            msg = f"coordinate_indices must be non-negative, got {v}"
            raise ValueError(msg)
        return v


class SourceConfig(BaseModel):
    """Dialect of the delimited source file."""

    model_config = ConfigDict(frozen=True)

    has_header: bool = Field(default=True, description="First row holds names")
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    chunk_size: int = Field(default=10_000, ge=1, description="Rows per read chunk")
    encoding: str = Field(default="utf-8")


class DecodingConfig(BaseModel):
    """Target types for decoded cells and field keys."""

    model_config = ConfigDict(frozen=True)

    time_type: DecoderName = Field(default=DecoderName.FLOAT)
    value_type: DecoderName = Field(default=DecoderName.FLOAT)
    key_type: DecoderName = Field(default=DecoderName.STRING)
    key_prefix: str = Field(
        default="var",
        min_length=1,
        description="Prefix for keys of headerless columns (prefix + index)",
    )


class IngestionConfig(BaseModel):
    """Complete ingestion configuration."""

    model_config = ConfigDict(frozen=True)

    columns: ColumnRolesConfig = Field(default_factory=ColumnRolesConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    decoding: DecodingConfig = Field(default_factory=DecodingConfig)

"""
Configuration management with typed Pydantic models.
"""

from gridframe.config.loader import load_config
from gridframe.config.settings import (
    ColumnRolesConfig,
    DecodingConfig,
    IngestionConfig,
    SourceConfig,
)

__all__ = [
    "ColumnRolesConfig",
    "DecodingConfig",
    "IngestionConfig",
    "SourceConfig",
    "load_config",
]

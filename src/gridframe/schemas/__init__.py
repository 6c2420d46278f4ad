"""
Schema definitions using Pandera for data validation.
"""

from gridframe.schemas.samples import GridSampleSchema

__all__ = ["GridSampleSchema"]

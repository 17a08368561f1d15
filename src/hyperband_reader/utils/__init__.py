"""
Hyperband Reader Utilities

This package provides functions for querying cube layout and georeferencing.
"""

from .info import (
    get_cube_info,
    list_band_wavelengths,
)

__all__ = [
    "get_cube_info",
    "list_band_wavelengths",
]

"""
Hyperband Reader Axis Orientation

Planes come out of the cube as (x, y): columns first. Raster consumers want
(y, x). These helpers are the only place that order is changed.
"""

import xarray as xr

from ..core.config import RASTER_DIMS
from ..core.exceptions import DataProcessingError


def reorient(plane: xr.DataArray) -> xr.DataArray:
    """
    Swap the two axes of a plane. Values are unchanged; applying it twice
    restores the input layout.

    Raises:
        DataProcessingError: If the plane is not 2D
    """
    if plane.ndim != 2:
        raise DataProcessingError("reorientation", f"expected a 2D plane, got dims {plane.dims}")
    first, second = plane.dims
    return plane.transpose(second, first)


def to_raster_order(plane: xr.DataArray) -> xr.DataArray:
    """Return the plane with dims (y, x), whatever order it arrives in."""
    if plane.dims == RASTER_DIMS:
        return plane
    if set(plane.dims) != set(RASTER_DIMS):
        raise DataProcessingError("reorientation", f"expected dims {RASTER_DIMS}, got {plane.dims}")
    return reorient(plane)

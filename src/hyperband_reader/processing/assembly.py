"""
Hyperband Reader Raster Assembly

This module binds a cleaned, reoriented plane to its extent and projection.
"""

from typing import Optional

import xarray as xr

from ..core.config import RASTER_DIMS
from ..core.core_types import BoundingRectangle, GeoRaster, ProjectionId
from ..core.exceptions import InvalidGeometryError


def assemble_raster(
    plane: xr.DataArray,
    rectangle: BoundingRectangle,
    projection: ProjectionId,
    epsg: Optional[int] = None
) -> GeoRaster:
    """
    Build a GeoRaster.

    Args:
        plane: Plane in raster order, dims (y, x)
        rectangle: Projected extent of the plane
        projection: Projection tag
        epsg: EPSG code, when known

    Returns:
        GeoRaster: The assembled raster

    Raises:
        InvalidGeometryError: If the plane is empty or not in (y, x) order,
            or the rectangle does not satisfy x_min < x_max and y_min < y_max
    """
    if plane.dims != RASTER_DIMS:
        raise InvalidGeometryError(f"plane dims must be {RASTER_DIMS}, got {plane.dims}")
    if plane.size == 0:
        raise InvalidGeometryError(f"plane is empty: shape {plane.shape}")
    if not rectangle.is_well_formed:
        raise InvalidGeometryError(f"degenerate bounding rectangle {rectangle}")

    return GeoRaster(data=plane, extent=rectangle, projection=projection, epsg=epsg)

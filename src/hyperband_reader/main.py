"""
Hyperband Reader Main Interface

This module provides the main API functions for extracting bands.
Information queries live in the utils package.
"""

import logging
from pathlib import Path
from typing import Optional, Union
import xarray as xr

from .core.core_types import GeoRaster, ReaderOptions
from .io.band_loader import load_band_raster

# Get logger for this module
logger = logging.getLogger('hyperband_reader.main')

from .utils import get_cube_info, list_band_wavelengths


# ============================================================================
# Main API Functions
# ============================================================================

def extract_band(
    path: Union[str, Path],
    band_index: int,
    *,
    reflectance_path: Optional[str] = None,
    map_info_path: Optional[str] = None,
    options: Optional[ReaderOptions] = None,
) -> GeoRaster:
    """
    Extract one band of a hyperspectral cube as a georeferenced raster.

    Only the requested plane is read. Sentinel pixels become NaN, the rest
    are divided by the scale factor, and the plane is returned in row-major
    (y, x) order with its projected extent.

    Args:
        path: Container file path
        band_index: Zero-based band index
        reflectance_path: Cube dataset path (overrides options)
        map_info_path: Map info record path (overrides options)
        options: Container layout conventions

    Returns:
        GeoRaster: The band raster

    Examples:
        >>> raster = extract_band("NEON_D17_SJER.h5", 55)
        >>> raster.extent.as_bounds()
        (257500.0, 4111000.0, 258500.0, 4112000.0)
        >>> raster.data.shape
        (1000, 1000)

        # Cube stored under a site group with a non-default map info name
        >>> raster = extract_band(
        ...     "cube.h5", 10,
        ...     reflectance_path="/SITE/Reflectance/Reflectance_Data",
        ...     map_info_path="/SITE/Reflectance/Metadata/Coordinate_System/Map_Info",
        ... )
    """
    opts = options or ReaderOptions()
    if reflectance_path is not None or map_info_path is not None:
        opts = ReaderOptions(
            reflectance_path=reflectance_path or opts.reflectance_path,
            map_info_path=map_info_path or opts.map_info_path,
            epsg_path=opts.epsg_path,
            wavelength_path=opts.wavelength_path,
            scale_factor_attrs=opts.scale_factor_attrs,
            no_data_attrs=opts.no_data_attrs,
        )
    return load_band_raster(Path(path), band_index, opts)


def extract_band_dataarray(
    path: Union[str, Path],
    band_index: int,
    *,
    options: Optional[ReaderOptions] = None,
) -> xr.DataArray:
    """
    Extract one band as an xarray DataArray with projected x/y coordinates.

    Returns:
        xr.DataArray: dims (y, x), pixel-centre coordinates, 'crs' attribute
        when the EPSG code is known
    """
    return extract_band(path, band_index, options=options).to_dataarray()

"""
Hyperband Reader I/O

This package provides the container handle, metadata readers, band slicing
and the single-band loader.
"""

from .container import ContainerHandle, open_container
from .metadata import (
    read_attributes,
    read_reflectance_metadata,
    read_map_info,
    read_epsg_code,
    read_band_wavelength,
)
from .band_slicer import slice_band, validate_band_index
from .band_loader import BandRasterLoader, load_band_raster

__all__ = [
    "ContainerHandle",
    "open_container",
    "read_attributes",
    "read_reflectance_metadata",
    "read_map_info",
    "read_epsg_code",
    "read_band_wavelength",
    "slice_band",
    "validate_band_index",
    "BandRasterLoader",
    "load_band_raster",
]

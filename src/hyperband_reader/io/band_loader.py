"""
Hyperband Reader Band Loader

This module contains the loader that runs the whole single-band pipeline:
open, describe, slice, clean, reorient, georeference, assemble.
"""

from pathlib import Path
from typing import Optional, Union

from ..core.core_types import GeoRaster, ReaderOptions
from ..core.logging_config import get_logger
from .container import ContainerHandle, open_container
from .metadata import (
    read_reflectance_metadata, read_map_info, read_epsg_code, read_band_wavelength
)
from .band_slicer import slice_band
from ..processing.cleaning import clean_band
from ..processing.orientation import reorient
from ..processing.assembly import assemble_raster
from ..coordinates.extent import parse_map_info, resolve_plane_extent
from ..coordinates.projection import resolve_epsg

logger = get_logger('io.band_loader')

# ============================================================================
# Band Loader Class
# ============================================================================

class BandRasterLoader:
    """
    Single-band loader for one container file.

    Each call to load_band() opens its own handle and closes it before
    returning or raising, so a loader can be reused for many bands and
    nothing stays open between calls.
    """

    def __init__(self, path: Union[str, Path], options: Optional[ReaderOptions] = None):
        """
        Initialize the loader.

        Args:
            path: Container file path
            options: Container layout conventions
        """
        self.path = Path(path)
        self.options = options or ReaderOptions()

    def load_band(self, band_index: int) -> GeoRaster:
        """
        Extract one band as a georeferenced raster.

        Args:
            band_index: Zero-based band index

        Returns:
            GeoRaster: Cleaned plane in (y, x) order with extent and projection
        """
        logger.info("Extracting band %s from %s", band_index, self.path)
        with open_container(self.path) as handle:
            return self._run(handle, band_index)

    def _run(self, handle: ContainerHandle, band_index: int) -> GeoRaster:
        opts = self.options

        # Step 1: Describe the cube
        descriptor = handle.resolve_dataset(opts.reflectance_path)

        # Step 2: Read value conventions and the positional record
        metadata = read_reflectance_metadata(handle, descriptor.path, opts)
        map_info = parse_map_info(read_map_info(handle, opts.map_info_path, owner=descriptor.path))
        epsg = resolve_epsg(map_info, read_epsg_code(handle, opts.epsg_path))

        # Step 3: Slice exactly one plane
        plane = slice_band(handle, descriptor.path, band_index, descriptor.shape)
        wavelength = read_band_wavelength(handle, opts.wavelength_path, plane.attrs["band_index"])
        if wavelength is not None:
            plane.attrs["wavelength"] = wavelength

        # Step 4: Mask, then scale
        plane = clean_band(plane, metadata.no_data_value, metadata.scale_factor)

        # Step 5: Storage (x, y) to raster (y, x)
        plane = reorient(plane)

        # Step 6: Extent from the reoriented plane's column and row counts
        rectangle, projection = resolve_plane_extent(map_info, plane)
        logger.info(
            "Band %s: %d rows x %d cols, extent %s, EPSG %s",
            band_index, plane.sizes["y"], plane.sizes["x"], rectangle.as_bounds(), epsg
        )

        # Step 7: Bind
        return assemble_raster(plane, rectangle, projection, epsg)


def load_band_raster(
    path: Union[str, Path],
    band_index: int,
    options: Optional[ReaderOptions] = None
) -> GeoRaster:
    """Convenience function for BandRasterLoader(path, options).load_band(band_index)."""
    return BandRasterLoader(path, options).load_band(band_index)

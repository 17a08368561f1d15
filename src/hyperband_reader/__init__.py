"""
Hyperband Reader - single-band extraction from hyperspectral HDF5 cubes.

This package reads one band of a disk-resident (x, y, band) reflectance cube,
masks its no-data sentinel, rescales it to reflectance units, turns it into
row-major raster order and binds it to the projected extent described by the
container's map info record.

Key Features:
- Hyperslab reads: only the requested band plane is loaded
- Labelled (x, y) / (y, x) planes, so axis order is never implicit
- Map info parsing with UTM to EPSG resolution
- rasterio transform and CRS for the assembled raster

Quick Start:
    >>> import hyperband_reader as hbr
    >>> raster = hbr.extract_band("/path/to/cube.h5", band_index=55)
    >>> raster.extent.as_bounds()
    >>> raster.crs
    >>>
    >>> # Projected coordinates attached, ready for xarray tooling
    >>> da = hbr.extract_band_dataarray("/path/to/cube.h5", 55)
"""

__version__ = "1.0.0"
__author__ = "Hyperband Reader Development Team"

# Import main interface functions
from .main import (
    extract_band,
    extract_band_dataarray,
    get_cube_info,
    list_band_wavelengths,
)

# Import pipeline building blocks
from .io import (
    ContainerHandle,
    open_container,
    read_attributes,
    read_reflectance_metadata,
    read_map_info,
    slice_band,
    BandRasterLoader,
)
from .processing import clean_band, reorient, assemble_raster
from .coordinates import parse_map_info, resolve_extent, resolve_crs

# Import data classes
from .core.core_types import (
    DatasetDescriptor,
    ReflectanceMetadata,
    MapInfo,
    BoundingRectangle,
    GeoRaster,
    ReaderOptions,
)

# Import exceptions for error handling
from .core.exceptions import (
    HyperbandReaderError,
    ContainerNotFoundError,
    ContainerFormatError,
    ContainerClosedError,
    ContainerIOError,
    DatasetPathNotFoundError,
    AttributeNotFoundError,
    BandIndexError,
    MalformedDescriptorError,
    InvalidGeometryError,
    ProjectionError,
    DataProcessingError,
)

# Import logging configuration
from .core.logging_config import setup_logging, set_log_level

# Define what gets imported with "from hyperband_reader import *"
__all__ = [
    # Version info
    '__version__',

    # Main interface functions
    'extract_band',
    'extract_band_dataarray',
    'get_cube_info',
    'list_band_wavelengths',

    # Pipeline building blocks
    'ContainerHandle',
    'open_container',
    'read_attributes',
    'read_reflectance_metadata',
    'read_map_info',
    'slice_band',
    'BandRasterLoader',
    'clean_band',
    'reorient',
    'assemble_raster',
    'parse_map_info',
    'resolve_extent',
    'resolve_crs',

    # Data classes
    'DatasetDescriptor',
    'ReflectanceMetadata',
    'MapInfo',
    'BoundingRectangle',
    'GeoRaster',
    'ReaderOptions',

    # Exception classes
    'HyperbandReaderError',
    'ContainerNotFoundError',
    'ContainerFormatError',
    'ContainerClosedError',
    'ContainerIOError',
    'DatasetPathNotFoundError',
    'AttributeNotFoundError',
    'BandIndexError',
    'MalformedDescriptorError',
    'InvalidGeometryError',
    'ProjectionError',
    'DataProcessingError',

    # Logging configuration
    'setup_logging',
    'set_log_level',
]

import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

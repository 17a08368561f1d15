"""
Hyperband Reader Information Utilities

This module provides functions for querying a container's cube layout and
georeferencing without reading band data.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.core_types import ReaderOptions
from ..core.exceptions import DatasetPathNotFoundError


# ============================================================================
# Cube Information
# ============================================================================

def get_cube_info(path: Union[str, Path], options: Optional[ReaderOptions] = None) -> Dict:
    """
    Summarize a container's cube.

    Args:
        path: Container file path
        options: Container layout conventions

    Returns:
        Dict: Cube information: dataset path, shape, dtype, band count, value
        conventions, map info fields, full-plane extent and EPSG code

    Examples:
        >>> info = get_cube_info("/path/to/cube.h5")
        >>> print(f"{info['n_bands']} bands, {info['width']} x {info['height']} pixels")
        >>> print(f"Extent: {info['extent']}")
    """
    from ..io.container import open_container
    from ..io.metadata import read_reflectance_metadata, read_map_info, read_epsg_code
    from ..coordinates.extent import parse_map_info, resolve_extent
    from ..coordinates.projection import resolve_epsg

    options = options or ReaderOptions()
    with open_container(path) as handle:
        descriptor = handle.resolve_dataset(options.reflectance_path)
        metadata = read_reflectance_metadata(handle, descriptor.path, options)
        map_info = parse_map_info(read_map_info(handle, options.map_info_path, owner=descriptor.path))
        epsg = resolve_epsg(map_info, read_epsg_code(handle, options.epsg_path))

    # Storage axis 0 counts columns, axis 1 rows
    width, height = descriptor.plane_shape
    rectangle, projection = resolve_extent(map_info, width, height)

    return {
        'dataset_path': descriptor.path,
        'shape': descriptor.shape,
        'dtype': str(descriptor.dtype),
        'n_bands': descriptor.n_bands,
        'width': width,
        'height': height,
        'scale_factor': metadata.scale_factor,
        'no_data_value': metadata.no_data_value,
        'projection': projection,
        'zone': map_info.zone,
        'resolution': (map_info.xres, map_info.yres),
        'extent': rectangle.as_bounds(),
        'epsg': epsg,
    }


def list_band_wavelengths(path: Union[str, Path], options: Optional[ReaderOptions] = None) -> List[float]:
    """
    List band centre wavelengths in band-index order.

    Raises:
        DatasetPathNotFoundError: If the container has no wavelength vector
    """
    from ..io.container import open_container

    options = options or ReaderOptions()
    if not options.wavelength_path:
        raise DatasetPathNotFoundError("<wavelength>")
    with open_container(path) as handle:
        values = handle.read_value(options.wavelength_path)
    return [float(v) for v in values.reshape(-1)]

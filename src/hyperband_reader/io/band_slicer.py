"""
Hyperband Reader Band Slicing

This module reads a single band plane out of a band-last cube. Only the
plane is transferred; the cube is never materialized.
"""

import numbers
from typing import Optional, Sequence

import xarray as xr

from ..core.config import STORAGE_DIMS, X_DIM, Y_DIM
from ..core.exceptions import BandIndexError
from ..core.logging_config import get_logger
from .container import ContainerHandle

logger = get_logger('io.band_slicer')


# ============================================================================
# Band Index Validation
# ============================================================================

def validate_band_index(band_index, n_bands: int) -> int:
    """
    Check that a band index addresses the cube's band axis.

    Negative indices are rejected rather than counted from the end.

    Raises:
        BandIndexError: If the index is not an integer in [0, n_bands)
    """
    if isinstance(band_index, bool) or not isinstance(band_index, numbers.Integral):
        raise BandIndexError(band_index, n_bands)
    if not 0 <= band_index < n_bands:
        raise BandIndexError(band_index, n_bands)
    return int(band_index)


# ============================================================================
# Slicing
# ============================================================================

def slice_band(
    handle: ContainerHandle,
    dataset_path: str,
    band_index: int,
    shape: Optional[Sequence[int]] = None
) -> xr.DataArray:
    """
    Read one band plane from a (x, y, band) cube.

    The returned plane keeps storage order: its first dim is ``x`` (the
    column axis of the physical layout), its second ``y``. Use
    processing.orientation.reorient() to get row-major raster order.

    Args:
        handle: Open container
        dataset_path: Cube dataset path
        band_index: Zero-based band index
        shape: Cube shape (x, y, band); resolved from the container if None

    Returns:
        xr.DataArray: Raw plane with dims (x, y) and shape (shape[0], shape[1])

    Raises:
        BandIndexError: If band_index is outside [0, shape[2]); nothing is read
        ContainerIOError: If the read fails
    """
    if shape is None:
        shape = handle.resolve_dataset(dataset_path).shape
    band_index = validate_band_index(band_index, shape[2])

    logger.debug("Reading band %d of %s (plane %dx%d)", band_index, dataset_path, shape[0], shape[1])
    values = handle.read_hyperslab(dataset_path, (slice(None), slice(None), band_index))

    return xr.DataArray(
        values,
        dims=(X_DIM, Y_DIM),
        name=dataset_path.rsplit("/", 1)[-1],
        attrs={
            "band_index": band_index,
            "storage_axis_order": ",".join(STORAGE_DIMS),
        },
    )

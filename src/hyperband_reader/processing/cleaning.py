"""
Hyperband Reader Value Cleaning

This module masks the no-data sentinel and rescales stored values to
reflectance units.
"""

import math

import xarray as xr

from ..core.config import CLEANED_DTYPE, MISSING_VALUE
from ..core.exceptions import DataProcessingError

# ============================================================================
# Cleaning
# ============================================================================

def clean_band(
    plane: xr.DataArray,
    no_data_value: float,
    scale_factor: float
) -> xr.DataArray:
    """
    Mask sentinel pixels, then divide the remaining ones by the scale factor.

    Masking has to come first: a scaled sentinel would be a finite number
    that looks like real data. Values outside [0, 1] after scaling are kept.

    Args:
        plane: Raw band plane
        no_data_value: Sentinel; elements exactly equal to it become NaN
        scale_factor: Positive divisor

    Returns:
        xr.DataArray: New float plane with the same dims; the input is untouched

    Raises:
        DataProcessingError: If scale_factor is not a positive finite number
    """
    if not math.isfinite(scale_factor) or scale_factor <= 0:
        raise DataProcessingError("cleaning", f"scale factor must be positive, got {scale_factor}")

    values = plane.astype(CLEANED_DTYPE)
    masked = values.where(plane != no_data_value, MISSING_VALUE)
    cleaned = masked / scale_factor

    cleaned.name = plane.name
    cleaned.attrs = dict(plane.attrs)
    cleaned.attrs.update({"scale_factor": scale_factor, "no_data_value": no_data_value})
    return cleaned

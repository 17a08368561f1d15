"""
Hyperband Reader Data Processing

This package provides value cleaning, axis reorientation and raster assembly.
"""

from .cleaning import clean_band
from .orientation import reorient, to_raster_order
from .assembly import assemble_raster

__all__ = [
    "clean_band",
    "reorient",
    "to_raster_order",
    "assemble_raster",
]

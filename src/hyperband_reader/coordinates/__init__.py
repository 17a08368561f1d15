"""
Hyperband Reader Coordinates

This package parses map info records, computes projected extents and
resolves projections to coordinate reference systems.
"""

from .extent import parse_map_info, resolve_extent, resolve_plane_extent
from .projection import utm_epsg_code, resolve_epsg, resolve_crs

__all__ = [
    "parse_map_info",
    "resolve_extent",
    "resolve_plane_extent",
    "utm_epsg_code",
    "resolve_epsg",
    "resolve_crs",
]

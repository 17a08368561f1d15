"""
Hyperband Reader Projection Resolution

This module turns projection identifiers into coordinate reference systems.
Containers either carry an explicit EPSG code or only a map info record, in
which case UTM zones on a known datum are translated to their EPSG code.
"""

from typing import Optional

from rasterio.crs import CRS
from rasterio.errors import CRSError

from ..core.config import UTM_PROJECTION_TAGS, UTM_EPSG_BASE
from ..core.core_types import MapInfo
from ..core.exceptions import ProjectionError
from ..core.logging_config import get_logger

logger = get_logger('coordinates.projection')


def utm_epsg_code(zone: Optional[int], hemisphere: Optional[str], datum: Optional[str]) -> Optional[int]:
    """
    EPSG code of a UTM zone.

    Args:
        zone: UTM zone, 1 to 60
        hemisphere: "North" or "South"
        datum: "WGS-84" or "NAD-83" (NAD-83 is defined for the north only)

    Returns:
        Optional[int]: e.g. 32611 for zone 11 North on WGS-84, or None if the
        combination is unknown
    """
    if zone is None or hemisphere is None or datum is None:
        return None
    if not 1 <= zone <= 60:
        return None
    base = UTM_EPSG_BASE.get((datum.upper(), hemisphere.lower()))
    if base is None:
        return None
    return base + zone


def resolve_epsg(map_info: MapInfo, epsg_code: Optional[int] = None) -> Optional[int]:
    """
    Choose the EPSG code for a raster.

    An explicit code recorded in the container wins. Otherwise UTM map info
    records are translated; other projections yield None.
    """
    if epsg_code is not None:
        return int(epsg_code)
    if map_info.projection.upper() in UTM_PROJECTION_TAGS:
        code = utm_epsg_code(map_info.zone, map_info.hemisphere, map_info.datum)
        if code is None:
            logger.warning(
                "Cannot derive EPSG code from UTM zone=%s hemisphere=%s datum=%s",
                map_info.zone, map_info.hemisphere, map_info.datum
            )
        return code
    return None


def resolve_crs(epsg: Optional[int]) -> CRS:
    """
    Build a rasterio CRS from an EPSG code.

    Raises:
        ProjectionError: If the code is missing or unknown
    """
    if epsg is None:
        raise ProjectionError(epsg, "raster has no EPSG code")
    try:
        return CRS.from_epsg(epsg)
    except CRSError as e:
        raise ProjectionError(epsg, str(e)) from e

"""
Hyperband Reader Geographic Extent

This module parses the map info record and derives the projected bounding
rectangle of a band plane from it.

The record is an ENVI-style comma-delimited string, e.g.

    UTM,1.000,1.000,256500.000,4112500.000,1.000,1.000,11,North,WGS-84,units=Meters

Field positions are a fixed convention of the format and are counted from
one: origin X is field 4, origin Y field 5, pixel width field 6 and pixel
height field 7. Producers that lay the record out differently are not
supported; count and type of the fields are checked, not their meaning.
"""

import math
from typing import List, Optional, Sequence, Tuple

import xarray as xr

from ..core.config import (
    MAP_INFO_DELIMITER, MAP_INFO_MIN_FIELDS,
    MAP_INFO_PROJECTION_FIELD, MAP_INFO_REFERENCE_X_FIELD, MAP_INFO_REFERENCE_Y_FIELD,
    MAP_INFO_ORIGIN_X_FIELD, MAP_INFO_ORIGIN_Y_FIELD,
    MAP_INFO_XRES_FIELD, MAP_INFO_YRES_FIELD,
    MAP_INFO_ZONE_FIELD, MAP_INFO_HEMISPHERE_FIELD, MAP_INFO_DATUM_FIELD,
    X_DIM, Y_DIM,
)
from ..core.core_types import BoundingRectangle, MapInfo, MapInfoSource, ProjectionId
from ..core.exceptions import MalformedDescriptorError
from ..core.logging_config import get_logger

logger = get_logger('coordinates.extent')


# ============================================================================
# Tokenizing
# ============================================================================

def _tokenize(raw: MapInfoSource) -> Tuple[List[str], str]:
    """Split a record into stripped tokens; return them with the text form."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        text = raw.strip()
        # ENVI headers wrap the record in braces
        if text.startswith("{") and text.endswith("}"):
            text = text[1:-1]
        tokens = [t.strip() for t in text.split(MAP_INFO_DELIMITER)]
    else:
        tokens = [str(t).strip() for t in raw]
        text = MAP_INFO_DELIMITER.join(tokens)
    return tokens, text


def _field(tokens: Sequence[str], position: int) -> Optional[str]:
    """Token at a position counted from one, or None past the end."""
    if position > len(tokens):
        return None
    return tokens[position - 1]


def _number(tokens: Sequence[str], position: int, label: str, text: str) -> float:
    token = _field(tokens, position)
    if not token:
        raise MalformedDescriptorError(text, f"{label} (field {position}) is missing")
    try:
        value = float(token)
    except ValueError:
        raise MalformedDescriptorError(text, f"{label} (field {position}) is not numeric: {token!r}")
    if not math.isfinite(value):
        raise MalformedDescriptorError(text, f"{label} (field {position}) is not finite: {token!r}")
    return value


# ============================================================================
# Parsing
# ============================================================================

def parse_map_info(raw: MapInfoSource) -> MapInfo:
    """
    Parse a map info record.

    Args:
        raw: Comma-delimited string (or bytes), or its ordered tokens

    Returns:
        MapInfo: Parsed record

    Raises:
        MalformedDescriptorError: If fewer than 8 fields are present, a
            required field is not numeric, or a pixel size is not positive
    """
    if raw is None:
        raise MalformedDescriptorError("", "record is missing")
    tokens, text = _tokenize(raw)
    if len(tokens) < MAP_INFO_MIN_FIELDS:
        raise MalformedDescriptorError(
            text, f"expected at least {MAP_INFO_MIN_FIELDS} fields, got {len(tokens)}"
        )

    projection = _field(tokens, MAP_INFO_PROJECTION_FIELD)
    if not projection:
        raise MalformedDescriptorError(text, "projection (field 1) is missing")

    zone_token = _field(tokens, MAP_INFO_ZONE_FIELD)
    zone = int(zone_token) if zone_token and zone_token.isdigit() else None

    hemisphere = _field(tokens, MAP_INFO_HEMISPHERE_FIELD)
    if hemisphere is not None and hemisphere.lower() not in ("north", "south"):
        hemisphere = None

    datum = _field(tokens, MAP_INFO_DATUM_FIELD)
    if datum is not None and "=" in datum:
        datum = None

    units = None
    for token in tokens:
        key, sep, value = token.partition("=")
        if sep and key.strip().lower() == "units":
            units = value.strip()

    map_info = MapInfo(
        projection=projection,
        reference_pixel=(
            _number(tokens, MAP_INFO_REFERENCE_X_FIELD, "reference pixel x", text),
            _number(tokens, MAP_INFO_REFERENCE_Y_FIELD, "reference pixel y", text),
        ),
        origin_x=_number(tokens, MAP_INFO_ORIGIN_X_FIELD, "origin x", text),
        origin_y=_number(tokens, MAP_INFO_ORIGIN_Y_FIELD, "origin y", text),
        xres=_number(tokens, MAP_INFO_XRES_FIELD, "pixel width", text),
        yres=_number(tokens, MAP_INFO_YRES_FIELD, "pixel height", text),
        zone=zone,
        hemisphere=hemisphere,
        datum=datum,
        units=units,
        tokens=tuple(tokens),
    )
    logger.debug("Parsed map info: %s", map_info)
    return map_info


# ============================================================================
# Extent
# ============================================================================

def resolve_extent(
    map_info: MapInfoSource | MapInfo,
    width: int,
    height: int
) -> Tuple[BoundingRectangle, ProjectionId]:
    """
    Compute the bounding rectangle of a raster from its map info.

    ``width`` and ``height`` are the column and row counts of the plane in
    raster order, i.e. after reorientation. Passing the storage-order
    extents instead swaps the rectangle's sides.

    Args:
        map_info: Parsed record, or a raw record to parse
        width: Number of columns
        height: Number of rows

    Returns:
        Tuple[BoundingRectangle, ProjectionId]: Extent and projection tag

    Raises:
        MalformedDescriptorError: If a raw record cannot be parsed
    """
    if not isinstance(map_info, MapInfo):
        map_info = parse_map_info(map_info)

    rectangle = BoundingRectangle.from_origin(
        map_info.origin_x, map_info.origin_y,
        map_info.xres, map_info.yres,
        width, height,
    )
    return rectangle, map_info.projection


def resolve_plane_extent(
    map_info: MapInfoSource | MapInfo,
    plane: xr.DataArray
) -> Tuple[BoundingRectangle, ProjectionId]:
    """Like resolve_extent(), taking the column and row counts from a labelled plane."""
    return resolve_extent(map_info, plane.sizes[X_DIM], plane.sizes[Y_DIM])

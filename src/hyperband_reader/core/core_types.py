"""
Hyperband Reader Type Definitions and Data Classes

This module defines all data structures and type aliases used throughout the codebase
for better type safety and code clarity.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union, Sequence
import math

import numpy as np
import xarray as xr
from affine import Affine
from rasterio.transform import from_origin

from .config import (
    CUBE_RANK, STORAGE_DIMS, RASTER_DIMS, X_DIM, Y_DIM,
    DEFAULT_REFLECTANCE_PATH, DEFAULT_MAP_INFO_PATH, DEFAULT_EPSG_PATH,
    DEFAULT_WAVELENGTH_PATH, SCALE_FACTOR_ATTRS, NO_DATA_ATTRS,
)
from .exceptions import (
    ContainerFormatError, MalformedDescriptorError, InvalidGeometryError
)

# ============================================================================
# Type Aliases
# ============================================================================

CubeShape = Tuple[int, int, int]
ProjectionId = str
MapInfoSource = Union[str, bytes, Sequence[str]]

# ============================================================================
# Container Descriptors
# ============================================================================

@dataclass(frozen=True)
class DatasetDescriptor:
    """
    Shape and type of a cube dataset, resolved without reading its values.

    Attributes:
        path: Absolute path of the dataset inside the container
        shape: (x, y, band) extents; x is the fast, column axis
        dtype: Stored element type
    """
    path: str
    shape: CubeShape
    dtype: np.dtype

    def __post_init__(self):
        """Validate rank and extents."""
        if len(self.shape) != CUBE_RANK:
            raise ContainerFormatError(
                self.path,
                f"expected a {CUBE_RANK}D cube {STORAGE_DIMS}, got shape {tuple(self.shape)}"
            )
        if any(int(n) <= 0 for n in self.shape):
            raise ContainerFormatError(self.path, f"empty axis in shape {tuple(self.shape)}")
        object.__setattr__(self, "shape", tuple(int(n) for n in self.shape))
        object.__setattr__(self, "dtype", np.dtype(self.dtype))

    @property
    def n_bands(self) -> int:
        return self.shape[2]

    @property
    def storage_dims(self) -> Tuple[str, str, str]:
        return STORAGE_DIMS

    @property
    def plane_shape(self) -> Tuple[int, int]:
        """Shape of one band plane in storage order (x, y)."""
        return self.shape[0], self.shape[1]


@dataclass(frozen=True)
class ReflectanceMetadata:
    """
    Per-cube value conventions.

    Attributes:
        scale_factor: Divisor that brings stored values to reflectance units
        no_data_value: Sentinel marking pixels without a measurement
    """
    scale_factor: float
    no_data_value: float

    def __post_init__(self):
        """Validate that normalization is well defined."""
        if not math.isfinite(self.scale_factor) or self.scale_factor <= 0:
            raise ContainerFormatError(
                "scale factor", f"must be a positive finite number, got {self.scale_factor}"
            )

# ============================================================================
# Positional Descriptor
# ============================================================================

@dataclass(frozen=True)
class MapInfo:
    """
    Parsed ENVI-style "map info" record.

    Attributes:
        projection: Projection tag, e.g. "UTM"
        reference_pixel: Pixel (x, y) the origin refers to, counted from one
        origin_x: Easting of the upper-left corner
        origin_y: Northing of the upper-left corner
        xres: Pixel width in projected units
        yres: Pixel height in projected units
        zone: UTM zone, when given
        hemisphere: "North" or "South", when given
        datum: Datum name, e.g. "WGS-84"
        units: Value of the "units=" key, e.g. "Meters"
        tokens: All tokens as they appeared in the record
    """
    projection: ProjectionId
    reference_pixel: Tuple[float, float]
    origin_x: float
    origin_y: float
    xres: float
    yres: float
    zone: Optional[int] = None
    hemisphere: Optional[str] = None
    datum: Optional[str] = None
    units: Optional[str] = None
    tokens: Tuple[str, ...] = ()

    def __post_init__(self):
        if not (self.xres > 0 and self.yres > 0):
            raise MalformedDescriptorError(
                ",".join(self.tokens), f"pixel size must be positive, got ({self.xres}, {self.yres})"
            )

# ============================================================================
# Geometry
# ============================================================================

@dataclass(frozen=True)
class BoundingRectangle:
    """
    Projected extent of a raster.

    from_origin() is the supported constructor: it derives every corner from
    the upper-left origin, the pixel size and the plane size. Direct
    construction only checks that the corners are finite and not inverted.

    Attributes:
        x_min: Left edge
        x_max: Right edge
        y_min: Bottom edge
        y_max: Top edge
    """
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self):
        corners = (self.x_min, self.x_max, self.y_min, self.y_max)
        if not all(math.isfinite(c) for c in corners):
            raise InvalidGeometryError(f"non-finite corner in {corners}")
        if self.x_max < self.x_min or self.y_max < self.y_min:
            raise InvalidGeometryError(f"inverted corners in {corners}")

    @classmethod
    def from_origin(
        cls,
        origin_x: float,
        origin_y: float,
        xres: float,
        yres: float,
        width: int,
        height: int
    ) -> "BoundingRectangle":
        """
        Derive the extent from an upper-left origin.

        Y decreases downward from the origin, so the origin gives y_max and
        the height is subtracted to reach y_min.
        """
        return cls(
            x_min=origin_x,
            x_max=origin_x + width * xres,
            y_min=origin_y - height * yres,
            y_max=origin_y,
        )

    @property
    def width_units(self) -> float:
        return self.x_max - self.x_min

    @property
    def height_units(self) -> float:
        return self.y_max - self.y_min

    @property
    def is_well_formed(self) -> bool:
        return self.x_min < self.x_max and self.y_min < self.y_max

    def as_bounds(self) -> Tuple[float, float, float, float]:
        """Return (left, bottom, right, top), the rasterio bounds order."""
        return self.x_min, self.y_min, self.x_max, self.y_max

# ============================================================================
# Georeferenced Raster
# ============================================================================

@dataclass(frozen=True, eq=False)
class GeoRaster:
    """
    A cleaned band plane bound to its projected geometry.

    Attributes:
        data: 2D plane with dims (y, x), missing pixels as NaN
        extent: Projected bounding rectangle
        projection: Projection tag from the map info record
        epsg: EPSG code of the coordinate reference system, when known
    """
    data: xr.DataArray
    extent: BoundingRectangle
    projection: ProjectionId
    epsg: Optional[int] = None

    @property
    def height(self) -> int:
        return self.data.sizes[Y_DIM]

    @property
    def width(self) -> int:
        return self.data.sizes[X_DIM]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def resolution(self) -> Tuple[float, float]:
        """Pixel size (xres, yres) in projected units."""
        return self.extent.width_units / self.width, self.extent.height_units / self.height

    @property
    def transform(self) -> Affine:
        """Affine transform from (col, row) to projected (x, y)."""
        xres, yres = self.resolution
        return from_origin(self.extent.x_min, self.extent.y_max, xres, yres)

    @property
    def crs(self):
        """rasterio CRS for the EPSG code."""
        from ..coordinates.projection import resolve_crs
        return resolve_crs(self.epsg)

    def to_dataarray(self) -> xr.DataArray:
        """
        Copy of the data with pixel-centre coordinates in projected units.

        Returns:
            xr.DataArray: dims (y, x), with 'crs' and 'transform' attributes
        """
        xres, yres = self.resolution
        x_coord = self.extent.x_min + (np.arange(self.width) + 0.5) * xres
        y_coord = self.extent.y_max - (np.arange(self.height) + 0.5) * yres

        out = self.data.transpose(*RASTER_DIMS).copy()
        out = out.assign_coords({
            X_DIM: xr.DataArray(x_coord, dims=[X_DIM], attrs={"units": "projected"}),
            Y_DIM: xr.DataArray(y_coord, dims=[Y_DIM], attrs={"units": "projected"}),
        })
        out.attrs.update({
            "projection": self.projection,
            "transform": tuple(self.transform)[:6],
        })
        if self.epsg is not None:
            out.attrs["crs"] = f"EPSG:{self.epsg}"
        return out

# ============================================================================
# Reader Options
# ============================================================================

@dataclass
class ReaderOptions:
    """
    Where to find things inside the container.

    Paths that are not found verbatim are searched for by their final
    component, so "Reflectance" also finds "/SITE/Reflectance".

    Attributes:
        reflectance_path: Cube dataset path
        map_info_path: Map info dataset path (or attribute name on the cube)
        epsg_path: Optional EPSG code dataset path
        wavelength_path: Optional band wavelength vector path
        scale_factor_attrs: Attribute names tried for the scale factor
        no_data_attrs: Attribute names tried for the no-data sentinel
    """
    reflectance_path: str = DEFAULT_REFLECTANCE_PATH
    map_info_path: str = DEFAULT_MAP_INFO_PATH
    epsg_path: Optional[str] = DEFAULT_EPSG_PATH
    wavelength_path: Optional[str] = DEFAULT_WAVELENGTH_PATH
    scale_factor_attrs: Tuple[str, ...] = field(default_factory=lambda: SCALE_FACTOR_ATTRS)
    no_data_attrs: Tuple[str, ...] = field(default_factory=lambda: NO_DATA_ATTRS)

    def __post_init__(self):
        """Validate reader options."""
        if not self.reflectance_path:
            raise ValueError("reflectance_path must not be empty")
        if not self.map_info_path:
            raise ValueError("map_info_path must not be empty")
        if isinstance(self.scale_factor_attrs, str):
            self.scale_factor_attrs = (self.scale_factor_attrs,)
        if isinstance(self.no_data_attrs, str):
            self.no_data_attrs = (self.no_data_attrs,)
        if not self.scale_factor_attrs or not self.no_data_attrs:
            raise ValueError("attribute name lists must not be empty")

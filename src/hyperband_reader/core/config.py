"""
Hyperband Reader Configuration and Constants

This module centralizes the conventions of the hyperspectral container format
(dataset paths, attribute names, map info layout) together with dimension
names and default processing parameters.
"""

import numpy as np

# ============================================================================
# Container Paths
# ============================================================================

# Conventional names; ReaderOptions overrides them per call
DEFAULT_REFLECTANCE_PATH = "Reflectance"
DEFAULT_MAP_INFO_PATH = "map info"
DEFAULT_EPSG_PATH = "EPSG Code"
DEFAULT_WAVELENGTH_PATH = "wavelength"

# ============================================================================
# Attribute Names
# ============================================================================

# Checked in order; the first one present on the dataset wins
SCALE_FACTOR_ATTRS = ("Scale_Factor", "Scale Factor", "scale_factor")
NO_DATA_ATTRS = ("data ignore value", "Data_Ignore_Value", "_FillValue")

# ============================================================================
# Dimension Names
# ============================================================================

X_DIM = "x"
Y_DIM = "y"
BAND_DIM = "band"

# Cube layout on disk: column (fast) axis first, band last
STORAGE_DIMS = (X_DIM, Y_DIM, BAND_DIM)
CUBE_RANK = len(STORAGE_DIMS)

# Layout expected by raster consumers: row first
RASTER_DIMS = (Y_DIM, X_DIM)

# ============================================================================
# Map Info Layout
# ============================================================================

# ENVI "map info" positions, counted from one:
# 1 projection, 2-3 reference pixel, 4-5 origin, 6-7 pixel size,
# 8 zone, 9 hemisphere, 10 datum, then key=value pairs (units, rotation)
MAP_INFO_DELIMITER = ","
MAP_INFO_MIN_FIELDS = 8
MAP_INFO_PROJECTION_FIELD = 1
MAP_INFO_REFERENCE_X_FIELD = 2
MAP_INFO_REFERENCE_Y_FIELD = 3
MAP_INFO_ORIGIN_X_FIELD = 4
MAP_INFO_ORIGIN_Y_FIELD = 5
MAP_INFO_XRES_FIELD = 6
MAP_INFO_YRES_FIELD = 7
MAP_INFO_ZONE_FIELD = 8
MAP_INFO_HEMISPHERE_FIELD = 9
MAP_INFO_DATUM_FIELD = 10

# ============================================================================
# Projection
# ============================================================================

UTM_PROJECTION_TAGS = ("UTM", "UTM_WGS84", "UTM WGS84")
UTM_EPSG_BASE = {
    ("WGS-84", "north"): 32600,
    ("WGS-84", "south"): 32700,
    ("NAD-83", "north"): 26900,
}

# ============================================================================
# Default Processing Parameters
# ============================================================================

CLEANED_DTYPE = np.float64
MISSING_VALUE = np.nan

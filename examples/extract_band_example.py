"""
Example: Extracting a Band with Hyperband Reader

This example writes a small synthetic reflectance cube, inspects it without
reading band data, and extracts one band as a georeferenced raster.
"""

import tempfile
from pathlib import Path

import h5py
import numpy as np

import hyperband_reader as hbr

# ============================================================================
# Example 1: Build a Synthetic Container
# ============================================================================

print("="*70)
print("Example 1: Build a Synthetic Container")
print("="*70)

workdir = Path(tempfile.mkdtemp(prefix="hyperband_"))
cube_path = workdir / "synthetic.h5"

rng = np.random.default_rng(0)
cube = rng.integers(0, 10000, size=(40, 30, 12), dtype=np.int16)   # (x, y, band)
cube[:5, :5, :] = -9999                                            # no-data corner

with h5py.File(cube_path, "w") as f:
    site = f.create_group("SJER")
    refl = site.create_dataset("Reflectance", data=cube, chunks=(40, 30, 1))
    refl.attrs["Scale_Factor"] = 10000.0
    refl.attrs["data ignore value"] = -9999.0
    site["map info"] = "UTM,1.000,1.000,256500.000,4112500.000,1.000,1.000,11,North,WGS-84,units=Meters"
    site.create_dataset("wavelength", data=np.linspace(380.0, 2510.0, cube.shape[2]))

print(f"\nWrote {cube.shape} cube to {cube_path}")

# ============================================================================
# Example 2: Inspect the Cube (headers only)
# ============================================================================

print("\n" + "="*70)
print("Example 2: Inspect the Cube")
print("="*70)

info = hbr.get_cube_info(cube_path)
print(f"\nDataset:    {info['dataset_path']}")
print(f"Size:       {info['width']} cols x {info['height']} rows x {info['n_bands']} bands")
print(f"Scale:      {info['scale_factor']}  no-data: {info['no_data_value']}")
print(f"Extent:     {info['extent']}  EPSG: {info['epsg']}")

# ============================================================================
# Example 3: Extract One Band
# ============================================================================

print("\n" + "="*70)
print("Example 3: Extract One Band")
print("="*70)

hbr.setup_logging("INFO")
raster = hbr.extract_band(cube_path, band_index=6)

print(f"\nWavelength: {raster.data.attrs['wavelength']:.1f} nm")
print(f"Shape:      {raster.shape} (rows, cols)")
print(f"Missing:    {int(np.isnan(raster.data.values).sum())} pixels")
print(f"Mean refl.: {float(raster.data.mean()):.3f}")
print(f"Transform:  {raster.transform}")
print(f"CRS:        {raster.crs}")

# ============================================================================
# Example 4: As an xarray DataArray with Projected Coordinates
# ============================================================================

print("\n" + "="*70)
print("Example 4: DataArray with Projected Coordinates")
print("="*70)

da = raster.to_dataarray()
print(da)
print(f"\nPixel at easting 256510.5, northing 4112489.5: {float(da.sel(x=256510.5, y=4112489.5)):.4f}")

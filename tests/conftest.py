"""
Hyperband Reader Test Configuration

Shared pytest fixtures: small HDF5 cubes written with h5py.
"""

from pathlib import Path

import h5py
import numpy as np
import pytest

MAP_INFO = "UTM,1.000,1.000,271000.000,4112000.000,1.000,1.000,11,North,WGS-84,units=Meters"
NO_DATA = -9999
SCALE = 10000.0

# Band 1 of the (3, 2, 3) scenario cube, indexed [x, y]
BAND1 = np.array([[5000, -9999], [2000, 3000], [4000, 1000]], dtype=np.int16)


def scenario_cube() -> np.ndarray:
    cube = np.zeros((3, 2, 3), dtype=np.int16)
    cube[:, :, 0] = np.arange(6, dtype=np.int16).reshape(3, 2) * 100
    cube[:, :, 1] = BAND1
    cube[:, :, 2] = np.array([[-9999, 10000], [12000, 0], [1, 2]], dtype=np.int16)
    return cube


def write_cube(
    path,
    cube=None,
    group=None,
    map_info=MAP_INFO,
    map_info_as_attribute=False,
    attrs=None,
    wavelengths=(400.0, 405.0, 410.0),
    epsg=None,
):
    """Write a container laid out like a reflectance product."""
    cube = scenario_cube() if cube is None else cube
    attrs = {"Scale_Factor": SCALE, "data ignore value": float(NO_DATA)} if attrs is None else attrs
    path = Path(path)
    with h5py.File(path, "w") as f:
        root = f.create_group(group) if group else f
        ds = root.create_dataset("Reflectance", data=cube)
        for key, value in attrs.items():
            ds.attrs[key] = value
        if map_info is not None:
            if map_info_as_attribute:
                ds.attrs["map info"] = map_info
            else:
                root["map info"] = map_info
        if wavelengths is not None:
            root.create_dataset("wavelength", data=np.asarray(wavelengths, dtype="f4"))
        if epsg is not None:
            root["EPSG Code"] = str(epsg)
    return path


@pytest.fixture
def cube_file(tmp_path):
    """The (3, 2, 3) scenario container"""
    return write_cube(tmp_path / "cube.h5")


@pytest.fixture
def nested_cube_file(tmp_path):
    """Scenario container with everything under a site group"""
    return write_cube(tmp_path / "site.h5", group="SJER", epsg=32611)


@pytest.fixture
def failing_cube_reads(monkeypatch):
    """Make every 3D selection on an h5py dataset fail as a damaged file would"""
    original = h5py.Dataset.__getitem__

    def failing(self, args, *rest, **kwargs):
        if isinstance(args, tuple) and len(args) == 3:
            raise OSError("Can't read data (inflate() failed)")
        return original(self, args, *rest, **kwargs)

    monkeypatch.setattr(h5py.Dataset, "__getitem__", failing)

"""
Tests for attribute and descriptor reads
"""

import h5py
import pytest

from hyperband_reader.core.core_types import ReaderOptions
from hyperband_reader.core.exceptions import (
    AttributeNotFoundError,
    ContainerFormatError,
)
from hyperband_reader.io.container import open_container
from hyperband_reader.io.metadata import (
    read_attributes,
    read_band_wavelength,
    read_epsg_code,
    read_map_info,
    read_reflectance_metadata,
)

from conftest import MAP_INFO, write_cube


class TestReadAttributes:
    """Raw attribute access"""

    def test_decoded_values(self, cube_file):
        with open_container(cube_file) as handle:
            attrs = read_attributes(handle, "Reflectance")
        assert attrs == {"Scale_Factor": 10000.0, "data ignore value": -9999.0}
        assert isinstance(attrs["Scale_Factor"], float)

    def test_required_missing(self, cube_file):
        with open_container(cube_file) as handle:
            with pytest.raises(AttributeNotFoundError) as exc_info:
                read_attributes(handle, "Reflectance", required=["Band_Window_1_Nanometers"])
        assert exc_info.value.missing == ["Band_Window_1_Nanometers"]

    def test_no_attributes(self, tmp_path):
        path = write_cube(tmp_path / "bare.h5", attrs={})
        with open_container(path) as handle:
            with pytest.raises(AttributeNotFoundError):
                read_attributes(handle, "Reflectance")

    def test_bytes_decoded(self, tmp_path):
        path = write_cube(tmp_path / "b.h5", attrs={"Scale_Factor": b"10000", "data ignore value": -1.0})
        with open_container(path) as handle:
            assert read_attributes(handle, "Reflectance")["Scale_Factor"] == "10000"


class TestReflectanceMetadata:
    """Scale factor and no-data lookup"""

    def test_conventional_names(self, cube_file):
        with open_container(cube_file) as handle:
            meta = read_reflectance_metadata(handle, "Reflectance")
        assert meta.scale_factor == 10000.0
        assert meta.no_data_value == -9999.0

    def test_alias_names(self, tmp_path):
        path = write_cube(tmp_path / "alias.h5", attrs={"Scale Factor": 1000, "_FillValue": -1})
        with open_container(path) as handle:
            meta = read_reflectance_metadata(handle, "Reflectance")
        assert meta.scale_factor == 1000.0
        assert meta.no_data_value == -1.0

    def test_custom_names(self, tmp_path):
        path = write_cube(tmp_path / "custom.h5", attrs={"gain": 2.0, "nodata": 0})
        options = ReaderOptions(scale_factor_attrs="gain", no_data_attrs="nodata")
        with open_container(path) as handle:
            meta = read_reflectance_metadata(handle, "Reflectance", options)
        assert meta.scale_factor == 2.0

    def test_missing_scale_factor_is_not_defaulted(self, tmp_path):
        path = write_cube(tmp_path / "noscale.h5", attrs={"data ignore value": -9999.0})
        with open_container(path) as handle:
            with pytest.raises(AttributeNotFoundError):
                read_reflectance_metadata(handle, "Reflectance")

    def test_numeric_strings_accepted(self, tmp_path):
        path = write_cube(tmp_path / "str.h5", attrs={"Scale_Factor": "10000", "data ignore value": "-9999"})
        with open_container(path) as handle:
            meta = read_reflectance_metadata(handle, "Reflectance")
        assert meta.scale_factor == 10000.0

    def test_non_numeric(self, tmp_path):
        path = write_cube(tmp_path / "nan.h5", attrs={"Scale_Factor": "ten", "data ignore value": -1.0})
        with open_container(path) as handle:
            with pytest.raises(ContainerFormatError):
                read_reflectance_metadata(handle, "Reflectance")

    @pytest.mark.parametrize("scale", [0.0, -5.0])
    def test_non_positive_scale(self, tmp_path, scale):
        path = write_cube(tmp_path / "zero.h5", attrs={"Scale_Factor": scale, "data ignore value": -1.0})
        with open_container(path) as handle:
            with pytest.raises(ContainerFormatError):
                read_reflectance_metadata(handle, "Reflectance")


class TestDescriptorRecords:
    """Map info, EPSG code and wavelengths"""

    def test_map_info_dataset(self, cube_file):
        with open_container(cube_file) as handle:
            assert read_map_info(handle, "map info") == MAP_INFO

    def test_map_info_attribute(self, tmp_path):
        path = write_cube(tmp_path / "attr.h5", map_info_as_attribute=True)
        with open_container(path) as handle:
            assert read_map_info(handle, "map info", owner="Reflectance") == MAP_INFO

    def test_map_info_missing(self, tmp_path):
        path = write_cube(tmp_path / "nomap.h5", map_info=None)
        with open_container(path) as handle:
            with pytest.raises(AttributeNotFoundError):
                read_map_info(handle, "map info", owner="Reflectance")

    def test_epsg_code(self, nested_cube_file, cube_file):
        with open_container(nested_cube_file) as handle:
            assert read_epsg_code(handle, "EPSG Code") == 32611
        with open_container(cube_file) as handle:
            assert read_epsg_code(handle, "EPSG Code") is None

    def test_epsg_group_is_not_a_record(self, tmp_path):
        path = write_cube(tmp_path / "group.h5")
        with h5py.File(path, "a") as f:
            f.create_group("EPSG Code")
        with open_container(path) as handle:
            assert read_epsg_code(handle, "EPSG Code") is None

    def test_ambiguous_epsg_is_not_a_record(self, tmp_path):
        path = write_cube(tmp_path / "two.h5")
        with h5py.File(path, "a") as f:
            f["A/EPSG Code"] = "32611"
            f["B/EPSG Code"] = "32612"
        with open_container(path) as handle:
            assert read_epsg_code(handle, "EPSG Code") is None

    def test_band_wavelength(self, cube_file):
        with open_container(cube_file) as handle:
            assert read_band_wavelength(handle, "wavelength", 2) == pytest.approx(410.0)
            assert read_band_wavelength(handle, "wavelength", 7) is None
            assert read_band_wavelength(handle, "missing", 0) is None

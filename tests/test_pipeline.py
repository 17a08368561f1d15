"""
End-to-end tests for band extraction
"""

import importlib
import logging

import numpy as np
import pytest

import hyperband_reader as hbr
from hyperband_reader.core import config
from hyperband_reader.core.core_types import ReaderOptions
from hyperband_reader.core.exceptions import (
    AttributeNotFoundError,
    BandIndexError,
    ContainerIOError,
    ContainerNotFoundError,
    DatasetPathNotFoundError,
    HyperbandReaderError,
    MalformedDescriptorError,
)
from hyperband_reader.io import band_loader

from conftest import write_cube


@pytest.fixture
def opened_handles(monkeypatch):
    """Record every handle the loader opens"""
    handles = []
    original = band_loader.open_container

    def tracking(path):
        handle = original(path)
        handles.append(handle)
        return handle

    monkeypatch.setattr(band_loader, "open_container", tracking)
    return handles


class TestExtractBand:
    """The full single-band pipeline"""

    def test_scenario(self, cube_file):
        raster = hbr.extract_band(cube_file, 1)
        assert raster.data.dims == ("y", "x")
        assert (raster.height, raster.width) == (2, 3)
        np.testing.assert_allclose(raster.data.values, [[0.5, 0.2, 0.4], [np.nan, 0.3, 0.1]])
        assert raster.extent.as_bounds() == (271000, 4111998, 271003, 4112000)
        assert raster.projection == "UTM"
        assert raster.epsg == 32611

    def test_band_metadata_attached(self, cube_file):
        raster = hbr.extract_band(cube_file, 2)
        assert raster.data.attrs["band_index"] == 2
        assert raster.data.attrs["wavelength"] == pytest.approx(410.0)
        assert np.isnan(raster.data.values[0, 0])
        assert raster.data.values[0, 1] == pytest.approx(1.2)

    def test_crs(self, cube_file):
        raster = hbr.extract_band(cube_file, 0)
        assert raster.crs.to_epsg() == 32611

    def test_nested_layout(self, nested_cube_file):
        raster = hbr.extract_band(nested_cube_file, 1)
        assert raster.data.shape == (2, 3)
        assert raster.epsg == 32611

    def test_map_info_as_attribute(self, tmp_path):
        path = write_cube(tmp_path / "attr.h5", map_info_as_attribute=True)
        raster = hbr.extract_band(path, 1)
        assert raster.extent.x_max == 271003

    def test_explicit_paths(self, tmp_path):
        path = write_cube(tmp_path / "site.h5", group="SITE")
        raster = hbr.extract_band(
            path, 1,
            reflectance_path="/SITE/Reflectance",
            map_info_path="/SITE/map info",
        )
        assert raster.width == 3

    def test_dataarray(self, cube_file):
        da = hbr.extract_band_dataarray(cube_file, 1)
        assert da.dims == ("y", "x")
        np.testing.assert_allclose(da["x"].values, [271000.5, 271001.5, 271002.5])
        assert da.attrs["crs"] == "EPSG:32611"

    def test_loader_reuse(self, cube_file, opened_handles):
        loader = hbr.BandRasterLoader(cube_file)
        first = loader.load_band(0)
        second = loader.load_band(1)
        assert not np.allclose(first.data.values, second.data.values, equal_nan=True)
        assert len(opened_handles) == 2
        assert all(h.closed for h in opened_handles)


class TestExtractBandErrors:
    """Failures propagate after the handle is released"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContainerNotFoundError):
            hbr.extract_band(tmp_path / "none.h5", 0)

    @pytest.mark.parametrize("band", [3, -1])
    def test_band_out_of_range(self, cube_file, opened_handles, band):
        with pytest.raises(BandIndexError):
            hbr.extract_band(cube_file, band)
        assert opened_handles and opened_handles[0].closed

    def test_malformed_map_info(self, tmp_path, opened_handles):
        path = write_cube(tmp_path / "bad.h5", map_info="UTM,1,1,271000")
        with pytest.raises(MalformedDescriptorError):
            hbr.extract_band(path, 1)
        assert opened_handles[0].closed

    def test_missing_scale_factor(self, tmp_path, opened_handles):
        path = write_cube(tmp_path / "noscale.h5", attrs={"data ignore value": -9999.0})
        with pytest.raises(AttributeNotFoundError):
            hbr.extract_band(path, 1)
        assert opened_handles[0].closed

    def test_wrong_site_group(self, tmp_path, opened_handles):
        path = write_cube(tmp_path / "siteb.h5", group="SITEB")
        with pytest.raises(DatasetPathNotFoundError):
            hbr.extract_band(
                path, 1,
                reflectance_path="/SITEA/Reflectance",
                map_info_path="/SITEA/map info",
            )
        assert opened_handles[0].closed

    def test_read_failure_releases_handle(self, cube_file, opened_handles, failing_cube_reads):
        with pytest.raises(ContainerIOError) as exc_info:
            hbr.extract_band(cube_file, 1)
        assert isinstance(exc_info.value, OSError)
        assert opened_handles[0].closed

    def test_all_errors_share_base(self, cube_file):
        with pytest.raises(HyperbandReaderError):
            hbr.extract_band(cube_file, 99)


class TestCubeInfo:
    """Header-only summaries"""

    def test_get_cube_info(self, cube_file):
        info = hbr.get_cube_info(cube_file)
        assert info["shape"] == (3, 2, 3)
        assert info["n_bands"] == 3
        assert (info["width"], info["height"]) == (3, 2)
        assert info["scale_factor"] == 10000.0
        assert info["no_data_value"] == -9999.0
        assert info["extent"] == (271000, 4111998, 271003, 4112000)
        assert info["epsg"] == 32611
        assert info["dtype"] == "int16"

    def test_list_band_wavelengths(self, cube_file):
        assert hbr.list_band_wavelengths(cube_file) == pytest.approx([400.0, 405.0, 410.0])

    def test_custom_options(self, tmp_path):
        path = write_cube(tmp_path / "custom.h5", attrs={"gain": 100.0, "nodata": 0})
        options = ReaderOptions(scale_factor_attrs=("gain",), no_data_attrs=("nodata",))
        assert hbr.get_cube_info(path, options)["scale_factor"] == 100.0

    def test_defaults_ignore_environment(self, monkeypatch):
        monkeypatch.setenv("HYPERBAND_REFLECTANCE_PATH", "Radiance")
        monkeypatch.setenv("HYPERBAND_MAP_INFO_PATH", "geo")
        importlib.reload(config)
        assert config.DEFAULT_REFLECTANCE_PATH == "Reflectance"
        assert config.DEFAULT_MAP_INFO_PATH == "map info"


class TestLogging:
    """Package logging setup"""

    def test_setup_logging_to_file(self, cube_file, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = hbr.setup_logging("INFO", log_file=log_file)
        try:
            hbr.extract_band(cube_file, 1)
            for handler in logger.handlers:
                handler.flush()
            assert "Extracting band 1" in log_file.read_text()
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
            hbr.set_log_level(logging.WARNING)
            logger.propagate = True

    def test_set_log_level(self):
        hbr.set_log_level("debug")
        try:
            assert logging.getLogger("hyperband_reader").level == logging.DEBUG
        finally:
            hbr.set_log_level("WARNING")

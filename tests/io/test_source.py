"""
Tests for the rasterio COG source
"""

import numpy as np
import pytest

from cogxyz.core.exceptions import LevelNotFoundError, SourceUnreachableError
from cogxyz.core.types import ChannelOrder, PixelWindow
from cogxyz.io.source import RasterioSource, open_source
from cogxyz.sample_data import SAMPLE_CLASSES, create_sample_cog

pytestmark = pytest.mark.integration


class TestOpenSource:
    """Test open_source"""

    def test_open(self, sample_cog):
        """Test a COG opens as RasterioSource"""
        with open_source(sample_cog) as source:
            assert isinstance(source, RasterioSource)
            assert source.path == sample_cog

    def test_missing_file(self, tmp_path):
        """Test an unreachable source raises SourceUnreachableError"""
        with pytest.raises(SourceUnreachableError):
            open_source(str(tmp_path / "missing.tif"))

    def test_repr(self, sample_cog):
        source = open_source(sample_cog)
        assert "Levels: 2" in repr(source)

        source.close()
        assert "closed" in repr(source)


class TestLevels:
    """Test level_count and level_metadata"""

    def test_level_count(self, sample_cog):
        """Test full image plus one overview"""
        with open_source(sample_cog) as source:
            assert source.level_count() == 2

    def test_level_zero(self, sample_cog):
        """Test level 0 geometry"""
        with open_source(sample_cog) as source:
            meta = source.level_metadata(0)

        assert meta.level == 0
        assert meta.width == 1024
        assert meta.height == 1024
        assert meta.resolution[0] == pytest.approx(152.874)
        assert meta.resolution[1] == pytest.approx(-152.874)
        assert meta.projection == "EPSG:3857"
        assert meta.is_tiled
        assert (meta.tile_width, meta.tile_height) == (256, 256)
        assert meta.band_count == 1
        assert meta.dtype == "uint8"

    def test_overview_level(self, sample_cog):
        """Test level 1 is the first overview"""
        with open_source(sample_cog) as source:
            main = source.level_metadata(0)
            meta = source.level_metadata(1)

        assert meta.width == 512
        assert meta.resolution[0] == pytest.approx(2 * main.resolution[0])
        assert meta.origin == pytest.approx(main.origin)
        assert meta.bbox.as_tuple() == pytest.approx(main.bbox.as_tuple())

    def test_missing_level(self, sample_cog):
        """Test a level past the last overview raises LevelNotFoundError"""
        with open_source(sample_cog) as source:
            with pytest.raises(LevelNotFoundError) as exc_info:
                source.level_metadata(2)

        assert exc_info.value.level == 2

    def test_untiled(self, tmp_path):
        """Test strip layout is reported as untiled"""
        path = create_sample_cog(str(tmp_path / "strips.tif"), tiled=False, overview_factors=())

        with open_source(path) as source:
            assert not source.level_metadata(0).is_tiled

    def test_no_crs(self, tmp_path):
        """Test a file without CRS has no projection key"""
        path = create_sample_cog(str(tmp_path / "nocrs.tif"), crs=None)

        with open_source(path) as source:
            assert source.level_metadata(0).projection is None


class TestReadWindow:
    """Test read_window"""

    def test_interleaved(self, sample_cog):
        """Test (height, width, bands) layout"""
        with open_source(sample_cog) as source:
            raster = source.read_window(0, PixelWindow(0, 0, 256, 256), 256)

        assert raster.data.shape == (256, 256, 1)
        assert raster.channel_order is ChannelOrder.INTERLEAVED
        assert raster.level == 0
        assert np.all(raster.data == SAMPLE_CLASSES["top_left"])

    def test_band_order(self, sample_cog):
        """Test (bands, height, width) layout for selected bands"""
        with open_source(sample_cog) as source:
            raster = source.read_window(
                0, PixelWindow(512, 0, 1024, 512), 256, channel_order=ChannelOrder.BAND, bands=[1]
            )

        assert raster.data.shape == (1, 256, 256)
        assert np.all(raster.band(0) == SAMPLE_CLASSES["top_right"])

    def test_resampled_from_overview(self, sample_cog):
        """Test a small overview window is resampled to the output size"""
        with open_source(sample_cog) as source:
            raster = source.read_window(1, PixelWindow(256, 256, 384, 384), 256)

        assert raster.data.shape == (256, 256, 1)
        assert raster.level == 1
        assert np.all(raster.data == SAMPLE_CLASSES["bottom_right"])

    def test_window_past_edge(self, sample_cog):
        """Test a window one pixel past the image edge is still read"""
        with open_source(sample_cog) as source:
            raster = source.read_window(0, PixelWindow(768, 768, 1025, 1025), 256)

        assert raster.data.shape == (256, 256, 1)
        assert raster.data[0, 0, 0] == SAMPLE_CLASSES["bottom_right"]

    def test_missing_level(self, sample_cog):
        with open_source(sample_cog) as source:
            with pytest.raises(LevelNotFoundError):
                source.read_window(3, PixelWindow(0, 0, 16, 16), 256)

"""
Tests for shared value types, result containers and the logging observer
"""

import logging

import numpy as np
import pytest

from cogxyz.core.interfaces import LoggingObserver
from cogxyz.core.result import RasterWindow, TileBitmap
from cogxyz.core.types import ChannelOrder, PixelWindow, TileIndex


class TestTileIndex:
    """Test TileIndex"""

    def test_validate_valid(self):
        """Test a tile inside the scheme validates to itself"""
        tile = TileIndex(x=9984, y=5888, z=14)
        assert tile.validate() == tile

    def test_validate_zoom_zero(self):
        """Test zoom 0 has a single tile"""
        assert TileIndex(0, 0, 0).validate() == (0, 0, 0)

        with pytest.raises(ValueError):
            TileIndex(1, 0, 0).validate()

    def test_validate_negative(self):
        """Test negative coordinates are rejected"""
        with pytest.raises(ValueError):
            TileIndex(-1, 0, 3).validate()

        with pytest.raises(ValueError):
            TileIndex(0, 0, -1).validate()

    def test_str(self):
        """Test z/x/y formatting"""
        assert str(TileIndex(x=639, y=381, z=10)) == "10/639/381"


class TestPixelWindow:
    """Test PixelWindow"""

    def test_size(self):
        """Test width and height"""
        window = PixelWindow(10, 20, 110, 70)

        assert window.width == 100
        assert window.height == 50
        assert not window.is_empty
        assert window.as_tuple() == (10, 20, 110, 70)

    def test_empty(self):
        """Test zero-area windows"""
        assert PixelWindow(5, 5, 5, 9).is_empty
        assert PixelWindow(5, 5, 9, 5).is_empty

    def test_negative_rejected(self):
        """Test negative coordinates raise"""
        with pytest.raises(ValueError):
            PixelWindow(-1, 0, 10, 10)

    def test_reversed_rejected(self):
        """Test end before origin raises"""
        with pytest.raises(ValueError):
            PixelWindow(10, 0, 5, 10)


class TestRasterWindow:
    """Test RasterWindow"""

    def test_interleaved(self):
        """Test interleaved layout"""
        data = np.zeros((4, 4, 3), dtype=np.uint16)
        raster = RasterWindow(data, 4, 4, ChannelOrder.INTERLEAVED, 0, PixelWindow(0, 0, 4, 4))

        assert raster.band_count == 3
        assert raster.dtype == np.uint16
        assert raster.band(2).shape == (4, 4)

    def test_band_order(self):
        """Test band-sequential layout"""
        data = np.arange(32, dtype=np.float32).reshape(2, 4, 4)
        raster = RasterWindow(data, 4, 4, ChannelOrder.BAND, 1, PixelWindow(0, 0, 8, 8))

        assert raster.band_count == 2
        np.testing.assert_array_equal(raster.band(1), data[1])

    def test_shape_mismatch(self):
        """Test declared size must match the data"""
        data = np.zeros((1, 4, 4), dtype=np.uint8)

        with pytest.raises(ValueError):
            RasterWindow(data, 8, 8, ChannelOrder.BAND, 0, PixelWindow(0, 0, 4, 4))

    def test_requires_3d(self):
        """Test 2D data is rejected"""
        with pytest.raises(ValueError):
            RasterWindow(np.zeros((4, 4)), 4, 4, ChannelOrder.BAND, 0, PixelWindow(0, 0, 4, 4))

    def test_band_out_of_range(self):
        """Test missing band raises IndexError"""
        data = np.zeros((1, 4, 4), dtype=np.uint8)
        raster = RasterWindow(data, 4, 4, ChannelOrder.BAND, 0, PixelWindow(0, 0, 4, 4))

        with pytest.raises(IndexError):
            raster.band(1)


class TestTileBitmap:
    """Test TileBitmap"""

    def test_to_bytes(self):
        """Test bytes are row-major RGBA"""
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        rgba[0, 1] = (1, 2, 3, 4)
        bitmap = TileBitmap(rgba)

        assert bitmap.size == 2
        data = bitmap.to_bytes()
        assert len(data) == 2 * 2 * 4
        assert data[4:8] == bytes([1, 2, 3, 4])


class TestLoggingObserver:
    """Test LoggingObserver"""

    def test_logs_at_debug(self, caplog):
        """Test events are written to the debug log"""
        observer = LoggingObserver(logging.getLogger("cogxyz.test"))

        with caplog.at_level(logging.DEBUG, logger="cogxyz.test"):
            observer.event("level", zoom=7, level=12)

        assert "level zoom=7 level=12" in caplog.text

    def test_silent_above_debug(self, caplog):
        """Test nothing is logged when debug is disabled"""
        observer = LoggingObserver(logging.getLogger("cogxyz.test"))

        with caplog.at_level(logging.INFO, logger="cogxyz.test"):
            observer.event("overlap", overlap=False)

        assert caplog.text == ""

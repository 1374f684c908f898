"""
cogxyz Test Configuration

Shared pytest fixtures for all tests.
"""

import numpy as np
import pytest

from cogxyz.core.exceptions import LevelNotFoundError
from cogxyz.core.result import RasterWindow
from cogxyz.core.types import ChannelOrder
from cogxyz.gis.bbox import BoundingBox
from cogxyz.io.source import LevelMetadata


class FakeTiffSource:
    """
    In-memory TiffSource with a configurable number of levels

    Level ``n`` has half the pixels of level ``n - 1``; every read returns a
    constant raster and is recorded in ``reads``.
    """

    def __init__(
        self,
        origin=(4_800_000.0, 5_200_000.0),
        resolution=0.3,
        width=400_000,
        height=300_000,
        levels=14,
        projection="EPSG:3857",
        is_tiled=True,
        fill_value=11,
        dtype="uint8",
    ):
        self.origin = origin
        self.resolution = resolution
        self.width = width
        self.height = height
        self.levels = levels
        self.projection = projection
        self.is_tiled = is_tiled
        self.fill_value = fill_value
        self.dtype = dtype
        self.reads = []
        self.closed = False

    @property
    def bbox(self):
        origin_x, origin_y = self.origin
        return BoundingBox(
            west=origin_x,
            south=origin_y - self.height * self.resolution,
            east=origin_x + self.width * self.resolution,
            north=origin_y,
        )

    def level_count(self):
        return self.levels

    def level_metadata(self, level):
        if not 0 <= level < self.levels:
            raise LevelNotFoundError(level)

        scale = 2**level
        return LevelMetadata(
            level=level,
            origin=self.origin,
            resolution=(self.resolution * scale, -self.resolution * scale),
            bbox=self.bbox,
            tile_width=256,
            tile_height=256,
            is_tiled=self.is_tiled,
            width=max(1, self.width // scale),
            height=max(1, self.height // scale),
            projection=self.projection,
            band_count=1,
            dtype=self.dtype,
        )

    def read_window(
        self, level, window, output_size, channel_order=ChannelOrder.INTERLEAVED, bands=None
    ):
        self.reads.append((level, window, output_size))
        band_count = len(bands) if bands else 1

        if channel_order is ChannelOrder.INTERLEAVED:
            shape = (output_size, output_size, band_count)
        else:
            shape = (band_count, output_size, output_size)

        return RasterWindow(
            data=np.full(shape, self.fill_value, dtype=self.dtype),
            width=output_size,
            height=output_size,
            channel_order=channel_order,
            level=level,
            window=window,
        )

    def close(self):
        self.closed = True


class RecordingObserver:
    """PipelineObserver that keeps every event"""

    def __init__(self):
        self.events = []

    def event(self, name, **fields):
        self.events.append((name, fields))

    def names(self):
        return [name for name, _ in self.events]

    def last(self, name):
        for event_name, fields in reversed(self.events):
            if event_name == name:
                return fields
        raise KeyError(name)


@pytest.fixture
def fake_source_factory():
    """Build FakeTiffSource instances with custom geometry"""
    return FakeTiffSource


@pytest.fixture
def fake_source():
    """0.3 m/px source with 14 levels in Web Mercator"""
    return FakeTiffSource()


@pytest.fixture
def recording_observer():
    """Observer that records pipeline checkpoints"""
    return RecordingObserver()


@pytest.fixture
def sample_cog(tmp_path):
    """Sample land-cover COG (1024 px, one overview) aligned to XYZ zoom 10"""
    from cogxyz.sample_data import create_sample_cog

    return create_sample_cog(str(tmp_path / "sample_cog.tif"))

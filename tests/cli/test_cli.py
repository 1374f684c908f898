"""
Tests for the cogxyz command line
"""

import json

import numpy as np
import pytest
import rasterio

from cogxyz.cli import main
from cogxyz.sample_data import SAMPLE_ANCHOR, SAMPLE_PALETTE

pytestmark = pytest.mark.integration


def tile_args(cog, tile, output):
    return ["tile", cog, str(tile.z), str(tile.x), str(tile.y), "-o", output]


class TestSampleCommand:
    """Test `cogxyz sample`"""

    def test_writes_cog(self, tmp_path, capsys):
        output = str(tmp_path / "out" / "sample.tif")

        main(["sample", output])

        assert capsys.readouterr().out.strip() == output
        with rasterio.open(output) as src:
            assert src.width == 1024
            assert src.overviews(1) == [2]


class TestInfoCommand:
    """Test `cogxyz info`"""

    def test_levels(self, sample_cog, capsys):
        main(["info", sample_cog])
        out = capsys.readouterr().out

        assert "Projection: EPSG:3857" in out
        assert "Best XYZ zoom: 10" in out
        assert "Level 0: 1024x1024 px" in out
        assert "Level 1: 512x512 px" in out
        assert "serves XYZ zoom 9" in out

    def test_tiles_at(self, sample_cog, capsys):
        main(["info", sample_cog, "--tiles-at", "10"])
        out = capsys.readouterr().out

        assert "Tiles at zoom 10:" in out
        assert f"  {SAMPLE_ANCHOR}" in out

    def test_unreachable(self, tmp_path, capsys):
        main(["info", str(tmp_path / "missing.tif")])

        assert capsys.readouterr().out.startswith("Error:")


class TestTileCommand:
    """Test `cogxyz tile`"""

    def test_writes_png(self, sample_cog, tmp_path):
        output = str(tmp_path / "tile.png")

        main(tile_args(sample_cog, SAMPLE_ANCHOR, output))

        with rasterio.open(output) as src:
            assert (src.count, src.width, src.height) == (4, 256, 256)
            rgba = np.moveaxis(src.read(), 0, -1)

        assert tuple(rgba[0, 0]) == SAMPLE_PALETTE[11]

    def test_palette_file(self, sample_cog, tmp_path):
        palette = tmp_path / "palette.json"
        palette.write_text(json.dumps({"11": [1, 2, 3, 4], "unknown": [0, 0, 0, 0]}))
        output = str(tmp_path / "tile.png")

        main(tile_args(sample_cog, SAMPLE_ANCHOR, output) + ["--palette", str(palette)])

        with rasterio.open(output) as src:
            assert tuple(src.read()[:, 10, 10]) == (1, 2, 3, 4)

    def test_tile_size(self, sample_cog, tmp_path):
        output = str(tmp_path / "tile512.png")

        main(tile_args(sample_cog, SAMPLE_ANCHOR, output) + ["--tile-size", "512"])

        with rasterio.open(output) as src:
            assert src.width == 512

    def test_no_data(self, sample_cog, tmp_path, capsys):
        output = tmp_path / "empty.png"

        main(["tile", sample_cog, "10", "0", "0", "-o", str(output)])

        assert "No data" in capsys.readouterr().out
        assert not output.exists()


class TestMain:
    """Test argument handling"""

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1

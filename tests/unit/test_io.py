"""Unit tests for the I/O layer.

Tests for the cairosvg rasterizer and the ZIP archive file builder.
"""

import io
import json
import sys
import zipfile
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from PIL import Image

from platemask import __version__
from platemask.domain import ExposureCell
from platemask.io.rasterizer import CairoSvgRasterizer
from platemask.io.writer import ZipArchiveBuilder, encode_png


def png_bytes(size=(4, 3), color=(0, 0, 0, 255)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class TestCairoSvgRasterizer:
    """Tests for CairoSvgRasterizer."""

    def test_rasterize(self):
        """Test markup is passed to cairosvg with the exact output size."""
        svg2png = MagicMock(return_value=png_bytes((4, 3)))
        fake_cairosvg = SimpleNamespace(svg2png=svg2png)

        with patch.dict(sys.modules, {"cairosvg": fake_cairosvg}):
            image = CairoSvgRasterizer().rasterize("<svg/>", 4, 3)

        assert image.size == (4, 3)
        svg2png.assert_called_once_with(
            bytestring=b"<svg/>",
            output_width=4,
            output_height=3,
            dpi=96,
        )

    def test_custom_dpi(self):
        svg2png = MagicMock(return_value=png_bytes())

        with patch.dict(sys.modules, {"cairosvg": SimpleNamespace(svg2png=svg2png)}):
            CairoSvgRasterizer(dpi=300).rasterize("<svg/>", 4, 3)

        assert svg2png.call_args.kwargs["dpi"] == 300

    def test_errors_propagate(self):
        svg2png = MagicMock(side_effect=ValueError("bad svg"))

        with patch.dict(sys.modules, {"cairosvg": SimpleNamespace(svg2png=svg2png)}):
            with pytest.raises(ValueError, match="bad svg"):
                CairoSvgRasterizer().rasterize("<svg/>", 4, 3)


class TestEncodePng:
    """Tests for encode_png."""

    def test_encode(self):
        data = encode_png(Image.new("L", (5, 2), 9))
        with Image.open(io.BytesIO(data)) as image:
            assert image.format == "PNG"
            assert image.size == (5, 2)


class TestZipArchiveBuilder:
    """Tests for ZipArchiveBuilder."""

    @pytest.fixture
    def cells(self):
        return [
            ExposureCell(duration_s=1.5, raster=np.full((60, 100), 255, dtype=np.uint8)),
            ExposureCell(duration_s=2.25, raster=np.zeros((60, 100), dtype=np.uint8)),
        ]

    @pytest.fixture
    def preview_pixels(self):
        return Image.new("RGBA", (20, 12), (10, 20, 30, 255)).tobytes()

    @pytest.fixture
    def archive(self, cells, preview_pixels, landscape_profile):
        data = ZipArchiveBuilder().build(cells, preview_pixels, landscape_profile)
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            yield zf

    def test_layout(self, archive):
        assert sorted(archive.namelist()) == [
            "layers/0000.png",
            "layers/0001.png",
            "manifest.json",
            "preview.png",
        ]

    def test_manifest(self, archive):
        manifest = json.loads(archive.read("manifest.json"))

        assert manifest["generator"] == f"platemask {__version__}"
        assert manifest["printer"] == {
            "name": "test-landscape",
            "resolution": [100, 60],
            "pixel_pitch_mm": 0.1,
        }
        assert manifest["exposures"] == [
            {"index": 0, "file": "layers/0000.png", "exposure_s": 1.5},
            {"index": 1, "file": "layers/0001.png", "exposure_s": 2.25},
        ]
        assert manifest["total_exposure_s"] == 3.75

    def test_masks(self, archive, cells):
        for index, cell in enumerate(cells):
            with Image.open(io.BytesIO(archive.read(f"layers/{index:04d}.png"))) as image:
                assert image.size == (100, 60)
                assert np.array_equal(np.array(image), cell.raster)

    def test_preview(self, archive):
        with Image.open(io.BytesIO(archive.read("preview.png"))) as image:
            assert image.size == (20, 12)
            assert image.convert("RGBA").getpixel((0, 0)) == (10, 20, 30, 255)

"""Tests for domain models to verify they work correctly."""

import base64
from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from platemask.domain import BoardLayer, ExposureCell, OutputRecord, Side


class TestBoardLayer:
    """Tests for BoardLayer class."""

    def test_defaults(self) -> None:
        """Test a layer is top-facing and not inverted by default."""
        layer = BoardLayer(id="F_Cu", side=Side.TOP, filename="F_Cu.svg", markup="<svg/>")
        assert layer.inverted is False
        assert layer.display_order == 0

    def test_immutable(self) -> None:
        layer = BoardLayer(id="F_Cu", side=Side.TOP, filename="F_Cu.svg", markup="<svg/>")
        with pytest.raises(FrozenInstanceError):
            layer.id = "B_Cu"  # type: ignore[misc]

    def test_side_values(self) -> None:
        assert Side("top") is Side.TOP
        assert Side("bottom") is Side.BOTTOM


class TestExposureCell:
    """Tests for ExposureCell class."""

    def test_compares_by_identity(self) -> None:
        """Test cells holding equal rasters are still distinct steps."""
        raster = np.zeros((60, 100), dtype=np.uint8)
        first = ExposureCell(duration_s=5.0, raster=raster)
        second = ExposureCell(duration_s=5.0, raster=raster.copy())
        assert first != second


class TestOutputRecord:
    """Tests for OutputRecord class."""

    def test_preview_data_url(self) -> None:
        layer = BoardLayer(id="F_Cu", side=Side.TOP, filename="F_Cu.svg", markup="<svg/>")
        record = OutputRecord(
            layer_id="F_Cu",
            layer=layer,
            preview_png=b"\x89PNG",
            filename="F_Cu.zip",
            artifact=b"data",
        )

        prefix = "data:image/png;base64,"
        assert record.preview_data_url.startswith(prefix)
        assert base64.b64decode(record.preview_data_url[len(prefix):]) == b"\x89PNG"

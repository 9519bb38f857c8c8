"""Tests for calibration grid rendering."""

import numpy as np
import pytest
from PIL import Image

from platemask.config import CalibrationSpec, PrinterProfile
from platemask.core.calibration import CalibrationGridRenderer
from platemask.core.compositor import BLACK, PlateCompositor
from platemask.exceptions import DegenerateCalibrationError

BOARD = (40, 20)


@pytest.fixture
def canvas():
    profile = PrinterProfile(resolution=(100, 60), pixel_pitch_mm=0.1)
    board = Image.new("L", BOARD, 128)
    return PlateCompositor(profile).compose(board, (0, 0), BOARD, inverted=False)


def make_spec(rows=2, columns=2, min_time=1.0, max_time=8.0) -> CalibrationSpec:
    return CalibrationSpec(rows=rows, columns=columns, min_time_s=min_time, max_time_s=max_time)


class TestCalibrationGridRenderer:
    """Tests for CalibrationGridRenderer."""

    def test_durations(self):
        assert CalibrationGridRenderer(make_spec()).durations() == pytest.approx([1, 1, 2, 4])

    def test_one_cell_per_step(self, canvas):
        cells = CalibrationGridRenderer(make_spec(rows=2, columns=3)).render(canvas)
        assert len(cells) == 6
        assert all(cell.duration_s > 0 for cell in cells)
        assert all(cell.raster.shape == (60, 100) for cell in cells)

    def test_first_cell_is_unmasked(self, canvas):
        before = canvas.snapshot()
        cells = CalibrationGridRenderer(make_spec()).render(canvas)
        assert np.array_equal(cells[0].raster, before)

    def test_masks_grow_from_bottom_left(self, canvas):
        """Test each step blacks out a larger region of the board."""
        cells = CalibrationGridRenderer(make_spec()).render(canvas)

        black = [
            int(np.count_nonzero(cell.raster[0:20, 0:40] == BLACK)) for cell in cells
        ]
        assert black == [0, 200, 400, 600]

        # Second exposure: bottom-left quarter of the board is masked
        second = cells[1].raster
        assert np.all(second[10:20, 0:20] == BLACK)
        assert np.all(second[10:20, 20:40] == 128)

    def test_masks_stay_inside_board(self, canvas):
        cells = CalibrationGridRenderer(make_spec(rows=3, columns=3, max_time=20)).render(canvas)
        for cell in cells:
            assert np.all(cell.raster[:, 40:] == 255)
            assert np.all(cell.raster[20:, :] == 255)

    def test_total_exposure_matches_maximum(self, canvas):
        cells = CalibrationGridRenderer(make_spec(rows=3, columns=2, max_time=30)).render(canvas)
        assert sum(cell.duration_s for cell in cells) == pytest.approx(30.0)

    @pytest.mark.parametrize(
        ("rows", "min_time", "max_time"),
        [(0, 1.0, 8.0), (1, 2.0, 9.0), (2, 5.0, 5.0), (2, 0.0, 8.0)],
    )
    def test_degenerate_grid(self, canvas, rows, min_time, max_time):
        """Test grids without positive per-cell durations are not rendered."""
        renderer = CalibrationGridRenderer(
            make_spec(rows=rows, columns=1 if rows == 1 else 2, min_time=min_time, max_time=max_time)
        )
        before = canvas.snapshot()

        with pytest.raises(DegenerateCalibrationError):
            renderer.render(canvas)

        assert np.array_equal(canvas.snapshot(), before)

"""Exposure calibration grid rendering.

A calibration print exposes one layer in several steps. Before each step a
larger part of the board, growing from its bottom-left corner, is blacked
out for the rest of the print, so every grid cell ends up with a different
total exposure.
"""

from platemask.config import CalibrationSpec
from platemask.core.compositor import PlateCanvas
from platemask.core.schedule import (
    calculate_exposure_times,
    incremental_durations,
    validate_calibration,
)
from platemask.domain import ExposureCell


class CalibrationGridRenderer:
    """Expands one composited layer into a grid of timed exposures.

    Example:
        renderer = CalibrationGridRenderer(spec)
        cells = renderer.render(canvas)
    """

    def __init__(self, spec: CalibrationSpec) -> None:
        self.spec = spec

    def durations(self) -> list[float]:
        """Per-step exposure durations in seconds, in grid order."""
        return incremental_durations(calculate_exposure_times(self.spec))

    def render(self, canvas: PlateCanvas) -> list[ExposureCell]:
        """Capture one exposure per grid cell, row by row.

        The canvas is captured before the cell's mask is drawn, and masks are
        never removed, so later steps expose less of the board.

        Args:
            canvas: Composited plate; modified in place

        Returns:
            ``rows * columns`` exposure cells in row-major order

        Raises:
            DegenerateCalibrationError: If the grid cannot be printed with
                positive per-cell durations
        """
        validate_calibration(self.spec)
        durations = self.durations()
        board_w, board_h = canvas.board_size
        rows, columns = self.spec.rows, self.spec.columns

        cells: list[ExposureCell] = []
        for row in range(rows):
            for column in range(columns):
                step = row * columns + column
                cells.append(ExposureCell(duration_s=durations[step], raster=canvas.snapshot()))
                canvas.occlude(
                    width=board_w * (column + 1) / columns,
                    height=board_h * (row + 1) / rows,
                )

        return cells

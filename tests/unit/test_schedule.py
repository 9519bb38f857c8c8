"""Tests for calibration exposure scheduling."""

import pytest

from platemask.config import CalibrationSpec
from platemask.core.schedule import (
    calculate_exposure_times,
    incremental_durations,
    validate_calibration,
)
from platemask.exceptions import ConfigurationError, DegenerateCalibrationError


def make_spec(rows=2, columns=2, min_time=1.0, max_time=8.0, geometric=True) -> CalibrationSpec:
    return CalibrationSpec(
        rows=rows,
        columns=columns,
        min_time_s=min_time,
        max_time_s=max_time,
        geometric=geometric,
    )


class TestCalculateExposureTimes:
    """Tests for calculate_exposure_times."""

    def test_geometric_doubling(self):
        """Test geometric spacing from 1s to 8s over four steps."""
        times = calculate_exposure_times(make_spec(min_time=1, max_time=8))
        assert times == pytest.approx([1.0, 2.0, 4.0, 8.0])

    def test_linear_spacing(self):
        """Test linear spacing from 1s to 10s over four steps."""
        times = calculate_exposure_times(make_spec(min_time=1, max_time=10, geometric=False))
        assert times == pytest.approx([1.0, 4.0, 7.0, 10.0])

    @pytest.mark.parametrize("geometric", [True, False])
    @pytest.mark.parametrize(("rows", "columns"), [(1, 2), (2, 3), (4, 4), (1, 7)])
    def test_shape_and_bounds(self, rows, columns, geometric):
        """Test count, monotonicity and end points for a range of grids."""
        spec = make_spec(rows=rows, columns=columns, min_time=3.0, max_time=45.0, geometric=geometric)
        times = calculate_exposure_times(spec)

        assert len(times) == rows * columns
        assert times[0] == 3.0
        assert times[-1] == 45.0
        assert all(a <= b for a, b in zip(times, times[1:]))

    def test_single_cell(self):
        """Test a 1x1 grid yields only the minimum time."""
        times = calculate_exposure_times(make_spec(rows=1, columns=1, min_time=5, max_time=5))
        assert times == [5.0]

    @pytest.mark.parametrize("geometric", [True, False])
    def test_single_cell_ignores_maximum(self, geometric):
        """Test a 1x1 grid is the minimum time even when the maximum differs."""
        spec = make_spec(rows=1, columns=1, min_time=2, max_time=9, geometric=geometric)
        assert calculate_exposure_times(spec) == [2.0]

    @pytest.mark.parametrize("geometric", [True, False])
    def test_equal_bounds(self, geometric):
        """Test equal minimum and maximum give a flat schedule."""
        spec = make_spec(rows=2, columns=2, min_time=6, max_time=6, geometric=geometric)
        assert calculate_exposure_times(spec) == pytest.approx([6.0, 6.0, 6.0, 6.0])

    def test_linear_from_zero(self):
        spec = make_spec(rows=1, columns=3, min_time=0, max_time=10, geometric=False)
        assert calculate_exposure_times(spec) == pytest.approx([0.0, 5.0, 10.0])

    def test_geometric_needs_positive_times(self):
        with pytest.raises(DegenerateCalibrationError, match="positive exposures"):
            calculate_exposure_times(make_spec(min_time=0, max_time=10))

    def test_geometric_has_constant_ratio(self):
        """Test consecutive geometric steps share one ratio."""
        times = calculate_exposure_times(make_spec(rows=3, columns=3, min_time=2, max_time=50))
        ratios = [b / a for a, b in zip(times, times[1:])]
        assert ratios == pytest.approx([ratios[0]] * len(ratios))


class TestValidateCalibration:
    """Tests for degenerate calibration grids."""

    @pytest.mark.parametrize(("rows", "columns"), [(0, 2), (2, 0), (-1, 3), (0, 0)])
    def test_non_positive_dimensions(self, rows, columns):
        with pytest.raises(DegenerateCalibrationError, match="must be positive"):
            validate_calibration(make_spec(rows=rows, columns=columns))

    def test_single_cell_with_range(self):
        """Test a 1x1 grid cannot span distinct times."""
        with pytest.raises(DegenerateCalibrationError, match="1x1"):
            validate_calibration(make_spec(rows=1, columns=1, min_time=1, max_time=8))

    def test_max_not_above_min(self):
        with pytest.raises(DegenerateCalibrationError, match="must exceed"):
            validate_calibration(make_spec(min_time=10, max_time=10))

    def test_non_positive_minimum(self):
        with pytest.raises(DegenerateCalibrationError, match="minimum exposure"):
            validate_calibration(make_spec(min_time=0, max_time=10))

    def test_is_configuration_error(self):
        """Test degenerate grids are reported as configuration errors."""
        with pytest.raises(ConfigurationError):
            calculate_exposure_times(make_spec(rows=0))

    def test_valid_grid_passes(self):
        validate_calibration(make_spec())


class TestIncrementalDurations:
    """Tests for incremental_durations."""

    def test_differences(self):
        assert incremental_durations([1.0, 2.0, 4.0, 8.0]) == [1.0, 1.0, 2.0, 4.0]

    def test_single_step(self):
        assert incremental_durations([5.0]) == [5.0]

    def test_sum_is_final_time(self):
        """Test durations add back up to the cumulative maximum."""
        times = calculate_exposure_times(make_spec(rows=3, columns=4, min_time=2, max_time=30))
        durations = incremental_durations(times)
        assert sum(durations) == pytest.approx(30.0)
        assert all(d > 0 for d in durations)

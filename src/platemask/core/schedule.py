"""Exposure schedule for calibration grids.

A calibration grid exposes one layer in ``rows * columns`` steps. The
schedule lists the cumulative exposure each grid cell ends up with; the
printer runs the differences between consecutive entries.
"""

from platemask.config import CalibrationSpec
from platemask.exceptions import DegenerateCalibrationError


def validate_calibration(spec: CalibrationSpec) -> None:
    """Check that a calibration grid yields positive exposure steps.

    The schedule itself is defined for more grids than an export can print;
    this is the stricter check applied before any layer is exposed.

    Args:
        spec: Calibration grid to check

    Raises:
        DegenerateCalibrationError: If the grid is empty, has a single cell
            with a time range, or cannot produce increasing exposures
    """
    if spec.rows <= 0 or spec.columns <= 0:
        raise DegenerateCalibrationError(
            f"rows and columns must be positive (got {spec.rows}x{spec.columns})"
        )
    if spec.min_time_s <= 0:
        raise DegenerateCalibrationError(
            f"minimum exposure must be positive (got {spec.min_time_s}s)"
        )

    if spec.steps == 1:
        if spec.max_time_s != spec.min_time_s:
            raise DegenerateCalibrationError(
                "a 1x1 grid cannot span distinct minimum and maximum exposures"
            )
    elif spec.max_time_s <= spec.min_time_s:
        raise DegenerateCalibrationError(
            f"maximum exposure ({spec.max_time_s}s) must exceed "
            f"minimum exposure ({spec.min_time_s}s)"
        )


def calculate_exposure_times(spec: CalibrationSpec) -> list[float]:
    """Calculate cumulative exposure times for every grid step.

    Step 0 is the minimum time. Later steps interpolate towards the maximum
    time, geometrically (constant ratio) or linearly (constant difference).
    A single-cell grid is always ``[min_time_s]``, whatever the maximum.

    Args:
        spec: Calibration grid

    Returns:
        Non-decreasing list of ``rows * columns`` cumulative times in seconds

    Raises:
        DegenerateCalibrationError: If rows or columns are not positive, or
            geometric spacing is asked for with a non-positive time

    Examples:
        >>> spec = CalibrationSpec(rows=2, columns=2, min_time_s=1, max_time_s=10,
        ...                        geometric=False)
        >>> calculate_exposure_times(spec)
        [1.0, 4.0, 7.0, 10.0]
    """
    if spec.rows <= 0 or spec.columns <= 0:
        raise DegenerateCalibrationError(
            f"rows and columns must be positive (got {spec.rows}x{spec.columns})"
        )

    steps = spec.steps
    low = float(spec.min_time_s)
    high = float(spec.max_time_s)

    times = [low]
    if steps == 1:
        return times

    if spec.geometric and (low <= 0 or high <= 0):
        raise DegenerateCalibrationError(
            f"geometric spacing needs positive exposures (got {low}s to {high}s)"
        )

    for step in range(1, steps):
        if step == steps - 1:
            times.append(high)
        elif spec.geometric:
            times.append(low * (high / low) ** (step / (steps - 1)))
        else:
            times.append(low + step * (high - low) / (steps - 1))

    return times


def incremental_durations(times: list[float]) -> list[float]:
    """Turn cumulative exposure times into per-step durations.

    Examples:
        >>> incremental_durations([1.0, 2.0, 4.0, 8.0])
        [1.0, 1.0, 2.0, 4.0]
    """
    return [
        times[0] if step == 0 else times[step] - times[step - 1]
        for step in range(len(times))
    ]

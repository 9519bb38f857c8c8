"""Configuration settings for Platemask."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from platemask.domain.layer import Side


class AnchorCorner(str, Enum):
    """Build plate reference point the board is aligned to."""

    TOP_LEFT = "TL"
    TOP_RIGHT = "TR"
    BOTTOM_LEFT = "BL"
    BOTTOM_RIGHT = "BR"
    CENTER = "C"


class PrinterProfile(BaseModel):
    """Physical and raster characteristics of a mask-projection printer.

    The resolution is given in the panel's native orientation. Drawing always
    happens on a landscape working canvas of ``max(resolution)`` by
    ``min(resolution)`` pixels; portrait panels get an extra quarter turn.
    """

    name: str = Field(
        default="generic",
        description="Printer model name",
    )
    resolution: tuple[int, int] = Field(
        description="Native panel resolution (width, height) in pixels",
    )
    pixel_pitch_mm: float = Field(
        gt=0.0,
        description="Size of one panel pixel in millimeters (isotropic)",
    )
    preview_resolution: tuple[int, int] = Field(
        default=(224, 168),
        description="Size of the preview image embedded in output files",
    )
    file_format: str = Field(
        default="zip",
        description="Output file extension without the leading dot",
    )
    rotate_180: bool = Field(
        default=False,
        description="Firmware expects masks rotated by 180 degrees",
    )
    flip_top_horizontal: bool = Field(default=False)
    flip_top_vertical: bool = Field(default=False)
    flip_bottom_horizontal: bool = Field(default=False)
    flip_bottom_vertical: bool = Field(default=False)

    @property
    def working_size(self) -> tuple[int, int]:
        """Landscape (width, height) of the canvas all drawing happens on."""
        return max(self.resolution), min(self.resolution)

    @property
    def is_portrait(self) -> bool:
        """True if the native panel is taller than it is wide."""
        return self.resolution[0] < self.resolution[1]

    def flips_for(self, side: Side) -> tuple[bool, bool]:
        """Get the (horizontal, vertical) mirror flags for a board side.

        Args:
            side: Board side the layer belongs to

        Returns:
            Tuple of (flip_horizontal, flip_vertical)
        """
        if side == Side.TOP:
            return self.flip_top_horizontal, self.flip_top_vertical
        return self.flip_bottom_horizontal, self.flip_bottom_vertical


class CalibrationSpec(BaseModel):
    """Exposure calibration grid.

    The grid is validated when the schedule is computed so that an unusable
    grid surfaces as a DegenerateCalibrationError.
    """

    rows: int = Field(description="Number of grid rows")
    columns: int = Field(description="Number of grid columns")
    min_time_s: float = Field(description="Exposure of the least cured cell")
    max_time_s: float = Field(description="Exposure of the most cured cell")
    geometric: bool = Field(
        default=True,
        description="Space exposures geometrically (True) or linearly (False)",
    )

    @property
    def steps(self) -> int:
        """Number of exposure steps in the grid."""
        return self.rows * self.columns


class PlacementOptions(BaseModel):
    """Where boards go on the plate and how long they are exposed."""

    anchor_corner: AnchorCorner = Field(
        default=AnchorCorner.CENTER,
        description="Plate reference point",
    )
    anchor_offset_mm: tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="Offset from the anchor in millimeters (x, y)",
    )
    exposure_times: dict[str, float] = Field(
        default_factory=dict,
        description="Exposure time in seconds keyed by layer id",
    )
    calibration: CalibrationSpec | None = Field(
        default=None,
        description="Expand each layer into a calibration grid",
    )


class RenderConfig(BaseModel):
    """Configuration for vector rasterization."""

    crisp_edges: bool = Field(
        default=True,
        description="Ask the rasterizer for aliased (crisp) shape edges",
    )


class ProcessingConfig(BaseModel):
    """Configuration for layer processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker threads (None or 1 = sequential)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PlatemaskSettings(BaseModel):
    """Main application settings."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlatemaskSettings:
    """Get default application settings."""
    return PlatemaskSettings()


def load_printer_profile(path: Path) -> PrinterProfile:
    """Load a printer profile from a JSON file.

    Args:
        path: Path to the JSON profile

    Returns:
        Validated PrinterProfile

    Raises:
        FileNotFoundError: If the profile does not exist
        pydantic.ValidationError: If the profile content is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Printer profile not found: {path}")

    return PrinterProfile.model_validate_json(path.read_text(encoding="utf-8"))

"""Core layout algorithms for platemask.

This module contains the core of the export pipeline:

- Geometry helpers (half-up rounding, mm to pixel conversion, affine transforms)
- Exposure scheduling for calibration grids
- Side-specific mirroring of layer artwork
- Build plate compositing and orientation correction
- Calibration grid rendering
- Output assembly and export orchestration

Key functions:
- calculate_exposure_times: Cumulative exposure times for a calibration grid
- mirror_matrix: Affine matrix mirroring a layer about its own center
- apply_mirror: Rewrite SVG markup so its artwork is mirrored for a board side
- resolve_anchor: Board position on the plate for an anchor corner

Key classes:
- PlateCompositor: Places board rasters on the plate
- CalibrationGridRenderer: Expands a layer into calibration exposures
- OutputAssembler: Builds output records with unique filenames
- MaskExporter: Runs the whole pipeline over a list of layers
"""

from platemask.core.assembler import FilenameDeduplicator, OutputAssembler
from platemask.core.calibration import CalibrationGridRenderer
from platemask.core.compositor import (
    PlateCanvas,
    PlateCompositor,
    PlateOrientation,
    resolve_anchor,
)
from platemask.core.geometry import Affine2D, mm_to_pixels, round_half_up
from platemask.core.mirror import apply_mirror, mirror_matrix, mirror_transforms
from platemask.core.processor import MaskExporter
from platemask.core.schedule import (
    calculate_exposure_times,
    incremental_durations,
    validate_calibration,
)

__all__ = [
    # Geometry
    "Affine2D",
    # Calibration classes
    "CalibrationGridRenderer",
    # Assembler classes
    "FilenameDeduplicator",
    # Processor classes
    "MaskExporter",
    "OutputAssembler",
    # Compositor classes
    "PlateCanvas",
    "PlateCompositor",
    "PlateOrientation",
    "apply_mirror",
    "calculate_exposure_times",
    "incremental_durations",
    "mirror_matrix",
    "mirror_transforms",
    "mm_to_pixels",
    "resolve_anchor",
    "round_half_up",
    "validate_calibration",
]

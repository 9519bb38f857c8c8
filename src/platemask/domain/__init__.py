"""Domain models for platemask.

This module contains the models flowing through the export pipeline. All
models are plain dataclasses with no dependency on the rasterizer or the
output file format.

Key classes:
- Side: Board side (top or bottom)
- BoardLayer: One vector artwork layer to export
- ExposureCell: A timed full-plate mask
- OutputRecord: Export result for one layer
"""

from platemask.domain.exposure import ExposureCell, OutputRecord
from platemask.domain.layer import BoardLayer, Side

__all__: list[str] = [
    # Enums
    "Side",
    # Core types
    "BoardLayer",
    "ExposureCell",
    "OutputRecord",
]

"""Exposure and output models.

This module defines what the pipeline produces: timed exposure masks and the
per-layer output record returned to the caller.
"""

import base64
from dataclasses import dataclass

import numpy as np

from platemask.domain.layer import BoardLayer


@dataclass(frozen=True, eq=False)
class ExposureCell:
    """One timed exposure step.

    Attributes:
        duration_s: Exposure duration in seconds (always positive)
        raster: Full-plate mask as a uint8 array of shape
            (native_height, native_width); 255 lets light through
    """

    duration_s: float
    raster: np.ndarray


@dataclass(frozen=True)
class OutputRecord:
    """Result of exporting one board layer.

    Attributes:
        layer_id: Identifier of the source layer
        layer: The source layer
        preview_png: PNG-encoded preview in working (landscape) orientation
        filename: Output filename, unique within the export run
        artifact: Encoded file produced by the file builder
    """

    layer_id: str
    layer: BoardLayer
    preview_png: bytes
    filename: str
    artifact: bytes

    @property
    def preview_data_url(self) -> str:
        """Preview as a data URL suitable for display in a browser."""
        encoded = base64.b64encode(self.preview_png).decode("ascii")
        return f"data:image/png;base64,{encoded}"

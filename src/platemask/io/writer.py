"""Output file builders.

A file builder turns a layer's exposure cells and preview pixels into the
bytes of one printer file. Printer-native containers are supplied by the
caller; ZipArchiveBuilder is a format-neutral builder that stores every mask
as a PNG next to a JSON manifest.
"""

import io
import json
import zipfile
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from PIL import Image

from platemask import __version__
from platemask.config import PrinterProfile
from platemask.domain import ExposureCell


class FileBuilder(Protocol):
    """Encodes one layer's exposures into a printer file."""

    def build(
        self,
        cells: Sequence[ExposureCell],
        preview_pixels: bytes,
        profile: PrinterProfile,
    ) -> bytes:
        """Encode exposures into a file.

        Args:
            cells: Timed masks in print order
            preview_pixels: RGBA bytes of the preview at the profile's
                preview resolution
            profile: Target printer

        Returns:
            Encoded file content
        """
        ...


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class ZipArchiveBuilder:
    """Writes exposures as a ZIP of PNG masks with a JSON manifest.

    Archive layout:
        manifest.json        printer settings and per-exposure durations
        preview.png          preview at the profile's preview resolution
        layers/0000.png ...  one full-plate mask per exposure

    Example:
        builder = ZipArchiveBuilder()
        data = builder.build(cells, preview_pixels, profile)
    """

    def build(
        self,
        cells: Sequence[ExposureCell],
        preview_pixels: bytes,
        profile: PrinterProfile,
    ) -> bytes:
        preview = Image.frombytes("RGBA", profile.preview_resolution, preview_pixels)

        manifest = {
            "schema_version": "1.0",
            "generator": f"platemask {__version__}",
            "created": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
            "printer": {
                "name": profile.name,
                "resolution": list(profile.resolution),
                "pixel_pitch_mm": profile.pixel_pitch_mm,
            },
            "exposures": [
                {
                    "index": index,
                    "file": f"layers/{index:04d}.png",
                    "exposure_s": round(cell.duration_s, 6),
                }
                for index, cell in enumerate(cells)
            ],
            "total_exposure_s": round(sum(cell.duration_s for cell in cells), 6),
        }

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("manifest.json", json.dumps(manifest, indent=2))
            zf.writestr("preview.png", encode_png(preview))
            for index, cell in enumerate(cells):
                zf.writestr(f"layers/{index:04d}.png", encode_png(Image.fromarray(cell.raster)))

        return buffer.getvalue()

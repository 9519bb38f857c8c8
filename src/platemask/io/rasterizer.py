"""Vector to raster conversion.

The layout pipeline only needs one operation from a rasterizer: render SVG
markup into an image of an exact pixel size. Anything providing a matching
``rasterize`` method can be plugged into the exporter.
"""

import io
from typing import Protocol

from PIL import Image


class Rasterizer(Protocol):
    """Renders SVG markup at a fixed pixel size."""

    def rasterize(self, markup: str, width: int, height: int) -> Image.Image:
        """Render markup into a ``width`` x ``height`` image.

        Raises:
            Exception: If the markup cannot be rendered
        """
        ...


class CairoSvgRasterizer:
    """Rasterizer backed by cairosvg.

    cairosvg is imported on first use, so the rest of the package works on
    systems without the native cairo library.

    Example:
        rasterizer = CairoSvgRasterizer()
        image = rasterizer.rasterize(svg_text, 1000, 800)
    """

    def __init__(self, dpi: int = 96) -> None:
        self.dpi = dpi

    def rasterize(self, markup: str, width: int, height: int) -> Image.Image:
        import cairosvg

        png_bytes = cairosvg.svg2png(
            bytestring=markup.encode("utf-8"),
            output_width=width,
            output_height=height,
            dpi=self.dpi,
        )
        image = Image.open(io.BytesIO(png_bytes))
        image.load()
        return image

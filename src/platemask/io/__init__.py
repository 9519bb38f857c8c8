"""I/O layer for platemask.

This module handles everything that crosses the boundary of the layout
pipeline: reading SVG markup, rendering it to pixels and encoding finished
masks into files.

Key responsibilities:
- Parse physical size and view window from SVG layers
- Rasterize SVG markup at an exact pixel size
- Encode exposure masks into an output container

Key classes:
- BoardMarkup: Parsed layer markup
- CairoSvgRasterizer: Default rasterizer
- ZipArchiveBuilder: Format-neutral file builder
"""

from platemask.io.markup import BoardMarkup, ViewBox, parse_markup
from platemask.io.rasterizer import CairoSvgRasterizer, Rasterizer
from platemask.io.writer import FileBuilder, ZipArchiveBuilder, encode_png

__all__ = [
    "BoardMarkup",
    "CairoSvgRasterizer",
    "FileBuilder",
    "Rasterizer",
    "ViewBox",
    "ZipArchiveBuilder",
    "encode_png",
    "parse_markup",
]

"""Shared fixtures for platemask tests.

The fake collaborators keep tests independent of the native cairo library:
FakeRasterizer paints an opaque board of the requested size and
RecordingFileBuilder remembers every call it receives.
"""

import re
from collections.abc import Sequence

import pytest
from PIL import Image

from platemask.config import PlacementOptions, PrinterProfile
from platemask.core.geometry import Affine2D
from platemask.domain import BoardLayer, ExposureCell, Side

BOARD_GREY = 128

_MATRIX_RE = re.compile(r"^\s*matrix\(([^)]*)\)\s*$")


def make_svg(
    width: str = "2mm",
    height: str = "1mm",
    view_box: str = "0 0 20 10",
    body: str = '<rect x="0" y="0" width="10" height="10" fill="black"/>',
) -> str:
    """Build a minimal layer SVG document."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="{view_box}">{body}</svg>'
    )


def parse_matrix(value: str) -> Affine2D:
    """Parse a ``matrix(a b c d e f)`` transform attribute."""
    match = _MATRIX_RE.match(value)
    if match is None:
        raise ValueError(f"Not a matrix transform: {value!r}")

    parts = [p for p in re.split(r"[\s,]+", match.group(1).strip()) if p]
    if len(parts) != 6:
        raise ValueError(f"Expected 6 matrix coefficients, got {len(parts)}")
    return Affine2D(*(float(p) for p in parts))


def apply_transform(transform: Affine2D, x: float, y: float) -> tuple[float, float]:
    """Map a point through an affine transform."""
    return (
        transform.a * x + transform.c * y + transform.e,
        transform.b * x + transform.d * y + transform.f,
    )


def is_identity(transform: Affine2D, tolerance: float = 1e-9) -> bool:
    return all(
        abs(value - expected) <= tolerance
        for value, expected in zip(
            (transform.a, transform.b, transform.c, transform.d, transform.e, transform.f),
            (1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
        )
    )


class FakeRasterizer:
    """Rasterizer painting a solid grey board at the requested size."""

    def __init__(self, value: int = BOARD_GREY) -> None:
        self.value = value
        self.calls: list[tuple[str, int, int]] = []

    def rasterize(self, markup: str, width: int, height: int) -> Image.Image:
        self.calls.append((markup, width, height))
        return Image.new("L", (width, height), self.value)


class FailingRasterizer:
    def rasterize(self, markup: str, width: int, height: int) -> Image.Image:
        raise RuntimeError("renderer crashed")


class RecordingFileBuilder:
    """File builder returning a fixed payload and recording its inputs."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[ExposureCell], bytes, PrinterProfile]] = []

    def build(
        self,
        cells: Sequence[ExposureCell],
        preview_pixels: bytes,
        profile: PrinterProfile,
    ) -> bytes:
        self.calls.append((list(cells), preview_pixels, profile))
        return f"artifact-{len(self.calls)}".encode()


@pytest.fixture
def landscape_profile() -> PrinterProfile:
    """100 x 60 pixel landscape panel at 0.1 mm per pixel."""
    return PrinterProfile(
        name="test-landscape",
        resolution=(100, 60),
        pixel_pitch_mm=0.1,
        preview_resolution=(20, 12),
        file_format="pwms",
    )


@pytest.fixture
def portrait_profile() -> PrinterProfile:
    """60 x 100 pixel portrait panel at 0.1 mm per pixel."""
    return PrinterProfile(
        name="test-portrait",
        resolution=(60, 100),
        pixel_pitch_mm=0.1,
        preview_resolution=(20, 12),
        file_format="pwms",
    )


@pytest.fixture
def options() -> PlacementOptions:
    return PlacementOptions(
        anchor_offset_mm=(0.0, 0.0),
        exposure_times={"top": 90.0, "bottom": 120.0},
    )


@pytest.fixture
def top_layer() -> BoardLayer:
    return BoardLayer(
        id="top",
        side=Side.TOP,
        filename="board.svg",
        markup=make_svg(),
    )


@pytest.fixture
def bottom_layer() -> BoardLayer:
    return BoardLayer(
        id="bottom",
        side=Side.BOTTOM,
        filename="board.svg",
        markup=make_svg(),
        inverted=True,
        display_order=1,
    )


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def file_builder() -> RecordingFileBuilder:
    return RecordingFileBuilder()


@pytest.fixture
def failing_rasterizer() -> FailingRasterizer:
    return FailingRasterizer()


@pytest.fixture
def svg_factory():
    """Factory building layer SVG documents (see make_svg)."""
    return make_svg

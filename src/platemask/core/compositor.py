"""Build plate compositing.

This module places a rasterized board on the build plate and produces the
masks sent to the printer, plus a preview derived from those exact pixels.

All drawing happens on a landscape working canvas (``max(resolution)`` by
``min(resolution)``). The orientation corrections a printer needs, a fixed
180 degree turn and a quarter turn for portrait panels, are both rotations
about the canvas center. They are applied when a mask is captured, and the
preview undoes them on the captured pixels instead of rendering the vector
artwork a second time.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from platemask.config import AnchorCorner, PrinterProfile
from platemask.core.geometry import mm_to_pixels, round_half_up
from platemask.io.markup import BoardMarkup

BLACK = 0
WHITE = 255

# Counter-clockwise quarter turns -> Pillow transpose operation
_QUARTER_TURNS = {
    1: Image.Transpose.ROTATE_90,
    2: Image.Transpose.ROTATE_180,
    3: Image.Transpose.ROTATE_270,
}


def resolve_anchor(
    corner: AnchorCorner,
    offset_px: tuple[int, int],
    plate_size: tuple[int, int],
    board_size: tuple[int, int],
) -> tuple[float, float]:
    """Resolve the top-left plate position of a board.

    Args:
        corner: Plate reference point
        offset_px: Offset from the reference point in pixels (x, y)
        plate_size: Working canvas (width, height)
        board_size: Board raster (width, height)

    Returns:
        Top-left (x, y) of the board on the working canvas. Centered boards
        can land on half pixels.

    Examples:
        >>> resolve_anchor(AnchorCorner.TOP_RIGHT, (10, 5), (100, 50), (30, 20))
        (60, 5)
    """
    off_x, off_y = offset_px
    plate_w, plate_h = plate_size
    board_w, board_h = board_size

    if corner == AnchorCorner.TOP_LEFT:
        return off_x, off_y
    if corner == AnchorCorner.TOP_RIGHT:
        return plate_w - off_x - board_w, off_y
    if corner == AnchorCorner.BOTTOM_LEFT:
        return off_x, plate_h - off_y - board_h
    if corner == AnchorCorner.BOTTOM_RIGHT:
        return plate_w - off_x - board_w, plate_h - off_y - board_h
    return (
        plate_w / 2 + off_x - board_w / 2,
        plate_h / 2 + off_y - board_h / 2,
    )


@dataclass(frozen=True)
class PlateOrientation:
    """Rotation between the working canvas and the printer's native panel."""

    rotate_180: bool
    portrait: bool

    @property
    def quarter_turns(self) -> int:
        """Net counter-clockwise quarter turns from working to native."""
        turns = 0
        if self.portrait:
            turns -= 1
        if self.rotate_180:
            turns += 2
        return turns % 4

    def apply(self, image: Image.Image) -> Image.Image:
        """Rotate a working-orientation image into native orientation."""
        return _rotate(image, self.quarter_turns)

    def undo(self, image: Image.Image) -> Image.Image:
        """Rotate a native-orientation image back into working orientation."""
        return _rotate(image, -self.quarter_turns)


def _rotate(image: Image.Image, quarter_turns: int) -> Image.Image:
    turns = quarter_turns % 4
    if turns == 0:
        return image.copy()
    return image.transpose(_QUARTER_TURNS[turns])


class PlateCanvas:
    """A board composited on the working canvas.

    The canvas is mutable: calibration masks are drawn onto it permanently
    between snapshots.
    """

    def __init__(
        self,
        image: Image.Image,
        anchor: tuple[float, float],
        board_size: tuple[int, int],
        orientation: PlateOrientation,
    ) -> None:
        self._image = image
        self.anchor = anchor
        self.board_size = board_size
        self.orientation = orientation

    @property
    def image(self) -> Image.Image:
        """Working-orientation canvas (live, not a copy)."""
        return self._image

    def snapshot(self) -> np.ndarray:
        """Capture the slicing raster in the printer's native orientation.

        Returns:
            uint8 array of shape (native_height, native_width)
        """
        return np.array(self.orientation.apply(self._image), dtype=np.uint8)

    def occlude(self, width: float, height: float) -> None:
        """Black out a region anchored at the board's bottom-left corner.

        Args:
            width: Masked width in pixels, measured from the board's left edge
            height: Masked height in pixels, measured up from the board's bottom edge
        """
        anchor_x, anchor_y = self.anchor
        bottom = anchor_y + self.board_size[1]

        left = max(round_half_up(anchor_x), 0)
        top = max(round_half_up(bottom - height), 0)
        right = min(round_half_up(anchor_x + width), self._image.width)
        lower = min(round_half_up(bottom), self._image.height)

        if right > left and lower > top:
            self._image.paste(BLACK, (left, top, right, lower))


class PlateCompositor:
    """Places board rasters on a printer's build plate.

    Example:
        compositor = PlateCompositor(profile)
        board_size = compositor.board_size(markup)
        anchor = compositor.anchor_for(options, board_size)
        canvas = compositor.compose(board_image, anchor, board_size, inverted=False)
        mask = canvas.snapshot()
        preview = compositor.preview(mask)
    """

    def __init__(self, profile: PrinterProfile) -> None:
        self.profile = profile
        self.orientation = PlateOrientation(
            rotate_180=profile.rotate_180,
            portrait=profile.is_portrait,
        )

    @property
    def plate_size(self) -> tuple[int, int]:
        """Working canvas (width, height)."""
        return self.profile.working_size

    def board_size(self, markup: BoardMarkup) -> tuple[int, int]:
        """Board raster (width, height) at the printer's pixel pitch."""
        pitch = self.profile.pixel_pitch_mm
        return mm_to_pixels(markup.width_mm, pitch), mm_to_pixels(markup.height_mm, pitch)

    def offset_pixels(self, offset_mm: tuple[float, float]) -> tuple[int, int]:
        pitch = self.profile.pixel_pitch_mm
        return mm_to_pixels(offset_mm[0], pitch), mm_to_pixels(offset_mm[1], pitch)

    def anchor_for(
        self,
        corner: AnchorCorner,
        offset_mm: tuple[float, float],
        board_size: tuple[int, int],
    ) -> tuple[float, float]:
        """Resolve a board's top-left working canvas position."""
        return resolve_anchor(
            corner,
            self.offset_pixels(offset_mm),
            self.plate_size,
            board_size,
        )

    def compose(
        self,
        board: Image.Image,
        anchor: tuple[float, float],
        board_size: tuple[int, int],
        inverted: bool,
    ) -> PlateCanvas:
        """Draw a board raster onto a fresh plate canvas.

        Transparent board pixels show the background, which is black for
        inverted layers and white otherwise.

        Args:
            board: Board raster from the rasterizer
            anchor: Top-left board position on the working canvas
            board_size: Board (width, height) in pixels
            inverted: Layer uses inverted mask polarity

        Returns:
            PlateCanvas holding the composited working canvas
        """
        canvas = Image.new("L", self.plate_size, BLACK if inverted else WHITE)
        position = (round_half_up(anchor[0]), round_half_up(anchor[1]))

        if "A" in board.getbands() or "transparency" in board.info:
            rgba = board.convert("RGBA")
            canvas.paste(rgba.convert("L"), position, mask=rgba.getchannel("A"))
        else:
            canvas.paste(board.convert("L"), position)

        return PlateCanvas(canvas, anchor, board_size, self.orientation)

    def preview(self, raster: np.ndarray) -> Image.Image:
        """Derive the working-orientation preview from a captured mask.

        Args:
            raster: Slicing raster from PlateCanvas.snapshot()

        Returns:
            Greyscale image of the plate as drawn, before orientation correction
        """
        return self.orientation.undo(Image.fromarray(raster))

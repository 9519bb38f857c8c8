"""Board layer representation.

This module defines the input domain model: one vector artwork layer of a
printed-circuit board as handed over by the caller.
"""

from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    """Board side a layer is viewed from.

    Top and bottom layers use independent mirror flags because bottom-side
    artwork is usually exported as seen from the top.
    """

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class BoardLayer:
    """One vector artwork layer.

    Attributes:
        id: Layer identifier, also the key into the exposure time table
        side: Board side the layer belongs to
        filename: Candidate output filename (not guaranteed unique)
        markup: SVG document with physical width/height and a viewBox
        inverted: Print the layer with inverted mask polarity
        display_order: Position of the layer in the caller's stackup
    """

    id: str
    side: Side
    filename: str
    markup: str
    inverted: bool = False
    display_order: int = 0

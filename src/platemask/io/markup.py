"""SVG markup parsing for board layers.

This module reads the attributes the layout pipeline depends on: the
physical board size (``width``/``height`` with units) and the drawing-unit
view window (``viewBox``).
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from platemask.exceptions import MalformedMarkupError

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

# Millimeters per unit; unitless lengths are taken as millimeters
UNIT_TO_MM: dict[str, float] = {
    "": 1.0,
    "mm": 1.0,
    "cm": 10.0,
    "in": 25.4,
}

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-z]*)\s*$")


@dataclass(frozen=True)
class ViewBox:
    """Drawing-unit view window of an SVG document."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BoardMarkup:
    """Parsed layer markup.

    Attributes:
        root: Root ``<svg>`` element
        width_mm: Physical board width
        height_mm: Physical board height
        view_box: View window in drawing units
    """

    root: ET.Element
    width_mm: float
    height_mm: float
    view_box: ViewBox

    @property
    def namespace(self) -> str:
        """Namespace prefix of the root tag (``"{uri}"`` or empty)."""
        if self.root.tag.startswith("{"):
            return self.root.tag[: self.root.tag.index("}") + 1]
        return ""


def local_name(tag: str) -> str:
    """Strip the namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


def parse_length_mm(value: str | None, attribute: str) -> float:
    """Parse a physical SVG length into millimeters.

    Args:
        value: Attribute value such as ``"50.8mm"`` or ``"2in"``
        attribute: Attribute name, for error messages

    Returns:
        Length in millimeters

    Raises:
        MalformedMarkupError: If the value is missing, has an unsupported
            unit, or is not positive
    """
    if value is None:
        raise MalformedMarkupError(f"missing '{attribute}' attribute")

    match = _LENGTH_RE.match(value)
    if match is None:
        raise MalformedMarkupError(f"invalid '{attribute}' value {value!r}")

    number, unit = match.groups()
    if unit not in UNIT_TO_MM:
        raise MalformedMarkupError(f"unsupported unit '{unit}' in '{attribute}'")

    length = float(number) * UNIT_TO_MM[unit]
    if length <= 0:
        raise MalformedMarkupError(f"'{attribute}' must be positive (got {value!r})")
    return length


def parse_view_box(value: str | None) -> ViewBox:
    """Parse a ``viewBox`` attribute.

    Raises:
        MalformedMarkupError: If the attribute is missing or invalid
    """
    if value is None:
        raise MalformedMarkupError("missing 'viewBox' attribute")

    parts = [p for p in re.split(r"[\s,]+", value.strip()) if p]
    if len(parts) != 4:
        raise MalformedMarkupError(f"viewBox needs 4 numbers, got {value!r}")

    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        raise MalformedMarkupError(f"invalid viewBox {value!r}") from None

    if width <= 0 or height <= 0:
        raise MalformedMarkupError(f"viewBox extent must be positive, got {value!r}")

    return ViewBox(x=x, y=y, width=width, height=height)


def parse_markup(markup: str) -> BoardMarkup:
    """Parse layer markup into a BoardMarkup.

    Args:
        markup: SVG document text

    Returns:
        Parsed markup with physical size and view window

    Raises:
        MalformedMarkupError: If the document is not well-formed SVG or lacks
            width, height or viewBox
    """
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as e:
        raise MalformedMarkupError(f"not well-formed XML ({e})") from e

    if local_name(root.tag) != "svg":
        raise MalformedMarkupError(f"root element is <{local_name(root.tag)}>, not <svg>")

    return BoardMarkup(
        root=root,
        width_mm=parse_length_mm(root.get("width"), "width"),
        height_mm=parse_length_mm(root.get("height"), "height"),
        view_box=parse_view_box(root.get("viewBox")),
    )

"""Side-specific mirroring of layer artwork.

A layer is mirrored about the midlines of its own view window, so the
content flips in place and its bounding box does not move. The mirror is
built as two affine transforms, a scale by -1 on each flipped axis nested
inside a translation by ``2 * (origin + extent / 2)`` on the same axis.
"""

import copy
import xml.etree.ElementTree as ET

from platemask.core.geometry import Affine2D
from platemask.io.markup import BoardMarkup, ViewBox, local_name


def mirror_transforms(
    view_box: ViewBox, flip_horizontal: bool, flip_vertical: bool
) -> tuple[Affine2D, Affine2D]:
    """Compute the (outer translate, inner scale) pair for a mirror.

    Args:
        view_box: View window of the layer in drawing units
        flip_horizontal: Mirror left-right (about the vertical midline)
        flip_vertical: Mirror top-bottom (about the horizontal midline)

    Returns:
        Tuple of (translate, scale) transforms; identity on unflipped axes
    """
    tx = 2 * (view_box.x + view_box.width / 2) if flip_horizontal else 0.0
    ty = 2 * (view_box.y + view_box.height / 2) if flip_vertical else 0.0
    sx = -1.0 if flip_horizontal else 1.0
    sy = -1.0 if flip_vertical else 1.0
    return Affine2D.translate(tx, ty), Affine2D.scale(sx, sy)


def mirror_matrix(
    view_box: ViewBox, flip_horizontal: bool, flip_vertical: bool
) -> Affine2D:
    """Compute the single affine matrix equivalent to the nested mirror."""
    translate, scale = mirror_transforms(view_box, flip_horizontal, flip_vertical)
    return translate @ scale


def apply_mirror(
    markup: BoardMarkup,
    flip_horizontal: bool,
    flip_vertical: bool,
    crisp_edges: bool = True,
) -> str:
    """Mirror layer artwork and serialize it.

    All children of the root except ``<defs>`` are moved into an inner group
    carrying the scale, which sits in an outer group carrying the translation.
    Definitions stay where they are so references into them keep working.
    The parsed markup is not modified.

    Args:
        markup: Parsed layer markup
        flip_horizontal: Mirror about the vertical midline
        flip_vertical: Mirror about the horizontal midline
        crisp_edges: Request aliased edges from the rasterizer

    Returns:
        Mirrored SVG document text
    """
    translate, scale = mirror_transforms(markup.view_box, flip_horizontal, flip_vertical)

    root = copy.deepcopy(markup.root)
    if crisp_edges:
        root.set("shape-rendering", "crispEdges")

    group_tag = f"{markup.namespace}g"
    outer = ET.Element(group_tag, {"transform": translate.to_svg()})
    inner = ET.SubElement(outer, group_tag, {"transform": scale.to_svg()})

    for child in list(root):
        if local_name(child.tag) == "defs":
            continue
        root.remove(child)
        inner.append(child)

    root.append(outer)
    return ET.tostring(root, encoding="unicode")

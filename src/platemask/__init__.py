"""Platemask - Turn PCB artwork into resin printer exposure masks.

Platemask takes the SVG layers of a printed-circuit board, places them on the
build plate of a mask-projection (MSLA) printer and produces one exposure mask
per layer, optionally expanded into a calibration grid of exposures, together
with a preview image that matches the sliced output pixel for pixel.

Example:
    $ platemask export F_Cu.svg B_Cu.svg --profile photon.json --bottom B_Cu

This will write F_Cu.zip and B_Cu.zip plus PNG previews next to them.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]

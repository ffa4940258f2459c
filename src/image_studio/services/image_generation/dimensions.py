"""Output dimension resolution from aspect tag and longer-side resolution."""

import math
from typing import NamedTuple

from image_studio.services.image_generation.catalog import ASPECT_RATIOS

MIN_SIDE = 64
SIDE_MULTIPLE = 8


class Dimensions(NamedTuple):
    width: int
    height: int


def _round_half_up(value: float) -> int:
    # Halves round toward +infinity, unlike Python's round()
    return math.floor(value + 0.5)


def snap_side(value: float) -> int:
    """Round a side length to the nearest multiple of 8, never below 64."""
    return max(MIN_SIDE, _round_half_up(value / SIDE_MULTIPLE) * SIDE_MULTIPLE)


def resolve_dimensions(aspect: str, resolution: int) -> Dimensions:
    """Compute pixel width and height for an aspect tag.

    The resolution is the length of the longer side; the shorter side is derived
    from the ratio. Both sides are snapped independently with snap_side().

    Args:
        aspect: One of the ASPECT_RATIOS tags ("1:1", "3:4", "4:3", "16:9")
        resolution: Longer side in pixels

    Returns:
        Dimensions(width, height)

    Raises:
        KeyError: If the aspect tag is unknown
    """
    width_ratio, height_ratio = ASPECT_RATIOS[aspect]
    long_is_width = width_ratio >= height_ratio

    long_side = resolution
    short_side = _round_half_up(
        resolution * min(width_ratio, height_ratio) / max(width_ratio, height_ratio)
    )

    width = long_side if long_is_width else short_side
    height = short_side if long_is_width else long_side
    return Dimensions(width=snap_side(width), height=snap_side(height))

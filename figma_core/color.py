"""
Colour conversion helpers
"""
import math
from typing import Union, Mapping
from .models import Color


def _channel(value: float) -> int:
    # Half-up rounding; round() would round 76.5 down to 76
    scaled = int(math.floor(value * 255 + 0.5))
    return max(0, min(255, scaled))


def rgb_to_hex(color: Union[Color, Mapping[str, float]]) -> str:
    """
    Convert a normalised (0..1) RGB colour to a ``#rrggbb`` string. Alpha is ignored.

    Args:
        color: Color model or mapping with r, g, b keys

    Returns:
        Lower-case 6 hex digit colour prefixed with ``#``
    """
    if isinstance(color, Color):
        r, g, b = color.r, color.g, color.b
    else:
        r, g, b = color.get("r", 0), color.get("g", 0), color.get("b", 0)
    return "#{:02x}{:02x}{:02x}".format(_channel(r), _channel(g), _channel(b))

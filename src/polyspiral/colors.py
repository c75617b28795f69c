"""
Color Model - conversions between 8-bit RGB and the hue-based spaces.

RGB components live in [0, 255]; HSL and HSV components in [0, 1].
The inverse conversions round to an integer RGB triple, which is what
surfaces consume. RGB is a render-time projection: nothing converts a
drawn color back.
"""

import colorsys
from typing import Tuple

RGB = Tuple[int, int, int]
HueTriple = Tuple[float, float, float]

COLOR_SPACES = ("hsv", "hsl")


def _to_unit(r: float, g: float, b: float) -> HueTriple:
    return r / 255.0, g / 255.0, b / 255.0


def _to_rgb255(r: float, g: float, b: float) -> RGB:
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def rgb_to_hsl(r: float, g: float, b: float) -> HueTriple:
    """Convert RGB in [0, 255] to (h, s, l) in [0, 1].

    Achromatic input (max == min channel) yields hue and saturation 0.
    """
    h, l, s = colorsys.rgb_to_hls(*_to_unit(r, g, b))
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert (h, s, l) in [0, 1] to an integer RGB triple.

    s == 0 short-circuits to gray at lightness l.
    """
    return _to_rgb255(*colorsys.hls_to_rgb(h % 1.0, l, s))


def rgb_to_hsv(r: float, g: float, b: float) -> HueTriple:
    """Convert RGB in [0, 255] to (h, s, v) in [0, 1]."""
    return colorsys.rgb_to_hsv(*_to_unit(r, g, b))


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """Convert (h, s, v) in [0, 1] to an integer RGB triple."""
    return _to_rgb255(*colorsys.hsv_to_rgb(h % 1.0, s, v))


def advance_hue(current: float, shift: float) -> float:
    """Next hue on the color wheel: (current + shift) mod 1.

    shift may be negative; the result always lands in [0, 1).
    """
    return (current + shift) % 1.0


def color_to_rgb(hue: float, saturation: float, level: float, space: str = "hsv") -> RGB:
    """Project a hue-space color to RGB.

    level is the value (HSV) or lightness (HSL) component.
    """
    if space == "hsl":
        return hsl_to_rgb(hue, saturation, level)
    return hsv_to_rgb(hue, saturation, level)

"""
Conversions between normalized image coordinates, editor pixels,
markup percentages and page points.
"""
import math
from typing import Optional


def clamp_unit(value: float) -> float:
    """Clamp a value into [0, 1]. NaN becomes 0."""
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def pixel_to_normalized(px: float, box_px: float) -> float:
    """
    Convert a pixel offset inside a box to a normalized coordinate.

    Args:
        px: Offset from the box's leading edge in pixels
        box_px: Box extent in pixels

    Returns:
        Clamped coordinate in [0, 1]; 0.0 for an empty box
    """
    if box_px <= 0:
        return 0.0
    return clamp_unit(px / box_px)


def percent_number(n: float) -> str:
    """``n * 100`` with up to 4 decimals and no trailing zeros."""
    text = f"{n * 100:.4f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def normalized_to_percent(n: float) -> str:
    """Format a normalized coordinate as a CSS percentage, e.g. ``"50%"``."""
    return f"{percent_number(n)}%"


def percent_to_normalized(text: str) -> float:
    """Inverse of normalized_to_percent; accepts values with or without ``%``."""
    return float(text.strip().rstrip("%")) / 100.0


def normalized_to_point(n: float, rendered_dimension_pt: float) -> float:
    return n * rendered_dimension_pt


def point_to_normalized(pt: float, rendered_dimension_pt: float) -> float:
    if rendered_dimension_pt == 0:
        return 0.0
    return pt / rendered_dimension_pt


def rendered_height_pt(
    width_pt: float,
    natural_width: Optional[float],
    natural_height: Optional[float],
) -> float:
    """
    Height of an image rendered ``width_pt`` wide, keeping its aspect ratio.

    Unknown or non-positive natural dimensions give a 1:1 box. The result
    is never below 1pt.
    """
    if not natural_width or not natural_height or natural_width <= 0 or natural_height <= 0:
        ratio = 1.0
    else:
        ratio = natural_height / natural_width
    return max(1.0, width_pt * ratio)

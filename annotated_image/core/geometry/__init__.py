"""
Coordinate conversion, export width and arrowhead geometry.
"""
from .transform import (
    clamp_unit,
    pixel_to_normalized,
    normalized_to_percent,
    percent_number,
    percent_to_normalized,
    normalized_to_point,
    point_to_normalized,
    rendered_height_pt,
)
from .arrows import Arrowhead, ArrowOutline, arrowhead, arrow_outline
from .width import WidthResolver, resolve_export_width, is_full_width

__all__ = [
    'clamp_unit',
    'pixel_to_normalized',
    'normalized_to_percent',
    'percent_number',
    'percent_to_normalized',
    'normalized_to_point',
    'point_to_normalized',
    'rendered_height_pt',
    'Arrowhead',
    'ArrowOutline',
    'arrowhead',
    'arrow_outline',
    'WidthResolver',
    'resolve_export_width',
    'is_full_width',
]

"""
Configuration constants for annotated image rendering and export.
"""
import os
from dataclasses import dataclass

APP_NAME = "AnnotatedImage"

# Logging
LOG_LEVEL = os.getenv("ANNOTATED_IMAGE_LOG_LEVEL", "INFO").upper()

# Annotation appearance (one fixed style per kind)
ANNOTATION_COLOR = "#ff7a00"
ANNOTATION_COLOR_RGB = (255, 122, 0)
HANDLE_BORDER_COLOR = "#ffffff"
STROKE_WIDTH_PX = 3
STROKE_WIDTH_PT = 3.0
DOT_HANDLE_SIZE_PX = 14
ARROW_HANDLE_SIZE_PX = 12
DOT_RADIUS_PT = 5.0

# Arrowhead shape, computed in normalized image space
ARROW_HEAD_LENGTH = 0.03
ARROW_WING_ANGLE_DEGREES = 30.0

# Default placements for new annotations
DEFAULT_DOT_POSITION = (0.5, 0.5)
DEFAULT_ARROW_ORIGIN = (0.3, 0.5)
DEFAULT_ARROW_TERMINUS = (0.7, 0.5)

# Paginated export
PIXELS_PER_POINT = 0.75  # 96 px/in / 72 pt/in
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
PAGE_PADDING_HORIZONTAL_PT = 35.0
PAGE_PADDING_VERTICAL_PT = 35.0
FULL_WIDTH_TOLERANCE_PX = 2.0
DEFAULT_EDITOR_WIDTH_PX = 800.0
CAPTION_FONT_SIZE_PT = 10.0
BLOCK_SPACING_PT = 12.0

# Image resolution
IMAGE_FETCH_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class PageLayout:
    """Page geometry for the paginated export, in points."""
    page_width_pt: float = A4_WIDTH_PT
    page_height_pt: float = A4_HEIGHT_PT
    padding_horizontal_pt: float = PAGE_PADDING_HORIZONTAL_PT
    padding_vertical_pt: float = PAGE_PADDING_VERTICAL_PT
    px_per_pt: float = PIXELS_PER_POINT

    @property
    def printable_width_pt(self) -> float:
        return self.page_width_pt - 2 * self.padding_horizontal_pt

    @property
    def printable_height_pt(self) -> float:
        return self.page_height_pt - 2 * self.padding_vertical_pt


DEFAULT_PAGE_LAYOUT = PageLayout()

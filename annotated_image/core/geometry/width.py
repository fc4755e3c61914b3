"""
Display width of an image in the paginated export.
"""
import logging
from typing import Optional

from annotated_image import config
from annotated_image.config import PageLayout

logger = logging.getLogger(__name__)


def is_full_width(
    desired_px: Optional[float],
    editor_width_px: float,
    tolerance_px: float = config.FULL_WIDTH_TOLERANCE_PX,
) -> bool:
    """True when the image should claim the whole printable width."""
    if not desired_px:
        return True
    return desired_px >= editor_width_px - tolerance_px


def resolve_export_width(
    desired_px: Optional[float],
    editor_width_px: float,
    printable_width_pt: float,
    px_per_pt: float = config.PIXELS_PER_POINT,
    tolerance_px: float = config.FULL_WIDTH_TOLERANCE_PX,
) -> float:
    """
    Compute the width in points an image occupies on the exported page.

    Images narrower than the editor are scaled by the same factor that maps
    the editor content width onto the printable width, so relative sizes
    survive a narrower page. Full-width images always take the printable width.

    Args:
        desired_px: Preview width set in the editor, or None
        editor_width_px: Editor content width in pixels
        printable_width_pt: Printable page width in points
        px_per_pt: Pixel-per-point ratio
        tolerance_px: Slack for detecting a full-width image

    Returns:
        Width in points, never more than ``printable_width_pt``
    """
    if is_full_width(desired_px, editor_width_px, tolerance_px):
        return printable_width_pt

    printable_width_px = printable_width_pt / px_per_pt
    if editor_width_px > 0:
        scale = min(1.0, printable_width_px / editor_width_px)
    else:
        scale = 1.0
    target_px = desired_px * scale
    return min(target_px * px_per_pt, printable_width_pt)


class WidthResolver:
    """Resolves export widths against a fixed page layout and editor width."""

    def __init__(
        self,
        layout: PageLayout = config.DEFAULT_PAGE_LAYOUT,
        editor_width_px: float = config.DEFAULT_EDITOR_WIDTH_PX,
        tolerance_px: float = config.FULL_WIDTH_TOLERANCE_PX,
    ):
        self.layout = layout
        self.editor_width_px = editor_width_px
        self.tolerance_px = tolerance_px

    def resolve(self, desired_px: Optional[float]) -> float:
        width_pt = resolve_export_width(
            desired_px,
            self.editor_width_px,
            self.layout.printable_width_pt,
            self.layout.px_per_pt,
            self.tolerance_px,
        )
        logger.debug(
            "Resolved export width %.2fpt (desired=%s, editor=%.1fpx)",
            width_pt, desired_px, self.editor_width_px,
        )
        return width_pt

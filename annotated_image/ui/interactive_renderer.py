"""
Live overlay rendering for the interactive editor.

The renderer turns an annotation set into percentage-positioned handles and
strokes, and routes pointer events on those handles to the
InteractionController.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from annotated_image import config
from annotated_image.controllers import Bounds, InteractionController
from annotated_image.core.annotations import AnnotationSet, Arrow, Dot, HandleEndpoint
from annotated_image.core.geometry import arrow_outline, normalized_to_percent, percent_to_normalized
from annotated_image.core.images import ImageContext

HANDLE_HIT_SLACK_PX = 3


@dataclass(frozen=True)
class OverlayHandle:
    """Draggable handle centered on one annotation point."""
    annotation_id: str
    endpoint: Optional[HandleEndpoint]
    left: str
    top: str
    shape: str  # "circle" or "diamond"
    size_px: int
    tooltip: str

    @property
    def x(self) -> float:
        return percent_to_normalized(self.left)

    @property
    def y(self) -> float:
        return percent_to_normalized(self.top)


@dataclass(frozen=True)
class OverlayLine:
    """Non-interactive stroke between two percentage positions."""
    annotation_id: str
    x1: str
    y1: str
    x2: str
    y2: str
    role: str  # "shaft" or "head"

    def normalized(self):
        return (
            (percent_to_normalized(self.x1), percent_to_normalized(self.y1)),
            (percent_to_normalized(self.x2), percent_to_normalized(self.y2)),
        )


@dataclass
class InteractiveOverlay:
    """Everything painted over the live image, in paint order."""
    lines: List[OverlayLine] = field(default_factory=list)
    handles: List[OverlayHandle] = field(default_factory=list)
    alt_text: str = ""


def _line(annotation_id: str, start, end, role: str) -> OverlayLine:
    return OverlayLine(
        annotation_id,
        normalized_to_percent(start[0]),
        normalized_to_percent(start[1]),
        normalized_to_percent(end[0]),
        normalized_to_percent(end[1]),
        role,
    )


class InteractiveRenderer:
    """Builds the live overlay and wires handle events to a controller."""

    def __init__(self, controller: Optional[InteractionController] = None):
        self.controller = controller

    def render(self, context: ImageContext, annotations: AnnotationSet) -> InteractiveOverlay:
        overlay = InteractiveOverlay(alt_text=context.alt_text)
        for ann in annotations:
            if isinstance(ann, Dot):
                overlay.handles.append(OverlayHandle(
                    ann.id, None,
                    normalized_to_percent(ann.x), normalized_to_percent(ann.y),
                    "circle", config.DOT_HANDLE_SIZE_PX,
                    "Drag to move. Shift+Click to delete",
                ))
            elif isinstance(ann, Arrow):
                outline = arrow_outline(ann.origin, ann.terminus)
                head = outline.head
                overlay.lines.append(_line(ann.id, outline.origin, outline.terminus, "shaft"))
                overlay.lines.append(_line(ann.id, head.tip, head.left_wing, "head"))
                overlay.lines.append(_line(ann.id, head.tip, head.right_wing, "head"))
                overlay.handles.append(OverlayHandle(
                    ann.id, HandleEndpoint.ORIGIN,
                    normalized_to_percent(ann.x), normalized_to_percent(ann.y),
                    "circle", config.ARROW_HANDLE_SIZE_PX,
                    "Drag arrow start",
                ))
                overlay.handles.append(OverlayHandle(
                    ann.id, HandleEndpoint.TERMINUS,
                    normalized_to_percent(ann.x2), normalized_to_percent(ann.y2),
                    "diamond", config.ARROW_HANDLE_SIZE_PX,
                    "Drag arrow end (shift+click to delete)",
                ))
            else:
                raise TypeError(f"Unsupported annotation: {ann!r}")
        return overlay

    def handle_at(self, overlay: InteractiveOverlay, x: float, y: float,
                  bounds: Bounds) -> Optional[OverlayHandle]:
        """Topmost handle under the pointer, or None."""
        for handle in reversed(overlay.handles):
            cx = bounds.left + handle.x * bounds.width
            cy = bounds.top + handle.y * bounds.height
            reach = handle.size_px / 2 + HANDLE_HIT_SLACK_PX
            if (x - cx) ** 2 + (y - cy) ** 2 <= reach ** 2:
                return handle
        return None

    # Event wiring

    def press(self, overlay: InteractiveOverlay, x: float, y: float,
              bounds: Bounds, shift: bool = False) -> bool:
        """
        Route a pointer press. Shift deletes the handle's annotation,
        otherwise a drag starts on it.

        Returns:
            True if the press landed on a handle
        """
        if self.controller is None:
            return False
        handle = self.handle_at(overlay, x, y, bounds)
        if handle is None:
            return False
        if shift:
            self.controller.shift_click(handle.annotation_id)
        else:
            self.controller.pointer_down(handle.annotation_id, handle.endpoint)
        return True

    def move(self, x: float, y: float, bounds: Bounds) -> None:
        if self.controller is not None:
            self.controller.pointer_move(x, y, bounds)

    def release(self) -> None:
        if self.controller is not None:
            self.controller.pointer_up()

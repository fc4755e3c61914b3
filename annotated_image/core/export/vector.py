"""
Vector rendering of annotated images for the paginated (PDF) export.

Annotations are converted from normalized coordinates into absolute points
relative to the image's top-left corner on the page.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import fitz  # PyMuPDF

from annotated_image import config
from annotated_image.core.annotations import AnnotationSet, Arrow, Dot
from annotated_image.core.geometry import (
    WidthResolver,
    arrow_outline,
    normalized_to_point,
    rendered_height_pt,
)
from annotated_image.core.images import (
    ImageContext,
    ImageLoadState,
    ImageResolver,
    ImageSource,
    resolve_context,
)

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]


def _pdf_color(rgb: Tuple[int, int, int]) -> Color:
    # PyMuPDF uses 0-1 range
    return tuple(c / 255.0 for c in rgb)


@dataclass(frozen=True)
class VectorLine:
    """A stroked segment in page points."""
    annotation_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    role: str = "shaft"  # "shaft" or "head"
    width: float = config.STROKE_WIDTH_PT
    color: Color = _pdf_color(config.ANNOTATION_COLOR_RGB)


@dataclass(frozen=True)
class VectorCircle:
    """A filled circle in page points."""
    annotation_id: str
    cx: float
    cy: float
    radius: float = config.DOT_RADIUS_PT
    color: Color = _pdf_color(config.ANNOTATION_COLOR_RGB)


VectorPrimitive = Union[VectorLine, VectorCircle]


@dataclass
class VectorPageOutput:
    """
    Drawing instructions for one annotated image.

    Attributes:
        width_pt: Rendered image width
        height_pt: Rendered image height, from the natural aspect ratio
        primitives: Lines and circles in paint order, relative to the image origin
        context: Image context after dimension resolution
    """
    width_pt: float
    height_pt: float
    primitives: List[VectorPrimitive] = field(default_factory=list)
    context: Optional[ImageContext] = None


class VectorPageRenderer:
    """Renders annotations as absolute-point vector primitives."""

    def __init__(self, width_resolver: WidthResolver = None, image_source: ImageSource = None):
        self.width_resolver = width_resolver or WidthResolver()
        self.image_source = image_source or ImageResolver()

    async def render(self, context: ImageContext, annotations: AnnotationSet) -> VectorPageOutput:
        """
        Render annotations for the paginated export.

        Suspends to resolve the image when the context does not carry natural
        dimensions. If resolution fails, a 1x1 aspect box is used instead.
        """
        if not context.has_dimensions and context.load_state != ImageLoadState.FAILED:
            context = await resolve_context(self.image_source, context)

        width_pt = self.width_resolver.resolve(context.preview_width)
        height_pt = rendered_height_pt(width_pt, context.natural_width, context.natural_height)

        primitives: List[VectorPrimitive] = []
        for ann in annotations:
            primitives.extend(self._primitives_for(ann, width_pt, height_pt))

        return VectorPageOutput(width_pt=width_pt, height_pt=height_pt,
                                primitives=primitives, context=context)

    def _primitives_for(self, annotation, width_pt: float, height_pt: float) -> List[VectorPrimitive]:
        if isinstance(annotation, Dot):
            return [VectorCircle(
                annotation.id,
                normalized_to_point(annotation.x, width_pt),
                normalized_to_point(annotation.y, height_pt),
            )]
        if isinstance(annotation, Arrow):
            outline = arrow_outline(annotation.origin, annotation.terminus).scaled(width_pt, height_pt)
            (x1, y1), (x2, y2) = outline.origin, outline.terminus
            head = outline.head
            return [
                VectorLine(annotation.id, x1, y1, x2, y2, role="shaft"),
                VectorLine(annotation.id, *head.tip, *head.left_wing, role="head"),
                VectorLine(annotation.id, *head.tip, *head.right_wing, role="head"),
            ]
        raise TypeError(f"Unsupported annotation: {annotation!r}")


def paint(page: fitz.Page, origin: Tuple[float, float], output: VectorPageOutput) -> None:
    """
    Draw rendered primitives onto a PDF page.

    Args:
        page: Target page
        origin: Top-left corner of the image on the page, in points
        output: Output of VectorPageRenderer.render
    """
    if not output.primitives:
        return

    ox, oy = origin
    shape = page.new_shape()
    for primitive in output.primitives:
        if isinstance(primitive, VectorLine):
            shape.draw_line(
                fitz.Point(ox + primitive.x1, oy + primitive.y1),
                fitz.Point(ox + primitive.x2, oy + primitive.y2),
            )
            shape.finish(color=primitive.color, width=primitive.width, lineCap=1)
        elif isinstance(primitive, VectorCircle):
            shape.draw_circle(fitz.Point(ox + primitive.cx, oy + primitive.cy), primitive.radius)
            shape.finish(color=None, fill=primitive.color)
        else:
            raise TypeError(f"Unsupported primitive: {primitive!r}")
    shape.commit()

"""
Static HTML rendering of annotated images.

Positions are percentages of the image box, so the fragment scales with the
image wherever it is embedded. Output is deterministic for identical input.
"""
import html
import logging
from typing import Iterable, List

from annotated_image import config
from annotated_image.core.annotations import (
    AnnotationSet,
    Arrow,
    Dot,
    decode_annotations,
)
from annotated_image.core.geometry import arrow_outline, normalized_to_percent, percent_number
from annotated_image.core.images import ImageBlock, ImageContext

logger = logging.getLogger(__name__)

_FIGURE_STYLE = "position:relative;display:inline-block;margin:0"
_FRAME_STYLE = "position:relative"
_OVERLAY_STYLE = "position:absolute;inset:0;pointer-events:none"
_SVG_STYLE = "position:absolute;inset:0;overflow:visible"
_DOT_STYLE = (
    "position:absolute;left:{left};top:{top};transform:translate(-50%,-50%);"
    "width:{size}px;height:{size}px;border-radius:999px;background:{color};"
    "border:2px solid {border};box-shadow:0 0 0 1px {color}"
)

_DOCUMENT_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{title}</title>
<style>body{{margin:0;padding:24px;background:Canvas;color:CanvasText}}figure{{margin:0 0 16px 0}}</style>
</head>
<body>
{content}
</body>
</html>
"""


def _attr(value) -> str:
    return html.escape(str(value), quote=True)


def _format_px(value: float) -> str:
    return f"{value:g}"


class StaticMarkupRenderer:
    """Renders an image context and its annotations as an HTML fragment."""

    def render(self, context: ImageContext, annotations: AnnotationSet) -> str:
        """
        Render a non-interactive figure.

        Args:
            context: Image being annotated
            annotations: Annotations in paint order

        Returns:
            HTML fragment string
        """
        if not context.url:
            return "<p>Add image</p>"

        parts: List[str] = [f'<figure style="{_FIGURE_STYLE}">', f'<div style="{_FRAME_STYLE}">']
        parts.append(self._render_image(context))
        parts.append(f'<div class="annotation-overlay" style="{_OVERLAY_STYLE}">')
        for ann in annotations:
            parts.append(self._render_annotation(ann))
        parts.append("</div>")
        parts.append("</div>")
        if context.caption:
            parts.append(f"<figcaption>{html.escape(context.caption)}</figcaption>")
        parts.append("</figure>")
        return "".join(parts)

    def _render_image(self, context: ImageContext) -> str:
        attrs = [f'src="{_attr(context.url)}"', f'alt="{_attr(context.alt_text)}"']
        if context.preview_width:
            width = _format_px(context.preview_width)
            attrs.append(f'width="{width}"')
            attrs.append(f'style="display:block;width:{width}px;height:auto"')
        else:
            attrs.append('style="display:block;width:100%;height:auto"')
        return f"<img {' '.join(attrs)}>"

    def _render_annotation(self, annotation) -> str:
        if isinstance(annotation, Dot):
            return self._render_dot(annotation)
        if isinstance(annotation, Arrow):
            return self._render_arrow(annotation)
        raise TypeError(f"Unsupported annotation: {annotation!r}")

    def _render_dot(self, dot: Dot) -> str:
        style = _DOT_STYLE.format(
            left=normalized_to_percent(dot.x),
            top=normalized_to_percent(dot.y),
            size=config.DOT_HANDLE_SIZE_PX,
            color=config.ANNOTATION_COLOR,
            border=config.HANDLE_BORDER_COLOR,
        )
        return f'<div class="annotation-dot" data-annotation-id="{_attr(dot.id)}" style="{style}"></div>'

    def _render_arrow(self, arrow: Arrow) -> str:
        # viewBox units are percent of the image box on both axes
        outline = arrow_outline(arrow.origin, arrow.terminus)
        head = outline.head
        points = " ".join(
            f"{percent_number(px)},{percent_number(py)}"
            for px, py in (head.tip, head.left_wing, head.right_wing)
        )
        color = config.ANNOTATION_COLOR
        return (
            f'<svg class="annotation-arrow" data-annotation-id="{_attr(arrow.id)}" '
            f'width="100%" height="100%" viewBox="0 0 100 100" preserveAspectRatio="none" '
            f'style="{_SVG_STYLE}">'
            f'<line x1="{percent_number(arrow.x)}" y1="{percent_number(arrow.y)}" '
            f'x2="{percent_number(arrow.x2)}" y2="{percent_number(arrow.y2)}" '
            f'stroke="{color}" stroke-width="{config.STROKE_WIDTH_PX}" '
            f'vector-effect="non-scaling-stroke"/>'
            f'<polygon points="{points}" fill="{color}"/>'
            f"</svg>"
        )

    def render_block(self, block: ImageBlock) -> str:
        """Render a stored block; a corrupted annotation string renders no annotations."""
        return self.render(ImageContext.from_block(block), decode_annotations(block.annotations))


def render_html_document(blocks: Iterable[ImageBlock], title: str = "untitled",
                         renderer: StaticMarkupRenderer = None) -> str:
    """
    Render several image blocks into a standalone HTML page.

    Args:
        blocks: Snapshot of the document's image blocks, in order
        title: Page title
        renderer: Markup renderer to use

    Returns:
        Complete HTML document string
    """
    renderer = renderer or StaticMarkupRenderer()
    fragments = [renderer.render_block(block) for block in blocks]
    logger.info("Rendered HTML document %r with %d image blocks", title, len(fragments))
    return _DOCUMENT_TEMPLATE.format(title=html.escape(title), content="\n".join(fragments))

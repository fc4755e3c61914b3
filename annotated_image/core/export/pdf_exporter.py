"""
Paginated PDF export of a document's annotated image blocks.
"""
import logging
from typing import List, Sequence

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, pyqtSignal

from annotated_image import config
from annotated_image.config import PageLayout
from annotated_image.core.annotations import decode_annotations
from annotated_image.core.geometry import WidthResolver
from annotated_image.core.images import (
    ImageBlock,
    ImageContext,
    ImageResolver,
    ImageSource,
    resolve_context,
)
from .vector import VectorPageOutput, VectorPageRenderer, paint

logger = logging.getLogger(__name__)

_CAPTION_LINE_HEIGHT = 1.5
_CAPTION_FONT = "helv"


def _text_width(text: str) -> float:
    return fitz.get_text_length(text, fontname=_CAPTION_FONT, fontsize=config.CAPTION_FONT_SIZE_PT)


class PDFExporter(QObject):
    """Lays out annotated image blocks on A4 pages and writes a PDF."""

    # Signal for progress updates
    progress_signal = pyqtSignal(int, int)  # current, total

    def __init__(
        self,
        layout: PageLayout = config.DEFAULT_PAGE_LAYOUT,
        editor_width_px: float = config.DEFAULT_EDITOR_WIDTH_PX,
        image_source: ImageSource = None,
    ):
        super().__init__()
        self.layout = layout
        self.image_source = image_source or ImageResolver()
        self.renderer = VectorPageRenderer(
            WidthResolver(layout, editor_width_px), self.image_source
        )

    async def export_document(self, blocks: Sequence[ImageBlock], output_path: str) -> bool:
        """
        Export image blocks to a PDF file.

        Args:
            blocks: Image blocks in document order
            output_path: Where the PDF should be saved

        Returns:
            True if successful, False otherwise
        """
        try:
            data = await self.export_document_bytes(blocks)
            with open(output_path, 'wb') as f:
                f.write(data)
        except (OSError, RuntimeError, ValueError) as e:
            logger.error("Failed to export PDF to %s: %s", output_path, e)
            return False

        logger.info("Exported %d image blocks to %s", len(blocks), output_path)
        return True

    async def export_document_bytes(self, blocks: Sequence[ImageBlock]) -> bytes:
        """
        Export image blocks to an in-memory PDF.

        The block list is copied before the first suspension point, so later
        edits to the document do not affect a running export.
        """
        snapshot: List[ImageBlock] = list(blocks)
        doc = fitz.open()
        try:
            page = self._new_page(doc)
            cursor_y = self.layout.padding_vertical_pt
            total = len(snapshot)

            for index, block in enumerate(snapshot):
                self.progress_signal.emit(index, total)

                if not block.url:
                    logger.debug("Skipping block %s without an image", block.block_id)
                    continue

                output = await self._render_block(block)
                block_height = output.height_pt + self._caption_height(block)

                page_bottom = self.layout.page_height_pt - self.layout.padding_vertical_pt
                if (cursor_y + block_height > page_bottom
                        and cursor_y > self.layout.padding_vertical_pt):
                    page = self._new_page(doc)
                    cursor_y = self.layout.padding_vertical_pt

                self._place_block(page, block, output, cursor_y)
                cursor_y += block_height + config.BLOCK_SPACING_PT

            self.progress_signal.emit(total, total)
            return doc.tobytes(garbage=4, deflate=True)
        finally:
            doc.close()

    async def _render_block(self, block: ImageBlock) -> VectorPageOutput:
        context = await resolve_context(self.image_source, ImageContext.from_block(block))
        annotations = decode_annotations(block.annotations)
        return await self.renderer.render(context, annotations)

    def _new_page(self, doc: fitz.Document) -> fitz.Page:
        return doc.new_page(width=self.layout.page_width_pt, height=self.layout.page_height_pt)

    def _caption_lines(self, caption: str) -> List[str]:
        """Wrap a caption to the printable width, breaking at spaces where possible."""
        max_width = self.layout.printable_width_pt
        lines: List[str] = []
        for paragraph in caption.splitlines() or [""]:
            line = ""
            for word in paragraph.split(" "):
                candidate = f"{line} {word}" if line else word
                if _text_width(candidate) <= max_width:
                    line = candidate
                    continue
                if line:
                    lines.append(line)
                # Words wider than the page are split by character
                while _text_width(word) > max_width and len(word) > 1:
                    cut = len(word) - 1
                    while cut > 1 and _text_width(word[:cut]) > max_width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                line = word
            lines.append(line)
        return lines

    def _caption_height(self, block: ImageBlock) -> float:
        if not block.caption:
            return 0.0
        line_count = len(self._caption_lines(block.caption))
        return config.CAPTION_FONT_SIZE_PT * _CAPTION_LINE_HEIGHT * line_count + 4

    def _place_block(self, page: fitz.Page, block: ImageBlock,
                     output: VectorPageOutput, top: float) -> None:
        """Draw image, annotations and caption of one block at ``top``."""
        left = self.layout.padding_horizontal_pt
        rect = fitz.Rect(left, top, left + output.width_pt, top + output.height_pt)

        context = output.context
        if context is not None and context.data:
            try:
                page.insert_image(rect, stream=context.data, keep_proportion=False)
            except (RuntimeError, ValueError) as e:
                logger.warning("Could not embed image of block %s: %s", block.block_id, e)

        paint(page, (left, top), output)

        if block.caption:
            caption_rect = fitz.Rect(
                left, rect.y1 + 4,
                left + self.layout.printable_width_pt, rect.y1 + self._caption_height(block),
            )
            text = "\n".join(self._caption_lines(block.caption))
            overflow = page.insert_textbox(caption_rect, text, fontsize=config.CAPTION_FONT_SIZE_PT,
                                           fontname=_CAPTION_FONT)
            if overflow < 0:
                logger.warning("Caption of block %s did not fit its box", block.block_id)

"""
Static markup and paginated PDF export.
"""
from .markup import StaticMarkupRenderer, render_html_document
from .vector import (
    VectorCircle,
    VectorLine,
    VectorPageOutput,
    VectorPageRenderer,
    paint,
)
from .pdf_exporter import PDFExporter
from .export_worker import ExportWorker

__all__ = [
    'StaticMarkupRenderer',
    'render_html_document',
    'VectorCircle',
    'VectorLine',
    'VectorPageOutput',
    'VectorPageRenderer',
    'paint',
    'PDFExporter',
    'ExportWorker',
]

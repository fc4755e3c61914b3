"""
Background worker for image resolution.
"""
import asyncio
import logging

from PyQt5.QtCore import QThread, pyqtSignal

from .images import ImageContext, ImageResolver, ImageSource, resolve_context

logger = logging.getLogger(__name__)


class ImageLoadWorker(QThread):
    """Worker thread resolving an image context without freezing the UI."""

    # Signals
    loaded = pyqtSignal(object)  # ImageContext, READY or FAILED

    def __init__(self, context: ImageContext, image_source: ImageSource = None, parent=None):
        super().__init__(parent)
        self.context = context
        self.image_source = image_source or ImageResolver()

    def run(self):
        """Resolve the image in a background thread."""
        try:
            context = asyncio.run(resolve_context(self.image_source, self.context))
        except Exception:
            logger.exception("Resolving image %s failed", self.context.url[:80])
            context = self.context.with_failure()
        self.loaded.emit(context)

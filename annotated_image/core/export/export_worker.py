import asyncio
import logging
import os
import shutil
import tempfile

from PyQt5.QtCore import QThread, pyqtSignal

from .pdf_exporter import PDFExporter

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """Worker thread for exporting a document to PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message
    page_progress = pyqtSignal(int, int)  # current, total blocks

    def __init__(self, blocks, output_pdf, exporter: PDFExporter = None):
        super().__init__()
        # Exports work on the blocks as they were when the export started
        self.blocks = list(blocks)
        self.output_pdf = output_pdf
        self.exporter = exporter or PDFExporter()
        self.temp_path = None

    def run(self):
        """Execute the export in a background thread."""
        self.exporter.progress_signal.connect(self._on_page_progress)
        try:
            # Write next to the target so the final move is atomic
            output_dir = os.path.dirname(os.path.abspath(self.output_pdf))
            temp_fd, self.temp_path = tempfile.mkstemp(suffix='.pdf', dir=output_dir)
            os.close(temp_fd)

            self.progress.emit("Exporting annotated images...")
            success = asyncio.run(
                self.exporter.export_document(self.blocks, self.temp_path)
            )

            if success:
                self.progress.emit("Finalizing...")
                shutil.move(self.temp_path, self.output_pdf)
                self.temp_path = None
                self.finished.emit(True, "Document exported to PDF.")
            else:
                self._cleanup()
                self.finished.emit(False, "Failed to export document to PDF.")

        except Exception as e:
            logger.exception("Export to %s failed", self.output_pdf)
            self._cleanup()
            self.finished.emit(False, f"Error during export: {e}")
        finally:
            self.exporter.progress_signal.disconnect(self._on_page_progress)

    def _cleanup(self):
        if self.temp_path and os.path.exists(self.temp_path):
            os.remove(self.temp_path)
        self.temp_path = None

    def _on_page_progress(self, current, total):
        """Handle block-level progress updates."""
        self.page_progress.emit(current, total)

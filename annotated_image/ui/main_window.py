"""
Minimal editor window hosting one annotated image block.
"""
import logging
import os
from pathlib import Path

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPixmap
from PyQt5.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QProgressDialog,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from annotated_image.controllers import InteractionController
from annotated_image.core.annotations import BlockPropertyStore, JsonFilePropertyStore
from annotated_image.core.export import ExportWorker, render_html_document
from annotated_image.core.image_worker import ImageLoadWorker
from annotated_image.core.images import ImageBlock, ImageContext
from .annotated_image_widget import AnnotatedImageWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Shows an image, its annotation overlay, and export buttons."""

    def __init__(self, image_path: str, preview_width: float = None,
                 store: BlockPropertyStore = None):
        super().__init__()
        self.image_path = os.path.abspath(image_path)
        self.block_id = f"image:{self.image_path}"
        self.preview_width = preview_width
        self.store = store or JsonFilePropertyStore()
        self.export_worker = None
        self.load_worker = None

        self.controller = InteractionController(self.block_id, self.store, self)
        self.setWindowTitle(f"Annotated Image - {os.path.basename(self.image_path)}")
        self.setup_ui()

    def setup_ui(self):
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 8, 10, 8)

        # Top toolbar
        top_frame = QFrame(central)
        top_layout = QHBoxLayout(top_frame)
        top_layout.setContentsMargins(0, 0, 0, 0)
        top_layout.setSpacing(8)

        top_layout.addWidget(QLabel("Caption:", top_frame))
        self.caption_edit = QLineEdit(top_frame)
        top_layout.addWidget(self.caption_edit, 1)

        self.export_html_button = QPushButton("Export HTML", top_frame)
        self.export_html_button.clicked.connect(self.export_html)
        top_layout.addWidget(self.export_html_button)

        self.export_pdf_button = QPushButton("Export PDF", top_frame)
        self.export_pdf_button.clicked.connect(self.export_pdf)
        top_layout.addWidget(self.export_pdf_button)
        layout.addWidget(top_frame)

        # Image
        context = ImageContext(url=self.image_path, preview_width=self.preview_width,
                               name=os.path.basename(self.image_path))
        pixmap = QPixmap(self.image_path)
        self.image_widget = AnnotatedImageWidget(context, self.controller, pixmap)
        self._load_context(context)

        scroll_area = QScrollArea(central)
        scroll_area.setWidget(self.image_widget)
        scroll_area.setAlignment(Qt.AlignCenter)
        layout.addWidget(scroll_area, 1)

        tips = QLabel("Drag handles to move. Shift+Click a handle to delete.", central)
        tips.setStyleSheet("color: #8899AA; font-size: 11px;")
        layout.addWidget(tips)

        self.setCentralWidget(central)

    def _load_context(self, context: ImageContext):
        """Resolve natural dimensions off the UI thread."""
        self.load_worker = ImageLoadWorker(context, parent=self)
        self.load_worker.loaded.connect(self._on_context_loaded)
        self.load_worker.finished.connect(self.load_worker.deleteLater)
        self.load_worker.start()

    def _on_context_loaded(self, context: ImageContext):
        self.image_widget.set_context(context)
        self.load_worker = None

    def current_block(self) -> ImageBlock:
        """Snapshot of the edited block."""
        return ImageBlock(
            block_id=self.block_id,
            url=Path(self.image_path).as_uri(),
            caption=self.caption_edit.text(),
            name=os.path.basename(self.image_path),
            preview_width=self.image_widget.width() if self.preview_width else None,
            annotations=self.store.get(self.block_id) or "[]",
        )

    def export_html(self):
        output_path, _ = QFileDialog.getSaveFileName(
            self, "Export HTML", self._default_output(".html"), "HTML Files (*.html)"
        )
        if not output_path:
            return False

        title = Path(self.image_path).stem
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(render_html_document([self.current_block()], title))
        except OSError as e:
            logger.error("HTML export failed: %s", e)
            QMessageBox.critical(self, "Export Failed", str(e))
            return False
        QMessageBox.information(self, "Success", "Document exported to HTML.")
        return True

    def export_pdf(self):
        """Export to PDF using a background thread."""
        output_path, _ = QFileDialog.getSaveFileName(
            self, "Export PDF", self._default_output(".pdf"), "PDF Files (*.pdf)"
        )
        if not output_path:
            return False

        progress = QProgressDialog("Preparing export...", None, 0, 100, self)
        progress.setWindowTitle("Exporting PDF")
        progress.setWindowModality(Qt.WindowModal)
        progress.setMinimumDuration(0)
        progress.setAutoClose(False)
        progress.setAutoReset(False)
        progress.show()

        self.export_worker = ExportWorker([self.current_block()], output_path)

        def on_page_progress(current, total):
            if total > 0:
                progress.setValue(int((current / total) * 100))

        def on_finished(success, message):
            progress.close()
            if success:
                QMessageBox.information(self, "Success", message)
            else:
                QMessageBox.critical(self, "Export Failed", message)
            self.export_worker.deleteLater()
            self.export_worker = None

        self.export_worker.progress.connect(progress.setLabelText)
        self.export_worker.page_progress.connect(on_page_progress)
        self.export_worker.finished.connect(on_finished)
        self.export_worker.start()
        return True

    def _default_output(self, suffix: str) -> str:
        return str(Path(self.image_path).with_suffix(suffix))

"""
Interactive annotated image widget.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPen, QPixmap, QPolygonF
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QToolButton, QToolTip, QWidget

from annotated_image import config
from annotated_image.controllers import Bounds, InteractionController
from annotated_image.core.images import ImageContext
from .interactive_renderer import InteractiveOverlay, InteractiveRenderer, OverlayHandle

logger = logging.getLogger(__name__)


class AnnotatedImageWidget(QLabel):
    """
    Image label with a draggable dot/arrow overlay.

    Features:
    - Drag dots and arrow endpoints
    - Shift+click a handle to delete its annotation
    - "+ Dot" / "+ Arrow" buttons shown while hovered
    """

    def __init__(self, context: ImageContext, controller: InteractionController,
                 pixmap: Optional[QPixmap] = None, parent=None):
        super().__init__(parent)

        self.context = context
        self.controller = controller
        self.renderer = InteractiveRenderer(controller)
        self.overlay = InteractiveOverlay()
        self._source_pixmap = pixmap

        self.setMouseTracking(True)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self._setup_buttons()
        self._render_image()
        self.refresh()

        self.controller.annotations_changed.connect(self._on_annotations_changed)

    def _setup_buttons(self):
        self.button_bar = QWidget(self)
        self.button_bar.setStyleSheet(
            "background: rgba(0, 0, 0, 115); border-radius: 6px; color: white;"
        )
        layout = QHBoxLayout(self.button_bar)
        layout.setContentsMargins(6, 3, 6, 3)
        layout.setSpacing(6)

        self.add_dot_button = QToolButton(self.button_bar)
        self.add_dot_button.setText("+ Dot")
        self.add_dot_button.clicked.connect(self.controller.add_dot)
        layout.addWidget(self.add_dot_button)

        self.add_arrow_button = QToolButton(self.button_bar)
        self.add_arrow_button.setText("+ Arrow")
        self.add_arrow_button.clicked.connect(self.controller.add_arrow)
        layout.addWidget(self.add_arrow_button)

        self.button_bar.adjustSize()
        self.button_bar.hide()

    def _render_image(self):
        """Scale the source pixmap to the preview width."""
        pixmap = self._source_pixmap
        if pixmap is None or pixmap.isNull():
            self.setText(self.context.alt_text)
            self.setMinimumSize(200, 200)
            return
        if self.context.preview_width:
            pixmap = pixmap.scaledToWidth(int(self.context.preview_width), Qt.SmoothTransformation)
        self.setPixmap(pixmap)
        self.setFixedSize(pixmap.size())

    def set_context(self, context: ImageContext):
        """Swap in a resolved image context."""
        self.context = context
        self.refresh()

    def image_bounds(self) -> Bounds:
        """Image box in widget coordinates."""
        return Bounds(0.0, 0.0, float(self.width()), float(self.height()))

    def refresh(self):
        """Re-read annotations from the store and repaint."""
        self.overlay = self.renderer.render(self.context, self.controller.annotations())
        self.update()

    def _on_annotations_changed(self, block_id: str, _raw: str):
        if block_id == self.controller.block_id:
            self.refresh()

    # Hover

    def enterEvent(self, event):
        self.button_bar.move(self.width() - self.button_bar.width() - 6, 6)
        self.button_bar.show()
        self.button_bar.raise_()
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.button_bar.hide()
        super().leaveEvent(event)

    # Mouse event handlers

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)

        shift = bool(event.modifiers() & Qt.ShiftModifier)
        if self.renderer.press(self.overlay, event.x(), event.y(), self.image_bounds(), shift):
            event.accept()
            if not shift:
                self.setCursor(Qt.ClosedHandCursor)
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self.controller.is_dragging:
            # Qt keeps delivering moves to the grabbing widget outside its bounds
            self.renderer.move(event.x(), event.y(), self.image_bounds())
            return

        handle = self.renderer.handle_at(self.overlay, event.x(), event.y(), self.image_bounds())
        if handle is not None:
            self.setCursor(Qt.OpenHandCursor)
            QToolTip.showText(event.globalPos(), handle.tooltip, self)
        else:
            self.setCursor(Qt.ArrowCursor)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        self.renderer.release()
        self.setCursor(Qt.ArrowCursor)

    # Paint methods

    def paintEvent(self, event):
        super().paintEvent(event)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        try:
            self._paint_overlay(painter)
        finally:
            painter.end()

    def _to_widget(self, x: float, y: float) -> QPointF:
        bounds = self.image_bounds()
        return QPointF(bounds.left + x * bounds.width, bounds.top + y * bounds.height)

    def _paint_overlay(self, painter: QPainter):
        """Paint strokes, then handles on top."""
        color = QColor(config.ANNOTATION_COLOR)
        pen = QPen(color, config.STROKE_WIDTH_PX)
        pen.setCapStyle(Qt.RoundCap)
        painter.setPen(pen)
        for line in self.overlay.lines:
            start, end = line.normalized()
            painter.drawLine(self._to_widget(*start), self._to_widget(*end))

        for handle in self.overlay.handles:
            self._paint_handle(painter, handle, color)

    def _paint_handle(self, painter: QPainter, handle: OverlayHandle, color: QColor):
        center = self._to_widget(handle.x, handle.y)
        half = handle.size_px / 2
        painter.setPen(QPen(QColor(config.HANDLE_BORDER_COLOR), 2))
        painter.setBrush(QBrush(color))
        if handle.shape == "diamond":
            painter.drawPolygon(QPolygonF([
                QPointF(center.x(), center.y() - half),
                QPointF(center.x() + half, center.y()),
                QPointF(center.x(), center.y() + half),
                QPointF(center.x() - half, center.y()),
            ]))
        else:
            painter.drawEllipse(center, half, half)
        painter.setBrush(Qt.NoBrush)

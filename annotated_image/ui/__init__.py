"""
User interface components for the annotated image editor.
"""
from .annotated_image_widget import AnnotatedImageWidget
from .interactive_renderer import (
    InteractiveOverlay,
    InteractiveRenderer,
    OverlayHandle,
    OverlayLine,
)
from .main_window import MainWindow

__all__ = [
    'AnnotatedImageWidget',
    'InteractiveOverlay',
    'InteractiveRenderer',
    'OverlayHandle',
    'OverlayLine',
    'MainWindow',
]

"""
Controller for pointer-driven editing of one block's annotations.
"""
import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from annotated_image.core.annotations import (
    Annotation,
    AnnotationSet,
    Arrow,
    BlockPropertyStore,
    Dot,
    HandleEndpoint,
    decode_annotations,
    default_arrow,
    default_dot,
    encode_annotations,
    find_annotation,
    move_handle,
)
from annotated_image.core.geometry import pixel_to_normalized

logger = logging.getLogger(__name__)


class Bounds(NamedTuple):
    """Bounding box of the image on screen, in pixels."""
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class DragState:
    """An active drag of one handle."""
    annotation_id: str
    endpoint: Optional[HandleEndpoint] = None


class InteractionController(QObject):
    """
    The only mutator of an image block's annotation set.

    The controller is either idle or dragging exactly one handle. Every
    mutation decodes the block's current string from the store, applies the
    change and writes the re-encoded set back.
    """

    # Signals
    annotations_changed = pyqtSignal(str, str)  # block_id, encoded annotations
    drag_started = pyqtSignal(str)  # annotation_id
    drag_finished = pyqtSignal(str)  # annotation_id

    def __init__(self, block_id: str, store: BlockPropertyStore, parent: QObject = None):
        super().__init__(parent)
        self.block_id = block_id
        self.store = store
        self._drag: Optional[DragState] = None

    @property
    def drag_state(self) -> Optional[DragState]:
        """Current drag, or None when idle."""
        return self._drag

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def annotations(self) -> AnnotationSet:
        """Decode the block's current annotation set."""
        return decode_annotations(self.store.get(self.block_id))

    def _write(self, annotations: AnnotationSet) -> None:
        raw = encode_annotations(annotations)
        self.store.set(self.block_id, raw)
        self.annotations_changed.emit(self.block_id, raw)

    # Actions

    def add_dot(self) -> Dot:
        """Append a dot at the image center. Does not start a drag."""
        annotations = self.annotations()
        dot = default_dot(annotations)
        annotations.append(dot)
        self._write(annotations)
        logger.info("Added dot %s to block %s", dot.id, self.block_id)
        return dot

    def add_arrow(self) -> Arrow:
        """Append a short horizontal arrow. Does not start a drag."""
        annotations = self.annotations()
        arrow = default_arrow(annotations)
        annotations.append(arrow)
        self._write(annotations)
        logger.info("Added arrow %s to block %s", arrow.id, self.block_id)
        return arrow

    def shift_click(self, annotation_id: str) -> bool:
        """
        Delete the annotation owning the clicked handle.

        Only acts while idle. Returns True if an annotation was removed.
        """
        if self._drag is not None:
            return False

        annotations = self.annotations()
        index = find_annotation(annotations, annotation_id)
        if index is None:
            return False

        del annotations[index]
        self._write(annotations)
        logger.info("Deleted annotation %s from block %s", annotation_id, self.block_id)
        return True

    # Pointer events

    def pointer_down(self, annotation_id: str, endpoint: Optional[HandleEndpoint] = None) -> bool:
        """
        Begin dragging a handle.

        Args:
            annotation_id: Annotation owning the handle
            endpoint: None for a Dot, ORIGIN or TERMINUS for an Arrow

        Returns:
            True if a drag started
        """
        if self._drag is not None:
            logger.debug("Ignoring pointer down on %s: drag already active", annotation_id)
            return False

        self._drag = DragState(annotation_id, endpoint)
        self.drag_started.emit(annotation_id)
        return True

    def pointer_move(self, x: float, y: float, bounds: Bounds) -> Optional[Annotation]:
        """
        Move the dragged handle to the pointer position.

        Args:
            x: Pointer x in the same pixel space as ``bounds``
            y: Pointer y in the same pixel space as ``bounds``
            bounds: Image bounding box

        Returns:
            The updated annotation, or None if nothing moved
        """
        drag = self._drag
        if drag is None:
            return None

        annotations = self.annotations()
        index = find_annotation(annotations, drag.annotation_id)
        if index is None:
            return None

        nx = pixel_to_normalized(x - bounds.left, bounds.width)
        ny = pixel_to_normalized(y - bounds.top, bounds.height)

        current = annotations[index]
        if isinstance(current, Arrow) and drag.endpoint is None:
            logger.warning("Drag on arrow %s has no endpoint; ignoring move", current.id)
            return None

        updated = move_handle(current, drag.endpoint, nx, ny)
        annotations[index] = updated
        self._write(annotations)
        logger.debug("Moved %s to (%.4f, %.4f)", drag.annotation_id, nx, ny)
        return updated

    def pointer_up(self) -> None:
        """End any active drag, wherever the pointer is."""
        drag = self._drag
        if drag is None:
            return
        self._drag = None
        self.drag_finished.emit(drag.annotation_id)

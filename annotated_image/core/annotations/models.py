"""
Annotation data models.

An annotation is one of two closed variants, Dot or Arrow. Coordinates are
normalized to the image box and clamped into [0, 1] whenever an instance is
built, so a stored annotation never holds an out-of-range value.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from annotated_image import config
from annotated_image.core.geometry.transform import clamp_unit


class AnnotationType(Enum):
    DOT = "dot"
    ARROW = "arrow"


class HandleEndpoint(Enum):
    """Which end of an arrow a handle drags."""
    ORIGIN = "origin"
    TERMINUS = "terminus"


@dataclass(frozen=True)
class Dot:
    """A single point marker."""
    id: str
    x: float
    y: float
    kind: AnnotationType = field(default=AnnotationType.DOT, init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "x", clamp_unit(self.x))
        object.__setattr__(self, "y", clamp_unit(self.y))

    def moved_to(self, x: float, y: float) -> "Dot":
        return Dot(self.id, x, y)


@dataclass(frozen=True)
class Arrow:
    """
    A straight arrow from origin (x, y) to terminus (x2, y2).

    The head is drawn at the terminus.
    """
    id: str
    x: float
    y: float
    x2: float
    y2: float
    kind: AnnotationType = field(default=AnnotationType.ARROW, init=False, repr=False)

    def __post_init__(self):
        for name in ("x", "y", "x2", "y2"):
            object.__setattr__(self, name, clamp_unit(getattr(self, name)))

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def terminus(self) -> Tuple[float, float]:
        return (self.x2, self.y2)

    def with_endpoint(self, endpoint: HandleEndpoint, x: float, y: float) -> "Arrow":
        """Return a copy with one endpoint moved."""
        if endpoint == HandleEndpoint.ORIGIN:
            return Arrow(self.id, x, y, self.x2, self.y2)
        if endpoint == HandleEndpoint.TERMINUS:
            return Arrow(self.id, self.x, self.y, x, y)
        raise ValueError(f"Unknown arrow endpoint: {endpoint!r}")


Annotation = Union[Dot, Arrow]
AnnotationSet = List[Annotation]


def new_annotation_id(existing: Iterable[Annotation] = ()) -> str:
    """Generate a short id not used by any annotation in ``existing``."""
    taken = {ann.id for ann in existing}
    while True:
        candidate = uuid.uuid4().hex[:8]
        if candidate not in taken:
            return candidate


def default_dot(existing: Iterable[Annotation] = ()) -> Dot:
    """A new dot at the image center."""
    x, y = config.DEFAULT_DOT_POSITION
    return Dot(new_annotation_id(existing), x, y)


def default_arrow(existing: Iterable[Annotation] = ()) -> Arrow:
    """A new short horizontal arrow left of center."""
    x, y = config.DEFAULT_ARROW_ORIGIN
    x2, y2 = config.DEFAULT_ARROW_TERMINUS
    return Arrow(new_annotation_id(existing), x, y, x2, y2)


def find_annotation(annotations: AnnotationSet, annotation_id: str) -> Optional[int]:
    """Index of the annotation with ``annotation_id``, or None."""
    for i, ann in enumerate(annotations):
        if ann.id == annotation_id:
            return i
    return None


def move_handle(
    annotation: Annotation, endpoint: Optional[HandleEndpoint], x: float, y: float
) -> Annotation:
    """
    Move the handle of an annotation to (x, y).

    Args:
        annotation: Dot or Arrow to move
        endpoint: None for a Dot, ORIGIN or TERMINUS for an Arrow
        x: New normalized x
        y: New normalized y

    Returns:
        The updated annotation
    """
    if isinstance(annotation, Dot):
        return annotation.moved_to(x, y)
    if isinstance(annotation, Arrow):
        return annotation.with_endpoint(endpoint, x, y)
    raise TypeError(f"Unsupported annotation: {annotation!r}")

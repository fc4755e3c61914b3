"""
String codec for annotation sets.

The persisted form is a compact JSON array::

    [{"id":"a1","type":"dot","x":0.5,"y":0.5},
     {"id":"b2","type":"arrow","x":0.3,"y":0.5,"x2":0.7,"y2":0.5}]

Decoding never raises: malformed entries are dropped and unusable input
decodes to an empty set.
"""
import json
import logging
import math
from typing import Any, Dict, Iterable, Optional

from annotated_image.errors import MalformedAnnotationData
from .models import Annotation, AnnotationSet, AnnotationType, Arrow, Dot

logger = logging.getLogger(__name__)


def _coordinate(entry: Dict[str, Any], key: str) -> float:
    value = entry.get(key)
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedAnnotationData(f"{key!r} is not a number: {value!r}")
    try:
        value = float(value)
    except OverflowError:
        raise MalformedAnnotationData(f"{key!r} is out of float range")
    if not math.isfinite(value):
        raise MalformedAnnotationData(f"{key!r} is not finite: {value!r}")
    return value


def annotation_from_dict(entry: Any) -> Annotation:
    """
    Build a Dot or Arrow from one decoded JSON entry.

    Raises:
        MalformedAnnotationData: If the entry is not a well-formed annotation
    """
    if not isinstance(entry, dict):
        raise MalformedAnnotationData(f"Entry is not an object: {entry!r}")

    ann_id = entry.get("id")
    if not isinstance(ann_id, str):
        raise MalformedAnnotationData(f"Missing or non-string id: {ann_id!r}")

    try:
        kind = AnnotationType(entry.get("type"))
    except ValueError:
        raise MalformedAnnotationData(f"Unknown annotation type: {entry.get('type')!r}")

    x = _coordinate(entry, "x")
    y = _coordinate(entry, "y")
    if kind == AnnotationType.DOT:
        return Dot(ann_id, x, y)
    if kind == AnnotationType.ARROW:
        return Arrow(ann_id, x, y, _coordinate(entry, "x2"), _coordinate(entry, "y2"))
    raise MalformedAnnotationData(f"Unhandled annotation type: {kind!r}")


def annotation_to_dict(annotation: Annotation) -> Dict[str, Any]:
    """Convert an annotation to its JSON-ready dictionary."""
    if isinstance(annotation, Dot):
        return {
            "id": annotation.id,
            "type": AnnotationType.DOT.value,
            "x": annotation.x,
            "y": annotation.y,
        }
    if isinstance(annotation, Arrow):
        return {
            "id": annotation.id,
            "type": AnnotationType.ARROW.value,
            "x": annotation.x,
            "y": annotation.y,
            "x2": annotation.x2,
            "y2": annotation.y2,
        }
    raise TypeError(f"Unsupported annotation: {annotation!r}")


def decode_annotations(raw: Optional[str]) -> AnnotationSet:
    """
    Decode a persisted annotation string.

    Args:
        raw: JSON array string, or None

    Returns:
        List of annotations in stored order; empty for absent or unusable input
    """
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.debug("Ignoring unparseable annotation data: %s", e)
        return []

    if not isinstance(data, list):
        logger.debug("Ignoring annotation data that is not an array: %r", type(data).__name__)
        return []

    annotations: AnnotationSet = []
    for entry in data:
        try:
            annotations.append(annotation_from_dict(entry))
        except MalformedAnnotationData as e:
            logger.debug("Dropping malformed annotation entry: %s", e)
    return annotations


def encode_annotations(annotations: Iterable[Annotation]) -> str:
    """Serialize annotations to their persisted string form, preserving order."""
    return json.dumps(
        [annotation_to_dict(ann) for ann in annotations],
        separators=(",", ":"),
        ensure_ascii=False,
    )

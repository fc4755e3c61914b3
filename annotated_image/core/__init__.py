"""
Core logic for annotated images: model, geometry, image resolution and export.
"""
from .annotations import (
    Annotation,
    AnnotationType,
    Arrow,
    Dot,
    HandleEndpoint,
    decode_annotations,
    encode_annotations,
)
from .images import ImageBlock, ImageContext, ImageLoadState, ImageResolver, ResolvedImage

__all__ = [
    "Annotation",
    "AnnotationType",
    "Arrow",
    "Dot",
    "HandleEndpoint",
    "decode_annotations",
    "encode_annotations",
    "ImageBlock",
    "ImageContext",
    "ImageLoadState",
    "ImageResolver",
    "ResolvedImage",
]

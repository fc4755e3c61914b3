"""
Annotation model, string codec and block property stores.
"""
from .models import (
    Annotation,
    AnnotationSet,
    AnnotationType,
    Arrow,
    Dot,
    HandleEndpoint,
    default_arrow,
    default_dot,
    find_annotation,
    move_handle,
    new_annotation_id,
)
from .codec import decode_annotations, encode_annotations
from .store import BlockPropertyStore, JsonFilePropertyStore, MemoryPropertyStore

__all__ = [
    'Annotation',
    'AnnotationSet',
    'AnnotationType',
    'Arrow',
    'Dot',
    'HandleEndpoint',
    'default_arrow',
    'default_dot',
    'find_annotation',
    'move_handle',
    'new_annotation_id',
    'decode_annotations',
    'encode_annotations',
    'BlockPropertyStore',
    'JsonFilePropertyStore',
    'MemoryPropertyStore',
]

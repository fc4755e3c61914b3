"""
Exception types for the annotated image engine.

None of these escape an export: the codec swallows MalformedAnnotationData
and the vector renderer replaces ImageResolutionError with 1x1 fallback
dimensions.
"""


class AnnotatedImageError(Exception):
    """Base class for annotated image errors."""


class MalformedAnnotationData(AnnotatedImageError, ValueError):
    """Raised when a persisted annotation entry cannot be decoded."""


class ImageResolutionError(AnnotatedImageError):
    """Raised when an image URL cannot be resolved to pixel data."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f"Could not resolve image {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

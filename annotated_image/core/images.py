"""
Image blocks, per-render image context, and URL-to-pixels resolution.
"""
import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, Tuple
from urllib.parse import unquote, urlparse

import fitz  # PyMuPDF
import httpx

from annotated_image import config
from annotated_image.errors import ImageResolutionError

logger = logging.getLogger(__name__)

FALLBACK_DIMENSIONS = (1, 1)


class ImageLoadState(Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageBlock:
    """
    Snapshot of an annotated image block as the host document stores it.

    Attributes:
        block_id: Identifier of the owning block
        url: Image URL, path or data URL; empty when no image is set
        caption: Caption text
        name: File name of the image
        preview_width: Width the user gave the image in the editor, in px
        annotations: Persisted annotation string
    """
    block_id: str
    url: str = ""
    caption: str = ""
    name: str = ""
    preview_width: Optional[float] = None
    annotations: str = "[]"


@dataclass(frozen=True)
class ResolvedImage:
    """Image bytes with their natural pixel dimensions."""
    data: bytes
    natural_width: int
    natural_height: int


@dataclass(frozen=True)
class ImageContext:
    """Read-only image information handed to a renderer."""
    url: str = ""
    load_state: ImageLoadState = ImageLoadState.PENDING
    data: Optional[bytes] = None
    natural_width: Optional[int] = None
    natural_height: Optional[int] = None
    preview_width: Optional[float] = None
    caption: str = ""
    name: str = ""

    @classmethod
    def from_block(cls, block: ImageBlock) -> "ImageContext":
        return cls(
            url=block.url,
            preview_width=block.preview_width,
            caption=block.caption,
            name=block.name,
        )

    def with_resolved(self, resolved: ResolvedImage) -> "ImageContext":
        return ImageContext(
            url=self.url,
            load_state=ImageLoadState.READY,
            data=resolved.data,
            natural_width=resolved.natural_width,
            natural_height=resolved.natural_height,
            preview_width=self.preview_width,
            caption=self.caption,
            name=self.name,
        )

    def with_failure(self) -> "ImageContext":
        return ImageContext(
            url=self.url,
            load_state=ImageLoadState.FAILED,
            preview_width=self.preview_width,
            caption=self.caption,
            name=self.name,
        )

    @property
    def has_dimensions(self) -> bool:
        return bool(self.natural_width and self.natural_height
                    and self.natural_width > 0 and self.natural_height > 0)

    @property
    def aspect_ratio(self) -> float:
        """natural height / natural width, or 1.0 when unknown."""
        if not self.has_dimensions:
            return 1.0
        return self.natural_height / self.natural_width

    @property
    def alt_text(self) -> str:
        return self.name or self.caption or "Annotated image"


class ImageSource(Protocol):
    async def resolve(self, url: str) -> ResolvedImage:
        ...


def image_dimensions(data: bytes) -> Tuple[int, int]:
    """
    Decode the pixel dimensions of an encoded image.

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    try:
        pixmap = fitz.Pixmap(data)
    except Exception as e:
        raise ValueError(f"Not a decodable image: {e}") from e
    return pixmap.width, pixmap.height


def _decode_data_url(url: str) -> bytes:
    header, sep, payload = url.partition(",")
    if not sep:
        raise ValueError("Data URL has no payload")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    return unquote(payload).encode("latin-1")


class ImageResolver:
    """
    Resolves image URLs to bytes and natural dimensions.

    Handles local paths, ``file://`` and ``data:`` URLs, and fetches
    ``http(s)`` URLs with httpx.
    """

    def __init__(self, timeout: float = config.IMAGE_FETCH_TIMEOUT_S,
                 base_dir: Optional[Path] = None):
        self.timeout = timeout
        self.base_dir = Path(base_dir) if base_dir else None

    async def resolve(self, url: str) -> ResolvedImage:
        """
        Fetch and decode an image.

        Raises:
            ImageResolutionError: If the image cannot be read or decoded
        """
        if not url:
            raise ImageResolutionError(url, "empty URL")

        try:
            data = await self._read(url)
        except ValueError as e:
            # Unparseable URLs and paths with NUL bytes
            raise ImageResolutionError(url, str(e)) from e
        try:
            width, height = await asyncio.to_thread(image_dimensions, data)
        except ValueError as e:
            raise ImageResolutionError(url, str(e)) from e

        logger.debug("Resolved image %s (%dx%d, %d bytes)", url[:80], width, height, len(data))
        return ResolvedImage(data=data, natural_width=width, natural_height=height)

    async def _read(self, url: str) -> bytes:
        scheme = urlparse(url).scheme.lower()

        if scheme == "data":
            try:
                return _decode_data_url(url)
            except ValueError as e:
                raise ImageResolutionError(url[:80], str(e)) from e

        if scheme in ("http", "https"):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.content
            except httpx.HTTPStatusError as e:
                raise ImageResolutionError(url, f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ImageResolutionError(url, f"network error: {e}") from e

        path = Path(unquote(urlparse(url).path)) if scheme == "file" else Path(url)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ImageResolutionError(url, str(e)) from e


async def resolve_context(source: ImageSource, context: ImageContext) -> ImageContext:
    """
    Resolve the image of a context, marking it failed instead of raising.
    """
    if context.load_state == ImageLoadState.READY and context.has_dimensions:
        return context
    try:
        resolved = await source.resolve(context.url)
    except ImageResolutionError as e:
        logger.warning("%s; using 1x1 fallback dimensions", e)
        return context.with_failure()
    return context.with_resolved(resolved)


async def resolve_dimensions(source: ImageSource, url: str) -> Tuple[int, int]:
    """Natural (width, height) of an image, or the 1x1 fallback on failure."""
    try:
        resolved = await source.resolve(url)
    except ImageResolutionError as e:
        logger.warning("%s; using 1x1 fallback dimensions", e)
        return FALLBACK_DIMENSIONS
    return resolved.natural_width, resolved.natural_height

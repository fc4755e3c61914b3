"""
Shared fixtures for the annotated image tests.
"""
import fitz  # PyMuPDF
import pytest
from PyQt5.QtCore import QCoreApplication

from annotated_image.core.images import ResolvedImage
from annotated_image.errors import ImageResolutionError


def make_png(width: int, height: int) -> bytes:
    """Encode a solid grey PNG of the given size."""
    pixmap = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pixmap.clear_with(200)
    return pixmap.tobytes("png")


class FakeImageSource:
    """Resolves every URL to a PNG of fixed dimensions and records calls."""

    def __init__(self, width: int = 400, height: int = 200):
        self.width = width
        self.height = height
        self.calls = []

    async def resolve(self, url: str) -> ResolvedImage:
        self.calls.append(url)
        return ResolvedImage(make_png(self.width, self.height), self.width, self.height)


class FailingImageSource:
    """Fails every resolution."""

    def __init__(self):
        self.calls = []

    async def resolve(self, url: str) -> ResolvedImage:
        self.calls.append(url)
        raise ImageResolutionError(url, "unreachable")


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Core application for QObject signals and QThread workers."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def png_bytes():
    return make_png(40, 20)


@pytest.fixture
def fake_source():
    return FakeImageSource()


@pytest.fixture
def failing_source():
    return FailingImageSource()

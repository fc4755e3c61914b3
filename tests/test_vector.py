"""
Paginated vector rendering tests.
"""
import fitz  # PyMuPDF
import pytest

from annotated_image.config import DEFAULT_PAGE_LAYOUT
from annotated_image.core.annotations import Arrow, Dot
from annotated_image.core.export import VectorCircle, VectorLine, VectorPageOutput, VectorPageRenderer, paint
from annotated_image.core.images import ImageContext, ImageLoadState, ImageResolver

PRINTABLE = DEFAULT_PAGE_LAYOUT.printable_width_pt


class TestVectorPageRenderer:

    @pytest.mark.asyncio
    async def test_points_use_rendered_size(self, fake_source):
        renderer = VectorPageRenderer(image_source=fake_source)
        context = ImageContext(url="a.png", natural_width=400, natural_height=200)

        output = await renderer.render(context, [Dot("a", 0.5, 0.25)])

        assert output.width_pt == pytest.approx(PRINTABLE)
        assert output.height_pt == pytest.approx(PRINTABLE / 2)
        (circle,) = output.primitives
        assert isinstance(circle, VectorCircle)
        assert circle.cx == pytest.approx(PRINTABLE * 0.5)
        assert circle.cy == pytest.approx(PRINTABLE / 2 * 0.25)
        assert fake_source.calls == []

    @pytest.mark.asyncio
    async def test_resolves_missing_dimensions(self, fake_source):
        renderer = VectorPageRenderer(image_source=fake_source)

        output = await renderer.render(ImageContext(url="a.png"), [])

        assert fake_source.calls == ["a.png"]
        assert output.context.load_state == ImageLoadState.READY
        assert output.height_pt == pytest.approx(output.width_pt / 2)

    @pytest.mark.asyncio
    async def test_falls_back_to_square_when_resolution_fails(self, failing_source):
        renderer = VectorPageRenderer(image_source=failing_source)

        output = await renderer.render(ImageContext(url="gone.png"), [Dot("a", 1.0, 1.0)])

        assert output.context.load_state == ImageLoadState.FAILED
        assert output.height_pt == pytest.approx(output.width_pt)
        assert output.primitives[0].cy == pytest.approx(output.width_pt)

    @pytest.mark.asyncio
    async def test_failed_context_is_not_resolved_again(self, failing_source):
        renderer = VectorPageRenderer(image_source=failing_source)
        context = ImageContext(url="gone.png", load_state=ImageLoadState.FAILED)

        await renderer.render(context, [])

        assert failing_source.calls == []

    @pytest.mark.asyncio
    async def test_arrow_primitives(self, fake_source):
        renderer = VectorPageRenderer(image_source=fake_source)
        context = ImageContext(url="a.png", natural_width=100, natural_height=100)

        output = await renderer.render(context, [Arrow("b", 0.0, 0.5, 1.0, 0.5)])

        shaft, left, right = output.primitives
        assert all(isinstance(p, VectorLine) for p in output.primitives)
        assert [p.role for p in output.primitives] == ["shaft", "head", "head"]
        assert (shaft.x1, shaft.y1) == pytest.approx((0, PRINTABLE / 2))
        assert (shaft.x2, shaft.y2) == pytest.approx((PRINTABLE, PRINTABLE / 2))
        assert (left.x1, left.y1) == (shaft.x2, shaft.y2)
        # wings mirror each other about the shaft
        assert left.y2 - shaft.y2 == pytest.approx(shaft.y2 - right.y2)

    @pytest.mark.asyncio
    async def test_output_is_deterministic(self, fake_source):
        renderer = VectorPageRenderer(image_source=fake_source)
        context = ImageContext(url="a.png", natural_width=300, natural_height=200, preview_width=400)
        annotations = [Dot("a", 0.2, 0.3), Arrow("b", 0.1, 0.9, 0.6, 0.2)]

        first = await renderer.render(context, annotations)
        second = await renderer.render(context, annotations)

        assert first.primitives == second.primitives
        assert first.width_pt == pytest.approx(400 * 0.75 * min(1, (PRINTABLE / 0.75) / 800))


class TestPaint:

    def test_paints_lines_and_circles(self):
        doc = fitz.open()
        page = doc.new_page()
        output = VectorPageOutput(100, 50, [
            VectorLine("b", 0, 0, 100, 50),
            VectorCircle("a", 50, 25),
        ])

        paint(page, (10, 10), output)

        drawings = page.get_drawings()
        assert len(drawings) == 2
        doc.close()

    def test_empty_output_draws_nothing(self):
        doc = fitz.open()
        page = doc.new_page()

        paint(page, (0, 0), VectorPageOutput(100, 100))

        assert page.get_drawings() == []
        doc.close()


class TestMalformedImageUrls:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["http://[::1", "foo\x00bar.png"])
    async def test_square_fallback(self, url):
        renderer = VectorPageRenderer(image_source=ImageResolver())

        output = await renderer.render(ImageContext(url=url), [Dot("d", 0.5, 0.5)])

        assert output.context.load_state == ImageLoadState.FAILED
        assert output.height_pt == pytest.approx(output.width_pt)
        assert output.primitives[0].cy == pytest.approx(output.width_pt / 2)

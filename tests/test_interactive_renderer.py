"""
Interactive overlay rendering and event routing tests.
"""
from annotated_image.controllers import Bounds, InteractionController
from annotated_image.core.annotations import (
    Arrow,
    Dot,
    HandleEndpoint,
    MemoryPropertyStore,
    decode_annotations,
    encode_annotations,
)
from annotated_image.core.images import ImageContext
from annotated_image.ui.interactive_renderer import InteractiveRenderer

BLOCK = "block-1"
BOUNDS = Bounds(0, 0, 200, 100)
CONTEXT = ImageContext(url="photo.png", name="photo.png")


def make_renderer(annotations):
    store = MemoryPropertyStore({BLOCK: encode_annotations(annotations)})
    controller = InteractionController(BLOCK, store)
    return InteractiveRenderer(controller), controller, store


class TestRender:

    def test_dot_handle(self):
        renderer, _, _ = make_renderer([])
        overlay = renderer.render(CONTEXT, [Dot("a", 0.5, 0.25)])

        assert overlay.lines == []
        (handle,) = overlay.handles
        assert (handle.left, handle.top) == ("50%", "25%")
        assert handle.endpoint is None
        assert handle.shape == "circle"
        assert overlay.alt_text == "photo.png"

    def test_arrow_lines_and_handles(self):
        renderer, _, _ = make_renderer([])
        overlay = renderer.render(CONTEXT, [Arrow("b", 0.3, 0.5, 0.7, 0.5)])

        assert [line.role for line in overlay.lines] == ["shaft", "head", "head"]
        shaft = overlay.lines[0]
        assert (shaft.x1, shaft.y1, shaft.x2, shaft.y2) == ("30%", "50%", "70%", "50%")
        assert [h.endpoint for h in overlay.handles] == [HandleEndpoint.ORIGIN, HandleEndpoint.TERMINUS]
        assert [h.shape for h in overlay.handles] == ["circle", "diamond"]
        # head strokes start at the tip
        assert (overlay.lines[1].x1, overlay.lines[1].y1) == ("70%", "50%")

    def test_render_order_follows_set_order(self):
        renderer, _, _ = make_renderer([])
        overlay = renderer.render(CONTEXT, [Dot("a", 0.1, 0.1), Arrow("b", 0, 0, 1, 1), Dot("c", 0.9, 0.9)])

        assert [h.annotation_id for h in overlay.handles] == ["a", "b", "b", "c"]


class TestEventRouting:

    def test_handle_at_prefers_topmost(self):
        renderer, _, _ = make_renderer([])
        overlay = renderer.render(CONTEXT, [Dot("under", 0.5, 0.5), Dot("over", 0.5, 0.5)])

        assert renderer.handle_at(overlay, 104, 50, BOUNDS).annotation_id == "over"
        assert renderer.handle_at(overlay, 150, 50, BOUNDS) is None

    def test_press_drag_release(self):
        renderer, controller, store = make_renderer([Dot("a", 0.5, 0.5)])
        overlay = renderer.render(CONTEXT, controller.annotations())

        assert renderer.press(overlay, 100, 50, BOUNDS)
        assert controller.is_dragging
        renderer.move(50, 25, BOUNDS)
        renderer.release()

        assert not controller.is_dragging
        assert decode_annotations(store.get(BLOCK)) == [Dot("a", 0.25, 0.25)]

    def test_press_on_arrow_terminus_drags_that_end(self):
        renderer, controller, store = make_renderer([Arrow("b", 0.3, 0.5, 0.7, 0.5)])
        overlay = renderer.render(CONTEXT, controller.annotations())

        renderer.press(overlay, 140, 50, BOUNDS)
        renderer.move(200, 0, BOUNDS)
        renderer.release()

        assert decode_annotations(store.get(BLOCK)) == [Arrow("b", 0.3, 0.5, 1.0, 0.0)]

    def test_shift_press_deletes(self):
        renderer, controller, store = make_renderer([Dot("a", 0.5, 0.5)])
        overlay = renderer.render(CONTEXT, controller.annotations())

        assert renderer.press(overlay, 100, 50, BOUNDS, shift=True)
        assert not controller.is_dragging
        assert store.get(BLOCK) == "[]"

    def test_press_outside_handles(self):
        renderer, controller, _ = make_renderer([Dot("a", 0.5, 0.5)])
        overlay = renderer.render(CONTEXT, controller.annotations())

        assert not renderer.press(overlay, 5, 5, BOUNDS)
        assert not controller.is_dragging

    def test_renderer_without_controller_is_inert(self):
        renderer = InteractiveRenderer()
        overlay = renderer.render(CONTEXT, [Dot("a", 0.5, 0.5)])

        assert not renderer.press(overlay, 100, 50, BOUNDS)
        renderer.move(10, 10, BOUNDS)
        renderer.release()

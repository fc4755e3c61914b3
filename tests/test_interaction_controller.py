"""
InteractionController state machine tests.
"""
import pytest

from annotated_image.controllers import Bounds, DragState, InteractionController
from annotated_image.core.annotations import (
    Arrow,
    Dot,
    HandleEndpoint,
    MemoryPropertyStore,
    decode_annotations,
    encode_annotations,
)

BLOCK = "block-1"
BOUNDS = Bounds(10, 20, 200, 100)


def make_controller(annotations=None):
    initial = {BLOCK: encode_annotations(annotations)} if annotations is not None else {}
    store = MemoryPropertyStore(initial)
    return InteractionController(BLOCK, store), store


class TestActions:
    """Add and delete"""

    def test_add_dot_and_arrow(self):
        controller, store = make_controller()
        changes = []
        controller.annotations_changed.connect(lambda block_id, raw: changes.append((block_id, raw)))

        dot = controller.add_dot()
        arrow = controller.add_arrow()

        stored = decode_annotations(store.get(BLOCK))
        assert stored == [dot, arrow]
        assert isinstance(stored[0], Dot) and isinstance(stored[1], Arrow)
        assert len(changes) == 2
        assert changes[-1] == (BLOCK, store.get(BLOCK))
        assert not controller.is_dragging

    def test_shift_click_deletes(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1), Dot("b", 0.2, 0.2)])

        assert controller.shift_click("a")
        assert [ann.id for ann in decode_annotations(store.get(BLOCK))] == ["b"]

    def test_shift_click_unknown_id(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])

        assert not controller.shift_click("missing")
        assert len(decode_annotations(store.get(BLOCK))) == 1

    def test_shift_click_ignored_while_dragging(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        controller.pointer_down("a")

        assert not controller.shift_click("a")
        assert len(decode_annotations(store.get(BLOCK))) == 1

    def test_corrupted_store_value_reads_as_empty(self):
        store = MemoryPropertyStore({BLOCK: "garbage"})
        controller = InteractionController(BLOCK, store)

        assert controller.annotations() == []
        controller.add_dot()
        assert len(decode_annotations(store.get(BLOCK))) == 1

    def test_blocks_are_isolated(self):
        store = MemoryPropertyStore()
        first = InteractionController("one", store)
        second = InteractionController("two", store)

        first.add_dot()

        assert len(first.annotations()) == 1
        assert second.annotations() == []


class TestDragStateMachine:
    """Idle / dragging transitions"""

    def test_drag_dot(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        started, finished = [], []
        controller.drag_started.connect(started.append)
        controller.drag_finished.connect(finished.append)

        assert controller.pointer_down("a")
        assert controller.drag_state == DragState("a", None)

        moved = controller.pointer_move(110, 45, BOUNDS)
        controller.pointer_up()

        assert (moved.x, moved.y) == (0.5, 0.25)
        assert decode_annotations(store.get(BLOCK)) == [Dot("a", 0.5, 0.25)]
        assert started == ["a"] and finished == ["a"]
        assert controller.drag_state is None

    def test_drag_is_clamped_outside_bounds(self):
        controller, store = make_controller([Dot("a", 0.5, 0.5)])
        controller.pointer_down("a")

        controller.pointer_move(-500, 1000, BOUNDS)

        assert decode_annotations(store.get(BLOCK)) == [Dot("a", 0.0, 1.0)]

    def test_drag_arrow_endpoints(self):
        controller, store = make_controller([Arrow("b", 0.3, 0.5, 0.7, 0.5)])

        controller.pointer_down("b", HandleEndpoint.TERMINUS)
        controller.pointer_move(210, 120, BOUNDS)
        controller.pointer_up()
        controller.pointer_down("b", HandleEndpoint.ORIGIN)
        controller.pointer_move(10, 20, BOUNDS)
        controller.pointer_up()

        assert decode_annotations(store.get(BLOCK)) == [Arrow("b", 0.0, 0.0, 1.0, 1.0)]

    def test_arrow_drag_without_endpoint_is_ignored(self):
        controller, store = make_controller([Arrow("b", 0.3, 0.5, 0.7, 0.5)])
        before = store.get(BLOCK)
        controller.pointer_down("b")

        assert controller.pointer_move(110, 70, BOUNDS) is None
        assert store.get(BLOCK) == before

    def test_pointer_up_while_idle_is_noop(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        finished = []
        controller.drag_finished.connect(finished.append)
        before = store.get(BLOCK)

        controller.pointer_up()

        assert finished == []
        assert store.get(BLOCK) == before
        assert not controller.is_dragging

    def test_pointer_move_while_idle_is_noop(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        changes = []
        controller.annotations_changed.connect(lambda *args: changes.append(args))
        before = store.get(BLOCK)

        assert controller.pointer_move(110, 70, BOUNDS) is None
        assert store.get(BLOCK) == before
        assert changes == []

    def test_moves_after_pointer_up_do_nothing_until_next_down(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        controller.pointer_down("a")
        controller.pointer_move(110, 70, BOUNDS)
        controller.pointer_up()
        after_drag = store.get(BLOCK)

        controller.pointer_move(10, 20, BOUNDS)
        assert store.get(BLOCK) == after_drag

        controller.pointer_down("a")
        controller.pointer_move(10, 20, BOUNDS)
        assert decode_annotations(store.get(BLOCK)) == [Dot("a", 0.0, 0.0)]

    def test_second_pointer_down_is_ignored(self):
        controller, _ = make_controller([Dot("a", 0.1, 0.1), Dot("b", 0.2, 0.2)])

        assert controller.pointer_down("a")
        assert not controller.pointer_down("b")
        assert controller.drag_state.annotation_id == "a"

    def test_drag_of_deleted_annotation_is_noop(self):
        controller, store = make_controller([Dot("a", 0.1, 0.1)])
        controller.pointer_down("a")
        store.set(BLOCK, "[]")

        assert controller.pointer_move(110, 70, BOUNDS) is None
        assert store.get(BLOCK) == "[]"

    @pytest.mark.parametrize("width, height", [(0, 100), (200, 0)])
    def test_empty_bounds_map_to_zero(self, width, height):
        controller, store = make_controller([Dot("a", 0.5, 0.5)])
        controller.pointer_down("a")

        moved = controller.pointer_move(50, 50, Bounds(0, 0, width, height))

        assert 0.0 <= moved.x <= 1.0 and 0.0 <= moved.y <= 1.0

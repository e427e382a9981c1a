"""
Tests for ModeManager.

Tests cover:
- Switching modes and the switch listeners
- Drag session with grab offset
- Pointer-up listeners and focus loss
- Routing queued pointer events
"""

import pytest

from models import Point2D
from zen.modes.base_mode import BaseMode
from zen.modes.input.pointer_event import PointerAction, PointerEvent
from zen.modes.manager import ModeManager
from zen.modes.mode_state import FreeExploreState, ModeState
from zen.modes.stone import Stone


class OneStoneMode(BaseMode):
    MODE_ID = "one-stone"
    NAME = "One Stone"

    def _setup(self):
        self.add_stone(Stone(100, 100, radius=30))
        self.releases = []

    def on_pointer_up(self, x, y, dragged):
        self.releases.append((x, y))
        super().on_pointer_up(x, y, dragged)

    def get_state(self):
        return FreeExploreState(stones=(), groups=())


class OtherMode(OneStoneMode):
    MODE_ID = "other"
    NAME = "Other"


class FakeRegistry:
    classes = {cls.MODE_ID: cls for cls in (OneStoneMode, OtherMode)}

    def create_mode(self, mode_id, width, height, config=None, **kwargs):
        return self.classes[mode_id](width=width, height=height, config=config, **kwargs)


@pytest.fixture
def manager():
    m = ModeManager(FakeRegistry(), 800, 600)
    m.switch_mode("one-stone")
    return m


def pointer(action, x, y):
    return PointerEvent(action=action, position=Point2D(x=x, y=y))


class TestSwitching:

    def test_switch_cleans_up_previous(self, manager):
        old = manager.current_mode
        manager.switch_mode("other")
        assert old.state == ModeState.INACTIVE
        assert manager.current_mode.is_active
        assert manager.current_mode_id == "other"

    def test_unknown_mode_keeps_current(self, manager):
        current = manager.current_mode
        with pytest.raises(KeyError):
            manager.switch_mode("nope")
        assert manager.current_mode is current
        assert current.is_active

    def test_switch_listener(self, manager):
        seen = []
        manager.add_mode_switch_listener(seen.append)
        manager.switch_mode("other")
        assert seen == ["other"]

    def test_switch_cancels_drag(self, manager):
        stone = manager.pointer_down(100, 100)
        manager.switch_mode("other")
        assert manager.dragged is None
        assert not stone.is_dragging


class TestDragging:

    def test_grab_offset_is_kept(self, manager):
        stone = manager.pointer_down(110, 105)
        assert stone is not None
        manager.pointer_move(210, 205)
        assert (stone.x, stone.y) == (200, 200)

    def test_release_ends_drag(self, manager):
        stone = manager.pointer_down(100, 100)
        manager.pointer_up(100, 100)
        assert manager.dragged is None
        assert not stone.is_dragging

    def test_pointer_up_listener_runs_after_mode(self, manager):
        calls = []
        manager.add_pointer_up_listener(lambda x, y: calls.append((x, y, manager.dragged)))
        manager.pointer_down(100, 100)
        manager.pointer_up(120, 130)
        assert calls == [(120, 130, None)]

    def test_release_reports_stone_centre(self, manager):
        calls = []
        manager.add_pointer_up_listener(lambda x, y: calls.append((x, y)))
        manager.pointer_down(110, 105)
        manager.pointer_move(310, 305)
        manager.pointer_up(310, 305)
        assert manager.current_mode.releases == [(300, 300)]
        assert calls == [(310, 305)]

    def test_listener_runs_without_drag(self, manager):
        calls = []
        manager.add_pointer_up_listener(lambda x, y: calls.append((x, y)))
        manager.pointer_up(5, 5)
        assert calls == [(5, 5)]

    def test_blur_cancels_drag(self, manager):
        stone = manager.pointer_down(100, 100)
        manager.blur()
        assert manager.dragged is None
        assert not stone.is_dragging

    def test_no_mode_is_harmless(self):
        m = ModeManager(FakeRegistry(), 800, 600)
        assert m.pointer_down(1, 1) is None
        m.pointer_move(2, 2)
        m.pointer_up(2, 2)
        m.update(0.016)


class TestRouting:

    def test_handle_input(self, manager):
        stone = manager.current_mode.stones[0]
        manager.handle_input([
            pointer(PointerAction.DOWN, 100, 100),
            pointer(PointerAction.MOVE, 300, 250),
            pointer(PointerAction.UP, 300, 250),
        ])
        assert (stone.x, stone.y) == (300, 250)
        assert not stone.is_dragging

    def test_resize_and_shutdown(self, manager):
        mode = manager.current_mode
        manager.resize(1024, 768)
        assert mode.width == 1024
        manager.shutdown()
        assert manager.current_mode is None
        assert mode.state == ModeState.INACTIVE

"""
Tests for StackBalanceMode.

Tests cover:
- Tray setup
- Dropping, landing and missed drops
- Topple of the whole stack and removal off screen
- Stacking by hand from the drop zone
- Lifting stones off the stack, and what falls after
"""

import random

import pytest

from zen.modes.mode_state import ModeState, StackState
from zen.modes.stone import Stone
from games.StackBalance.game_mode import StackBalanceMode
from games.StackBalance.stack import StackPhase


@pytest.fixture
def mode(rng):
    m = StackBalanceMode(1280, 720, rng=rng)
    m.init()
    return m


@pytest.fixture
def empty_mode(mode):
    mode.stones.clear()
    mode.bodies.clear()
    return mode


def run(mode, frames, dt=1 / 60):
    for _ in range(frames):
        mode.update(dt)


def place(mode, x, y, mass=1.0, color='red'):
    """Add a radius-30 stone with a named colour at (x, y)."""
    stone = Stone(x, y, mass=mass, radius=30)
    mode.add_body(stone, color)
    return stone


class TestSetup:

    def test_tray_stones(self, mode):
        assert mode.state == ModeState.ACTIVE
        assert len(mode.stones) == 10
        for body in mode.bodies.values():
            assert body.phase == StackPhase.AVAILABLE
            assert 0.7 * 35 <= body.stone.radius <= 1.3 * 35
            assert body.stone.mass == pytest.approx(body.stone.radius / 35)

    def test_platform_near_bottom(self, mode):
        assert mode.platform.x == 640
        assert mode.platform.y == 620

    def test_cleanup(self, mode):
        mode.cleanup()
        assert mode.stones == []
        assert mode.bodies == {}
        assert mode.state == ModeState.INACTIVE


class TestDropping:
    """Release over the platform to drop; elsewhere back to the tray."""

    def test_drop_lands_on_platform(self, mode):
        stone = mode.stones[0]
        grabbed = mode.on_pointer_down(stone.x, stone.y)
        assert grabbed is stone
        mode.on_pointer_move(640, 300, grabbed)
        mode.on_pointer_up(640, 300, grabbed)
        assert mode.body(stone).phase == StackPhase.FALLING

        for _ in range(600):
            mode.update(1 / 60)
            if mode.body(stone).phase == StackPhase.STACKED:
                break

        assert mode.body(stone).phase == StackPhase.STACKED
        assert mode.stacked == [stone]
        assert stone.y + stone.radius == pytest.approx(mode.platform.top, abs=1.0)

    def test_release_outside_drop_zone_returns(self, mode):
        stone = mode.stones[0]
        body = mode.body(stone)
        grabbed = mode.on_pointer_down(stone.x, stone.y)
        mode.on_pointer_move(100, 400, grabbed)
        mode.on_pointer_up(100, 400, grabbed)
        assert body.phase == StackPhase.AVAILABLE
        assert (stone.target_x, stone.target_y) == (body.tray_x, body.tray_y)

    def test_missed_drop_returns_to_tray(self, mode):
        stone = mode.stones[0]
        body = mode.body(stone)
        grabbed = mode.on_pointer_down(stone.x, stone.y)
        mode.on_pointer_move(790, 300, grabbed)
        mode.on_pointer_up(790, 300, grabbed)
        assert body.phase == StackPhase.FALLING

        run(mode, 200)
        assert body.phase == StackPhase.AVAILABLE
        assert (stone.target_x, stone.target_y) == (body.tray_x, body.tray_y)

    def test_second_stone_lands_on_first(self, empty_mode):
        base = place(empty_mode, 640, 586)
        empty_mode.settle(base)
        top = place(empty_mode, 640, 500)
        empty_mode.drop(top)

        for _ in range(600):
            empty_mode.update(1 / 60)
            if empty_mode.body(top).phase == StackPhase.STACKED:
                break

        assert empty_mode.stacked == [base, top]
        assert top.y < base.y - 40


class TestStackingByHand:
    """Stones released in the drop zone, a little off-centre, stack up."""

    def hand_drop(self, mode, stone, x, y):
        grabbed = mode.on_pointer_down(stone.x, stone.y)
        assert grabbed is stone
        mode.on_pointer_move(x, y, grabbed)
        mode.on_pointer_up(x, y, grabbed)
        assert mode.body(stone).phase == StackPhase.FALLING
        for _ in range(900):
            mode.update(1 / 60)
            if mode.body(stone).phase != StackPhase.FALLING:
                break

    @pytest.mark.parametrize("x_offset,y", [(5, 300), (-8, 400), (12, 250)])
    def test_second_and_third_stones_stack(self, empty_mode, x_offset, y):
        base = place(empty_mode, 640, 586)
        empty_mode.settle(base)
        second = place(empty_mode, 300, 80)
        third = place(empty_mode, 400, 80)

        self.hand_drop(empty_mode, second, 640 + x_offset, y)
        assert empty_mode.body(second).phase == StackPhase.STACKED
        assert second.y == pytest.approx(526, abs=1.0)

        self.hand_drop(empty_mode, third, 640 - x_offset, y - 40)
        assert empty_mode.body(third).phase == StackPhase.STACKED
        assert third.y == pytest.approx(466, abs=1.0)
        assert empty_mode.stack_height == 3

    @pytest.mark.parametrize("seed", range(5))
    def test_dropped_base_then_stone_on_top(self, seed):
        mode = StackBalanceMode(1280, 720, rng=random.Random(seed))
        mode.init()
        mode.stones.clear()
        mode.bodies.clear()
        base = place(mode, 300, 80)
        top = place(mode, 400, 80)

        self.hand_drop(mode, base, 640, 350)
        assert mode.body(base).phase == StackPhase.STACKED

        self.hand_drop(mode, top, base.x + 6, 300)
        assert mode.body(top).phase == StackPhase.STACKED
        assert mode.stacked == [base, top]


class TestTopple:
    """An off-centre stack falls as a whole."""

    def test_fourth_stone_topples_all_four(self, empty_mode):
        stones = [place(empty_mode, 640, 586 - i * 60) for i in range(3)]
        for stone in stones:
            assert empty_mode.settle(stone)

        fourth = place(empty_mode, 900, 406)
        assert not empty_mode.settle(fourth)

        for stone in stones + [fourth]:
            assert empty_mode.body(stone).phase == StackPhase.TOPPLING
            assert stone.vx > 0
        assert empty_mode.stacked == []
        assert empty_mode.is_toppling

    def test_toppled_stones_are_removed(self, empty_mode):
        stones = [place(empty_mode, 640, 586), place(empty_mode, 800, 526)]
        empty_mode.settle(stones[0])
        assert not empty_mode.settle(stones[1])

        run(empty_mode, 600)
        assert empty_mode.stones == []
        assert empty_mode.bodies == {}
        assert not empty_mode.is_toppling

    def test_toppling_stones_cannot_be_grabbed(self, empty_mode):
        stones = [place(empty_mode, 640, 586), place(empty_mode, 800, 526)]
        empty_mode.settle(stones[0])
        empty_mode.settle(stones[1])
        assert empty_mode.on_pointer_down(640, 586) is None


class TestLifting:
    """Taking a stone off the stack re-checks the rest."""

    def test_lift_stacked_stone(self, empty_mode):
        a = place(empty_mode, 640, 586)
        b = place(empty_mode, 660, 526)
        empty_mode.settle(a)
        empty_mode.settle(b)

        grabbed = empty_mode.on_pointer_down(b.x, b.y)
        assert grabbed is b
        assert empty_mode.stacked == [a]
        assert empty_mode.body(b).phase == StackPhase.AVAILABLE

    def test_stone_above_lifted_one_falls(self, empty_mode):
        base = place(empty_mode, 640, 586)
        top = place(empty_mode, 645, 526)
        empty_mode.settle(base)
        empty_mode.settle(top)

        grabbed = empty_mode.on_pointer_down(base.x, base.y + 20)
        assert grabbed is base
        assert empty_mode.body(top).phase == StackPhase.FALLING
        assert empty_mode.stack_height == 0

        run(empty_mode, 600)
        assert empty_mode.body(top).phase == StackPhase.STACKED
        assert top.y + top.radius == pytest.approx(empty_mode.platform.top, abs=1.0)
        assert empty_mode.stacked == [top]

    def test_lifting_counterweight_topples(self, empty_mode):
        a = place(empty_mode, 640, 586)
        c = place(empty_mode, 560, 586)
        b = place(empty_mode, 780, 526)
        for stone in (a, c, b):
            assert empty_mode.settle(stone)

        grabbed = empty_mode.on_pointer_down(c.x, c.y)
        assert grabbed is c
        assert empty_mode.body(a).phase == StackPhase.TOPPLING
        assert empty_mode.body(b).phase == StackPhase.TOPPLING
        assert empty_mode.body(c).phase == StackPhase.AVAILABLE


class TestReactionsInMode:

    def test_matching_neighbours_glow(self, empty_mode):
        a = place(empty_mode, 640, 586, color='blue')
        b = place(empty_mode, 645, 526, color='blue')
        empty_mode.settle(a)
        empty_mode.settle(b)
        empty_mode.update(1 / 60)
        assert empty_mode.body(a).glow > 0.9
        assert empty_mode.body(b).glow > 0.9


class TestQueries:

    def test_state(self, empty_mode):
        a = place(empty_mode, 640, 586, color='orange')
        place(empty_mode, 300, 80, color='green')
        empty_mode.settle(a)
        state = empty_mode.get_state()
        assert isinstance(state, StackState)
        assert [s.color_name for s in state.stacked] == ['orange']
        assert [s.color_name for s in state.available] == ['green']
        assert state.platform_x == 640
        assert state.platform_width == 200
        assert not state.is_toppling


class TestRender:

    def test_render(self, empty_mode, surface):
        a = place(empty_mode, 640, 586, color='red')
        b = place(empty_mode, 640, 526, color='green')
        empty_mode.settle(a)
        empty_mode.settle(b)
        empty_mode.update(1 / 60)
        empty_mode.render(surface)
        c = place(empty_mode, 900, 466)
        empty_mode.settle(c)
        empty_mode.update(1 / 60)
        empty_mode.render(surface)

"""
Tests for the gravity sandbox physics helpers.
"""

import math

import pytest

from zen.modes.stone import Stone, StoneKind
from games.FreeExplore import gravity


class TestAttract:
    """Inverse-square attraction."""

    def test_pulls_toward_source(self):
        stone = Stone(100, 0, mass=2.0, radius=10)
        assert gravity.attract(stone, 0, 0, pull=10000, dt=0.1, min_distance=40)
        assert stone.vx < 0
        assert stone.vy == pytest.approx(0.0)

    def test_acceleration_is_mass_independent(self):
        light = Stone(100, 0, mass=0.5, radius=10)
        heavy = Stone(100, 0, mass=3.0, radius=10)
        gravity.attract(light, 0, 0, pull=10000, dt=0.1, min_distance=40)
        gravity.attract(heavy, 0, 0, pull=10000, dt=0.1, min_distance=40)
        assert light.vx == pytest.approx(heavy.vx)

    def test_inverse_square(self):
        near = Stone(100, 0, radius=10)
        far = Stone(200, 0, radius=10)
        gravity.attract(near, 0, 0, pull=10000, dt=1.0, min_distance=1)
        gravity.attract(far, 0, 0, pull=10000, dt=1.0, min_distance=1)
        assert near.vx == pytest.approx(far.vx * 4)

    def test_skipped_inside_min_distance(self):
        stone = Stone(10, 0, radius=10)
        assert not gravity.attract(stone, 0, 0, pull=10000, dt=0.1, min_distance=40)
        assert stone.vx == 0.0

    def test_zero_distance_is_skipped(self):
        stone = Stone(0, 0, radius=10)
        assert not gravity.attract(stone, 0, 0, pull=10000, dt=0.1, min_distance=0)
        assert (stone.vx, stone.vy) == (0.0, 0.0)

    def test_skipped_beyond_reach(self):
        stone = Stone(300, 0, radius=10)
        assert not gravity.attract(stone, 0, 0, pull=10000, dt=0.1,
                                   min_distance=40, max_distance=126)


class TestWrap:
    """Toroidal screen edges."""

    def test_wraps_left_to_right(self):
        stone = Stone(-25, 100, radius=20)
        assert gravity.wrap_position(stone, 800, 600)
        assert stone.x == 820
        assert stone.target_x == 820

    def test_wraps_bottom_to_top(self):
        stone = Stone(100, 625, radius=20)
        gravity.wrap_position(stone, 800, 600)
        assert stone.y == -20

    def test_inside_screen_untouched(self):
        stone = Stone(400, 300, radius=20)
        assert not gravity.wrap_position(stone, 800, 600)


class TestCollision:
    """Elastic exchange and mass-weighted separation."""

    def test_equal_masses_swap_velocities(self):
        a = Stone(0, 0, mass=1.0, radius=20)
        b = Stone(35, 0, mass=1.0, radius=20)
        a.vx = 100.0
        assert gravity.resolve_collision(a, b)
        assert a.vx == pytest.approx(0.0)
        assert b.vx == pytest.approx(100.0)

    def test_momentum_conserved(self):
        a = Stone(0, 0, mass=1.0, radius=20)
        b = Stone(30, 10, mass=3.0, radius=20)
        a.vx, a.vy = 120.0, -10.0
        b.vx, b.vy = -40.0, 5.0
        before = (a.mass * a.vx + b.mass * b.vx, a.mass * a.vy + b.mass * b.vy)
        gravity.resolve_collision(a, b)
        after = (a.mass * a.vx + b.mass * b.vx, a.mass * a.vy + b.mass * b.vy)
        assert after == pytest.approx(before)

    def test_heavier_stone_moves_less(self):
        light = Stone(0, 0, mass=1.0, radius=20)
        heavy = Stone(30, 0, mass=3.0, radius=20)
        gravity.resolve_collision(light, heavy)
        assert abs(light.x - 0) == pytest.approx(7.5)
        assert abs(heavy.x - 30) == pytest.approx(2.5)
        assert light.distance_to(heavy) == pytest.approx(40.0)

    def test_coincident_centres_skipped(self):
        a = Stone(10, 10, radius=20)
        b = Stone(10, 10, radius=20)
        assert not gravity.resolve_collision(a, b)

    def test_relative_speed_ignores_mass(self):
        a = Stone(0, 0, mass=0.5)
        b = Stone(0, 0, mass=3.0)
        a.vx, b.vx = 100.0, -60.0
        assert gravity.relative_speed(a, b) == pytest.approx(160.0)


class TestBreak:
    """Labelled stones shatter into pieces."""

    def test_label_three_makes_three_pieces(self):
        parent = Stone(200, 200, mass=3.0, radius=45, label=3)
        parent.vx = 50.0
        pieces = gravity.break_stone(parent, explosion_speed=80)
        assert len(pieces) == 3
        for piece in pieces:
            assert piece.mass == pytest.approx(1.0)
            assert piece.radius == pytest.approx(45 / math.sqrt(3))
            assert piece.label is None
        assert sum(p.mass for p in pieces) == pytest.approx(parent.mass)

    def test_pieces_fly_outward_with_parent_velocity(self):
        parent = Stone(0, 0, mass=2.0, radius=40, label=2)
        parent.vx = 30.0
        pieces = gravity.break_stone(parent, explosion_speed=80)
        mean_vx = sum(p.vx for p in pieces) / len(pieces)
        assert mean_vx == pytest.approx(30.0)
        for piece in pieces:
            assert piece.distance_to(parent) == pytest.approx(20.0)

    def test_breakable_rules(self):
        assert gravity.is_breakable(Stone(0, 0, label=2))
        assert not gravity.is_breakable(Stone(0, 0, label=1))
        assert not gravity.is_breakable(Stone(0, 0))
        assert not gravity.is_breakable(Stone(0, 0, label=4, kind=StoneKind.GRAVITY_WELL))


class TestAbsorb:
    """Gravity wells swallow stones."""

    def test_absorb_grows_well(self):
        well = Stone(0, 0, mass=5.0, radius=42, kind=StoneKind.GRAVITY_WELL)
        stone = Stone(50, 0, mass=1.5, radius=20)
        assert gravity.can_absorb(well, stone)
        gravity.absorb(well, stone, growth=2, max_radius=70, reach_factor=3)
        assert well.mass == pytest.approx(6.5)
        assert well.radius == pytest.approx(44)
        assert well.gravitational_radius == pytest.approx(132)

    def test_radius_is_clamped(self):
        well = Stone(0, 0, mass=5.0, radius=69, kind=StoneKind.GRAVITY_WELL)
        gravity.absorb(well, Stone(0, 0), growth=2, max_radius=70, reach_factor=3)
        assert well.radius == 70

    def test_far_stone_not_absorbed(self):
        well = Stone(0, 0, radius=42, kind=StoneKind.GRAVITY_WELL)
        assert not gravity.can_absorb(well, Stone(100, 0, radius=20))

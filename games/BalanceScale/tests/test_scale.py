"""
Tests for beam and pan mechanics.

Tests cover:
- Target angle symmetry and clamping
- Angle smoothing
- Pan positions and stone layout on a pan
"""

import math

import pytest

from zen.modes.stone import Stone
from games.BalanceScale.scale import (
    Beam, Pan, compute_target_angle, ease_angle, pan_layout, pan_positions, side_torque,
)

MAX_TILT = math.pi / 8
HALF = 200.0


class TestTargetAngle:
    """Torque difference mapped to tilt."""

    def test_equal_totals_are_level(self):
        assert compute_target_angle([2], [2], HALF, MAX_TILT) == 0.0
        assert compute_target_angle([1, 1, 2], [3, 1], HALF, MAX_TILT) == 0.0

    @pytest.mark.parametrize("left,right", [
        ([1], [3]),
        ([2, 2], [1]),
        ([1, 1, 1], [2, 3]),
        ([], [1]),
    ])
    def test_swapping_pans_negates_angle(self, left, right):
        forward = compute_target_angle(left, right, HALF, MAX_TILT)
        swapped = compute_target_angle(right, left, HALF, MAX_TILT)
        assert swapped == -forward

    def test_heavier_right_tips_right(self):
        angle = compute_target_angle([1], [3], HALF, MAX_TILT)
        assert angle == pytest.approx(MAX_TILT * 2 / 6)

    def test_clamped_to_max_tilt(self):
        assert compute_target_angle([], [20], HALF, MAX_TILT) == MAX_TILT
        assert compute_target_angle([20], [], HALF, MAX_TILT) == -MAX_TILT

    def test_side_torque(self):
        assert side_torque([1, 2], HALF) == 600.0
        assert side_torque([], HALF) == 0.0


class TestEaseAngle:
    """Single-pole smoothing toward the target."""

    def test_moves_fraction_of_gap(self):
        assert ease_angle(0.0, 1.0, 4.0, 0.1) == pytest.approx(0.4)

    def test_never_overshoots(self):
        assert ease_angle(0.0, 1.0, 4.0, 1.0) == 1.0

    def test_converges(self):
        angle = 0.0
        for _ in range(100):
            angle = ease_angle(angle, 0.3, 4.0, 1 / 60)
            assert angle <= 0.3
        assert angle == pytest.approx(0.3, abs=1e-3)


class TestPans:
    """Pan geometry."""

    def test_level_beam_positions(self):
        left, right = pan_positions(Beam(x=100, y=50, width=400))
        assert left == pytest.approx((-100, 50))
        assert right == pytest.approx((300, 50))

    def test_positive_angle_lowers_right_pan(self):
        left, right = pan_positions(Beam(x=0, y=0, width=400, angle=0.2))
        assert right[1] > 0
        assert left[1] == pytest.approx(-right[1])

    def test_single_stone_sits_centred(self):
        pan = Pan('left', x=100, y=200, stones=[Stone(0, 0)])
        assert pan_layout(pan) == [(100, 185)]

    def test_ring_layout_starts_at_top(self):
        pan = Pan('right', x=100, y=200, stones=[Stone(0, 0) for _ in range(3)])
        spots = pan_layout(pan)
        assert len(spots) == 3
        assert spots[0] == pytest.approx((100, 200 - 15 - 30))
        for x, y in spots:
            assert math.hypot(x - 100, y - 185) == pytest.approx(30)

    def test_empty_pan_has_no_spots(self):
        assert pan_layout(Pan('left')) == []

    def test_pan_add_is_idempotent(self):
        pan = Pan('left')
        stone = Stone(0, 0, mass=2)
        pan.add(stone)
        pan.add(stone)
        assert pan.stones == [stone]
        assert pan.total_mass == 2

    def test_accepts_within_reach(self):
        pan = Pan('left', x=0, y=0)
        assert pan.accepts(50, 0, 80)
        assert not pan.accepts(90, 0, 80)

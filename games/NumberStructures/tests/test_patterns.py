"""
Tests for number patterns and recognition.

Tests cover:
- Canonical pattern table
- Recognition of exact, noisy and broken arrangements
- Intactness of an arrangement against its slots
"""

import random

import pytest

from games.NumberStructures.patterns import (
    arrangement_intact,
    pattern_for,
    recognize_pattern,
    slot_positions,
)


def shifted(points, dx=400.0, dy=300.0):
    return [(x + dx, y + dy) for x, y in points]


class TestPatternTable:

    @pytest.mark.parametrize("value", range(1, 21))
    def test_pattern_size_matches_value(self, value):
        assert len(pattern_for(value)) == value

    @pytest.mark.parametrize("value", [0, 21, -3])
    def test_unsupported_values_are_empty(self, value):
        assert pattern_for(value) == []

    def test_small_patterns(self):
        assert pattern_for(1) == [(0.0, 0.0)]
        assert pattern_for(2) == [(0.0, -25.0), (0.0, 25.0)]
        assert (0.0, 0.0) in pattern_for(5)
        assert sorted(pattern_for(4)) == [(-25.0, -25.0), (-25.0, 25.0), (25.0, -25.0), (25.0, 25.0)]

    def test_teens_are_ten_block_plus_remainder(self):
        thirteen = pattern_for(13)
        ten_block = [(x, y - 50) for x, y in pattern_for(10)]
        assert thirteen[:10] == ten_block
        assert [y for _, y in thirteen[10:]] == [25.0, 75.0, 125.0]

    def test_returns_a_copy(self):
        pattern = pattern_for(3)
        pattern.clear()
        assert len(pattern_for(3)) == 3

    def test_slot_positions_centred_on_centroid(self):
        slots = slot_positions(7, 500, 300)
        cx = sum(x for x, _ in slots) / len(slots)
        cy = sum(y for _, y in slots) / len(slots)
        assert cx == pytest.approx(500)
        assert cy == pytest.approx(300)


class TestRecognition:

    @pytest.mark.parametrize("value", range(1, 21))
    def test_exact_pattern_is_recognised(self, value):
        match = recognize_pattern(shifted(pattern_for(value)))
        assert match is not None
        assert match.value == value
        assert match.error == pytest.approx(0.0, abs=1e-9)
        assert sorted(match.assignment.values()) == list(range(value))

    def test_assignment_follows_matched_slot(self):
        points = shifted(pattern_for(6))
        order = list(range(6))
        random.Random(7).shuffle(order)
        shuffled = [points[i] for i in order]

        match = recognize_pattern(shuffled)
        assert match is not None
        for slot, index in match.assignment.items():
            assert shuffled[index] == pytest.approx(points[slot])
            assert match.slot_of(index) == slot

    @pytest.mark.parametrize("value", range(1, 21))
    def test_noisy_pattern_is_recognised(self, value):
        rng = random.Random(value)
        points = [(x + rng.uniform(-5, 5), y + rng.uniform(-5, 5))
                  for x, y in shifted(pattern_for(value))]
        match = recognize_pattern(points)
        assert match is not None
        assert match.value == value
        assert match.error < 15

    @pytest.mark.parametrize("value", range(2, 21))
    def test_one_far_stone_breaks_recognition(self, value):
        points = shifted(pattern_for(value))
        x, y = points[0]
        points[0] = (x + 300, y + 300)
        assert recognize_pattern(points) is None

    def test_empty_and_oversized(self):
        assert recognize_pattern([]) is None
        assert recognize_pattern([(i * 50.0, 0.0) for i in range(21)]) is None

    def test_mean_error_limit(self):
        # Every point 30 px off: inside the threshold, but the mean is too high
        assert recognize_pattern([(100, 45), (100, 155)]) is None
        match = recognize_pattern([(100, 55), (100, 145)])
        assert match is not None
        assert match.error == pytest.approx(20.0)

    def test_straight_line_is_not_a_three(self):
        assert recognize_pattern([(340, 300), (400, 300), (460, 300)]) is None


class TestIntactness:

    def test_translated_pattern_is_intact(self):
        points = shifted(pattern_for(9), 1000, -40)
        assert arrangement_intact(points, list(range(9)), 9)

    def test_displaced_member_breaks_it(self):
        points = shifted(pattern_for(5))
        x, y = points[2]
        points[2] = (x + 60, y)
        assert not arrangement_intact(points, list(range(5)), 5)

    def test_swapped_slots_break_it(self):
        points = shifted(pattern_for(3))
        assert not arrangement_intact(points, [2, 1, 0], 3)

    def test_wrong_count(self):
        assert not arrangement_intact(shifted(pattern_for(4)), [0, 1, 2, 3], 5)
        assert not arrangement_intact([], [], 1)

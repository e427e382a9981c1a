"""Tests for guess puzzle generation."""

import random

import pytest

from games.BalanceScale.puzzle import (
    DIFFICULTY_LEVELS, Answer, Puzzle, compare_sides, generate_puzzle,
)


class TestComparison:

    def test_answers(self):
        assert compare_sides(3, 2) == Answer.LEFT
        assert compare_sides(2, 3) == Answer.RIGHT
        assert compare_sides(4, 4) == Answer.BALANCED

    def test_puzzle_answer_sums_masses(self):
        assert Puzzle(left=(1, 1, 1), right=(3,)).answer == Answer.BALANCED
        assert Puzzle(left=(2,), right=(1, 2)).answer == Answer.RIGHT


class TestGeneration:
    """Random puzzles respect the difficulty ranges."""

    @pytest.mark.parametrize("difficulty", [1, 2, 3])
    def test_ranges(self, difficulty):
        rng = random.Random(difficulty)
        (min_count, max_count), (min_mass, max_mass) = DIFFICULTY_LEVELS[difficulty]
        for _ in range(50):
            puzzle = generate_puzzle(difficulty, rng)
            assert min_count <= puzzle.stone_count <= max_count
            assert puzzle.left and puzzle.right
            for mass in puzzle.left + puzzle.right:
                assert min_mass <= mass <= max_mass

    def test_difficulty_is_clamped(self):
        rng = random.Random(7)
        low = generate_puzzle(0, rng)
        high = generate_puzzle(9, rng)
        assert 2 <= low.stone_count <= 4
        assert 4 <= high.stone_count <= 6

    def test_seeded_generation_is_repeatable(self):
        assert generate_puzzle(2, random.Random(5)) == generate_puzzle(2, random.Random(5))

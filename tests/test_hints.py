"""
Tests for HintSystem.

Tests cover:
- Hints appear only after the inactivity threshold
- Interaction fades a hint out
- No hint repeats twice in a row
- Modes without hints
"""

import random

import pytest

from zen.hints import MAX_OPACITY, HintSystem


HINTS = {"stack-balance": ["Try a wide base", "Heavy stones go low", "Tap to see colours"]}


@pytest.fixture
def hints():
    h = HintSystem(HINTS, threshold=10.0, rng=random.Random(7))
    h.set_mode("stack-balance")
    return h


def run(hints, seconds, step=0.1):
    for _ in range(int(round(seconds / step))):
        hints.update(step)


class TestInactivity:

    def test_nothing_before_threshold(self, hints):
        run(hints, 9.5)
        assert hints.current_hint is None

    def test_hint_after_threshold(self, hints):
        run(hints, 10.5)
        assert hints.current_hint in HINTS["stack-balance"]
        assert hints.is_visible

    def test_fades_in_to_max(self, hints):
        run(hints, 12.0)
        assert hints.opacity == pytest.approx(MAX_OPACITY)

    def test_interaction_restarts_countdown(self, hints):
        run(hints, 8.0)
        hints.record_interaction()
        run(hints, 8.0)
        assert hints.current_hint is None


class TestFadeOut:

    def test_interaction_fades_hint_away(self, hints):
        run(hints, 12.0)
        hints.record_interaction()
        assert not hints.is_visible
        run(hints, 1.0)
        assert hints.current_hint is None
        assert hints.opacity == 0.0

    def test_dismiss(self, hints):
        hints.show_hint()
        hints.dismiss()
        assert not hints.is_visible


class TestSelection:

    def test_never_same_hint_twice_in_a_row(self, hints):
        previous = None
        for _ in range(50):
            hint = hints.show_hint()
            assert hint != previous
            previous = hint

    def test_single_hint_can_repeat(self):
        h = HintSystem({"balance-scale": ["Only one"]})
        h.set_mode("balance-scale")
        assert h.show_hint() == "Only one"
        assert h.show_hint() == "Only one"

    def test_mode_without_hints(self):
        h = HintSystem(HINTS, threshold=1.0)
        h.set_mode("free-explore")
        run(h, 2.0)
        assert h.current_hint is None

    def test_switching_mode_clears_hint(self, hints):
        hints.show_hint()
        hints.set_mode("free-explore")
        assert hints.current_hint is None

    def test_render_smoke(self, hints, surface):
        run(hints, 12.0)
        hints.render(surface)

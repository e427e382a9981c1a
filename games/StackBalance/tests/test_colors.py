"""Tests for neighbour colour reactions and blending."""

import pytest

from zen.modes import palette
from zen.modes.stone import Stone
from games.StackBalance import colors
from games.StackBalance.stack import StackBody, StackPhase


def body(x, y, color, phase=StackPhase.STACKED, radius=30.0):
    return StackBody(stone=Stone(x, y, radius=radius), color_name=color, tray_x=0, tray_y=0,
                     base_color=palette.NAMED_COLORS[color], phase=phase)


class TestReactionKinds:

    @pytest.mark.parametrize("a,b,expected", [
        ('red', 'red', colors.MATCH),
        ('red', 'green', colors.SPARK),
        ('blue', 'orange', colors.SPARK),
        ('red', 'orange', colors.KIN),
        ('blue', 'purple', colors.KIN),
        ('red', 'blue', None),
    ])
    def test_reaction_for(self, a, b, expected):
        assert colors.reaction_for(a, b) == expected


class TestReactions:
    """Touching stacked pairs light up."""

    def test_matching_pair_glows(self):
        a, b = body(640, 500, 'red'), body(640, 440, 'red')
        assert colors.apply_reactions([a, b], 1.1, 0.5) == 1
        assert a.glow == b.glow == colors.MATCH_GLOW

    def test_complementary_pair_sparks(self):
        a, b = body(640, 500, 'yellow'), body(640, 440, 'purple')
        colors.apply_reactions([a, b], 1.1, 0.5)
        assert a.spark == b.spark == 0.5
        assert a.glow == 0

    def test_same_category_glows_faintly(self):
        a, b = body(640, 500, 'green'), body(640, 440, 'blue')
        colors.apply_reactions([a, b], 1.1, 0.5)
        assert a.glow == b.glow == colors.KIN_GLOW

    def test_distant_pair_does_not_react(self):
        a, b = body(640, 500, 'red'), body(640, 300, 'red')
        assert colors.apply_reactions([a, b], 1.1, 0.5) == 0
        assert a.glow == 0

    def test_only_stacked_stones_react(self):
        a, b = body(640, 500, 'red'), body(640, 440, 'red', phase=StackPhase.FALLING)
        assert colors.apply_reactions([a, b], 1.1, 0.5) == 0

    def test_decay(self):
        a = body(640, 500, 'red')
        a.glow, a.spark = 1.0, 0.5
        colors.decay(a, 0.25, 1.0)
        assert a.glow == pytest.approx(0.75)
        assert a.spark == pytest.approx(0.25)
        colors.decay(a, 5.0, 1.0)
        assert a.glow == 0 and a.spark == 0


class TestBlending:
    """Display colours drift toward nearby stacked colours."""

    def test_neighbours_blend(self):
        a, b = body(640, 500, 'red'), body(640, 440, 'blue')
        colors.blend_colors([a, b], 150, 0.35)
        assert a.display_color != a.base_color
        # Red channel moves toward blue's lower red
        assert palette.NAMED_COLORS['blue'][0] < a.display_color[0] < a.base_color[0]

    def test_lone_and_unstacked_keep_base(self):
        a = body(640, 500, 'red')
        b = body(660, 480, 'blue', phase=StackPhase.AVAILABLE)
        colors.blend_colors([a, b], 150, 0.35)
        assert a.display_color == a.base_color
        assert b.display_color == b.base_color

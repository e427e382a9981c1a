"""
Colour palettes for stones and scenery.

Stone tones are muted earth colours; named colours (with warm/cool
categories and complementary pairs) are used by Stack Balance and its
colour challenges. Palettes can be cycled in the launcher with the P key.
"""

import random
from typing import Dict, List, Optional, Sequence, Tuple

from models import Color as ColorModel

# Type alias for RGB color
Color = Tuple[int, int, int]


def hex_to_rgb(value: str) -> Color:
    """'#8b7d6b' -> (139, 125, 107)."""
    return ColorModel.from_hex(value).as_rgb_tuple


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Linear blend between two colours, t clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return (
        int(round(a[0] + (b[0] - a[0]) * t)),
        int(round(a[1] + (b[1] - a[1]) * t)),
        int(round(a[2] + (b[2] - a[2]) * t)),
    )


def weighted_average(colors: Sequence[Color], weights: Sequence[float]) -> Optional[Color]:
    """Weighted mean colour, or None when there is nothing to average."""
    total = sum(weights)
    if not colors or total <= 0:
        return None
    return (
        int(round(sum(c[0] * w for c, w in zip(colors, weights)) / total)),
        int(round(sum(c[1] * w for c, w in zip(colors, weights)) / total)),
        int(round(sum(c[2] * w for c, w in zip(colors, weights)) / total)),
    )


# Scenery
BACKGROUND = hex_to_rgb('#e8dcc4')
BACKGROUND_SPECKLES = (hex_to_rgb('#d4c5ab'), hex_to_rgb('#f0e6d2'))
STONE_HIGHLIGHT = hex_to_rgb('#b8a894')
WOOD = hex_to_rgb('#8b7d6b')
WOOD_DARK = hex_to_rgb('#7a6f5d')
TEXT = hex_to_rgb('#5a5045')
GRAVITY_WELL = hex_to_rgb('#1a1a1a')

# Stone tone palettes - first one is the default
STONE_PALETTES: Dict[str, List[Color]] = {
    'earth': [hex_to_rgb(c) for c in ('#8b7d6b', '#9a8c7a', '#7a6f5d', '#6b6152', '#a39482')],
    'river': [hex_to_rgb(c) for c in ('#7d8b8a', '#6b7a7c', '#8e9c99', '#5d6b6e', '#a3aeab')],
    'clay': [hex_to_rgb(c) for c in ('#a3705b', '#b5826a', '#8c5f4d', '#7a5244', '#c4947c')],
}

# Named colours for Stack Balance
NAMED_COLORS: Dict[str, Color] = {
    'red': hex_to_rgb('#C75B5B'),
    'orange': hex_to_rgb('#D4943A'),
    'yellow': hex_to_rgb('#C7A83B'),
    'blue': hex_to_rgb('#5B7FC7'),
    'green': hex_to_rgb('#5BA86B'),
    'purple': hex_to_rgb('#8B6BB8'),
}

COLOR_CATEGORIES: Dict[str, str] = {
    'red': 'warm',
    'orange': 'warm',
    'yellow': 'warm',
    'blue': 'cool',
    'green': 'cool',
    'purple': 'cool',
}

COMPLEMENTARY = {
    frozenset(('red', 'green')),
    frozenset(('orange', 'blue')),
    frozenset(('yellow', 'purple')),
}


def color_category(name: str) -> Optional[str]:
    """'warm', 'cool' or None for unknown names."""
    return COLOR_CATEGORIES.get(name)


def is_warm(name: str) -> bool:
    return COLOR_CATEGORIES.get(name) == 'warm'


def are_complementary(a: str, b: str) -> bool:
    return frozenset((a, b)) in COMPLEMENTARY


class StonePalette:
    """Stone tone palette with cycling support."""

    def __init__(self, palette_name: Optional[str] = None):
        """
        Initialize palette.

        Args:
            palette_name: Name from STONE_PALETTES; unknown or None means 'earth'
        """
        if palette_name not in STONE_PALETTES:
            palette_name = 'earth'
        self.name = palette_name
        self.colors = STONE_PALETTES[palette_name].copy()

    def tone_for_mass(self, mass: float) -> Color:
        """Heavier stones get later (usually darker) tones."""
        index = min(int(mass * 1.5), len(self.colors) - 1)
        return self.colors[max(0, index)]

    def random_tone(self) -> Color:
        return random.choice(self.colors)

    def set_palette(self, palette_name: str) -> bool:
        """
        Switch to a named palette.

        Returns:
            True if palette found and switched, False otherwise
        """
        if palette_name in STONE_PALETTES:
            self.colors = STONE_PALETTES[palette_name].copy()
            self.name = palette_name
            return True
        return False

    def cycle_palette(self) -> str:
        """
        Cycle to next palette.

        Returns:
            Name of new palette
        """
        palette_names = list(STONE_PALETTES.keys())
        try:
            next_idx = (palette_names.index(self.name) + 1) % len(palette_names)
        except ValueError:
            next_idx = 0
        self.set_palette(palette_names[next_idx])
        return self.name

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self):
        return iter(self.colors)


def get_palette_names() -> List[str]:
    """Get list of available stone palette names."""
    return list(STONE_PALETTES.keys())

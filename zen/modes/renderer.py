"""
Drawing helpers shared by the modes.

Thin wrappers over pygame.draw for the toy's recurring shapes: paper
background, stones, group halos, labels and buttons. Modes call these and
never depend on how they draw.
"""

import math
import random
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import pygame

from models import Rectangle
from zen.modes import palette
from zen.modes.stone import Stone

Color = Tuple[int, int, int]


@lru_cache(maxsize=16)
def get_font(size: int) -> pygame.font.Font:
    """Default font at the given pixel size (created once)."""
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


@lru_cache(maxsize=4)
def _speckles(width: int, height: int, count: int = 400) -> List[Tuple[int, int, int]]:
    """Fixed speckle layout per screen size (x, y, palette index)."""
    rng = random.Random(width * 7919 + height)
    return [(rng.randrange(width), rng.randrange(height), rng.randrange(2)) for _ in range(count)]


def draw_background(surface: pygame.Surface, color: Color = palette.BACKGROUND,
                    texture: bool = True) -> None:
    """Fill with the paper colour plus a light speckle texture."""
    surface.fill(color)
    if not texture:
        return
    width, height = surface.get_size()
    for x, y, idx in _speckles(width, height):
        surface.fill(palette.BACKGROUND_SPECKLES[idx], (x, y, 2, 2))


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[float, float],
              size: int = 28, color: Color = palette.TEXT, center: bool = True,
              alpha: int = 255) -> None:
    rendered = get_font(size).render(text, True, color)
    if alpha < 255:
        rendered.set_alpha(max(0, alpha))
    rect = rendered.get_rect()
    if center:
        rect.center = (int(pos[0]), int(pos[1]))
    else:
        rect.topleft = (int(pos[0]), int(pos[1]))
    surface.blit(rendered, rect)


def draw_stone(surface: pygame.Surface, stone: Stone, color: Optional[Color] = None,
               glow: float = 0.0, offset_x: float = 0.0) -> None:
    """Draw a stone with shadow, highlight and optional label.

    Args:
        color: Override fill colour (e.g. blended colour in Stack Balance)
        glow: 0..1 halo intensity
        offset_x: Visual-only horizontal offset (wobble)
    """
    cx = int(stone.x + offset_x)
    cy = int(stone.y)
    radius = max(1, int(stone.radius))

    if stone.is_gravity_well:
        draw_gravity_well(surface, stone.x + offset_x, stone.y, stone.radius, stone.gravitational_radius)
        return

    if glow > 0:
        halo = pygame.Surface((radius * 4, radius * 4), pygame.SRCALPHA)
        pygame.draw.circle(halo, (255, 240, 200, int(120 * min(1.0, glow))),
                           (radius * 2, radius * 2), int(radius * 1.4))
        surface.blit(halo, (cx - radius * 2, cy - radius * 2))

    # Shadow
    pygame.draw.circle(surface, palette.lerp_color(palette.BACKGROUND, (0, 0, 0), 0.15),
                       (cx + 2, cy + 3), radius)

    fill = palette.STONE_HIGHLIGHT if stone.is_dragging else (color or stone.color)
    pygame.draw.circle(surface, fill, (cx, cy), radius)
    pygame.draw.circle(surface, palette.lerp_color(fill, (255, 255, 255), 0.25),
                       (cx - radius // 3, cy - radius // 3), max(1, radius // 3))

    if stone.is_locked:
        pygame.draw.circle(surface, palette.WOOD, (cx, cy), radius, 2)

    if stone.label is not None:
        draw_text(surface, str(stone.label), (cx, cy), size=max(12, int(stone.radius * 0.9)),
                  color=(250, 250, 250))


def draw_gravity_well(surface: pygame.Surface, x: float, y: float, radius: float,
                      reach: float = 0.0) -> None:
    """Dark core with a faint ring showing how far it pulls."""
    cx, cy = int(x), int(y)
    if reach > radius:
        pygame.draw.circle(surface, palette.lerp_color(palette.BACKGROUND, palette.GRAVITY_WELL, 0.2),
                           (cx, cy), int(reach), 1)
    pygame.draw.circle(surface, palette.lerp_color(palette.GRAVITY_WELL, (90, 60, 140), 0.4),
                       (cx, cy), int(radius * 1.25))
    pygame.draw.circle(surface, palette.GRAVITY_WELL, (cx, cy), int(radius))


def draw_group_halo(surface: pygame.Surface, stones: Sequence[Stone],
                    color: Color = palette.WOOD) -> None:
    """Connecting lines plus a ring around a group and its size."""
    if len(stones) < 2:
        return
    cx = sum(s.x for s in stones) / len(stones)
    cy = sum(s.y for s in stones) / len(stones)
    reach = max(math.hypot(s.x - cx, s.y - cy) + s.radius for s in stones) + 10

    for a, b in zip(stones, stones[1:]):
        pygame.draw.line(surface, palette.lerp_color(palette.BACKGROUND, color, 0.4),
                         (int(a.x), int(a.y)), (int(b.x), int(b.y)), 2)
    pygame.draw.circle(surface, palette.lerp_color(palette.BACKGROUND, color, 0.5),
                       (int(cx), int(cy)), int(reach), 2)
    draw_text(surface, str(len(stones)), (cx, cy - reach - 16), size=32, color=color)


def draw_button(surface: pygame.Surface, rect: Rectangle, label: str,
                active: bool = False) -> None:
    fill = palette.WOOD_DARK if active else palette.WOOD
    pygame.draw.rect(surface, fill, rect.as_pygame_rect(), border_radius=8)
    draw_text(surface, label, (rect.center.x, rect.center.y), size=24, color=(245, 240, 230))


def draw_panel(surface: pygame.Surface, rect: Rectangle, color: Color = (255, 255, 255),
               alpha: int = 120) -> None:
    """Translucent rounded rectangle."""
    panel = pygame.Surface((int(rect.width), int(rect.height)), pygame.SRCALPHA)
    pygame.draw.rect(panel, (*color, alpha), panel.get_rect(), border_radius=12)
    surface.blit(panel, (int(rect.x), int(rect.y)))

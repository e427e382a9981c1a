"""
Inactivity hints - a gentle prompt that fades in when nobody has touched
anything for a while, and fades out again on the next interaction.
"""
import random
from typing import Dict, List, Optional

import pygame

from zen.logging import get_logger
from zen.modes import renderer

log = get_logger('hints')

INACTIVITY_THRESHOLD = 45.0
FADE_SPEED = 1.2     # opacity per second
MAX_OPACITY = 0.7

PILL_COLOR = (90, 80, 68)
HINT_TEXT_COLOR = (232, 220, 196)


class HintSystem:
    """Shows one hint per period of inactivity for the current mode.

    Usage:
        hints = HintSystem(registry.hints_by_mode())
        hints.set_mode('stack-balance')
        hints.record_interaction()   # on every pointer event
        hints.update(dt)
        hints.render(surface)
    """

    def __init__(self, hints_by_mode: Dict[str, List[str]],
                 threshold: float = INACTIVITY_THRESHOLD,
                 rng: Optional[random.Random] = None):
        self.hints_by_mode = {k: list(v) for k, v in hints_by_mode.items()}
        self.threshold = threshold
        self._rng = rng or random.Random()

        self.mode_id: Optional[str] = None
        self.current_hint: Optional[str] = None
        self.opacity = 0.0
        self.target_opacity = 0.0
        self.inactivity = 0.0
        self._last_index = -1

    @property
    def is_visible(self) -> bool:
        return self.current_hint is not None and self.target_opacity > 0

    def set_mode(self, mode_id: str) -> None:
        self.mode_id = mode_id
        self.reset()

    def reset(self) -> None:
        self.current_hint = None
        self.opacity = 0.0
        self.target_opacity = 0.0
        self.inactivity = 0.0
        self._last_index = -1

    def record_interaction(self) -> None:
        """Restart the inactivity countdown and fade out any hint."""
        self.inactivity = 0.0
        self.target_opacity = 0.0

    def dismiss(self) -> None:
        self.record_interaction()

    def show_hint(self) -> Optional[str]:
        """Pick a random hint for the mode, never the same one twice in a row."""
        hints = self.hints_by_mode.get(self.mode_id or '', [])
        if not hints:
            return None

        choices = [i for i in range(len(hints)) if i != self._last_index] or [0]
        index = self._rng.choice(choices)
        self._last_index = index
        self.current_hint = hints[index]
        self.target_opacity = MAX_OPACITY
        log.debug(f"Hint: {self.current_hint}")
        return self.current_hint

    def update(self, dt: float) -> None:
        self.inactivity += dt
        if self.inactivity >= self.threshold and not self.is_visible:
            self.show_hint()

        step = FADE_SPEED * dt
        if self.opacity < self.target_opacity:
            self.opacity = min(self.opacity + step, self.target_opacity)
        elif self.opacity > self.target_opacity:
            self.opacity = max(self.opacity - step, self.target_opacity)
            if self.opacity <= 0.01:
                self.opacity = 0.0
                self.current_hint = None

    def render(self, surface: pygame.Surface) -> None:
        if self.current_hint is None or self.opacity <= 0.01:
            return

        width, height = surface.get_size()
        size = 20
        text_width = renderer.get_font(size).size(self.current_hint)[0]
        pill = pygame.Rect(0, 0, text_width + 48, size + 24)
        pill.center = (width // 2, height - 40 - pill.height // 2)

        overlay = pygame.Surface(pill.size, pygame.SRCALPHA)
        pygame.draw.rect(overlay, (*PILL_COLOR, int(255 * self.opacity * 0.6)),
                         overlay.get_rect(), border_radius=pill.height // 2)
        surface.blit(overlay, pill.topleft)
        renderer.draw_text(surface, self.current_hint, pill.center, size=size,
                           color=HINT_TEXT_COLOR, alpha=int(255 * self.opacity))

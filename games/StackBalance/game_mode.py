"""
Stack Balance Mode

Stones dragged from the tray and released over the platform fall under
gravity, bounce and settle on the platform or on each other. When the
stack's centre of mass drifts too far from the middle of the platform the
whole stack topples off the screen.
"""
import math
import random
from typing import Dict, List, Optional

import pygame

from zen.logging import get_logger
from zen.modes import palette, renderer
from zen.modes.base_mode import BaseMode
from zen.modes.mode_state import ModeKind, StackState, StoneSnapshot
from zen.modes.motion import clamp_dt
from zen.modes.stone import Stone
from games.StackBalance.config import StackBalanceConfig
from games.StackBalance import colors, stack
from games.StackBalance.stack import StackBody, StackPhase

log = get_logger('stack_balance')


class StackBalanceMode(BaseMode):
    """Stack Balance - base, height and centre of mass.

    Per-stone phases: AVAILABLE -> FALLING -> STACKED -> TOPPLING -> REMOVED.
    Picking a stone up (from the tray, mid-fall or off the stack) puts it
    back to AVAILABLE; lifting a stacked stone re-checks the stack.
    """

    MODE_ID = ModeKind.STACK_BALANCE.value
    NAME = "Stack"
    DESCRIPTION = "Build a tower of stones without letting it fall."
    VERSION = "1.0.0"
    HINTS = [
        "Drop a stone onto the platform",
        "How tall can you build it?",
        "Big stones make a good base",
        "Put stones of the same colour next to each other",
    ]

    CONFIG_CLASS = StackBalanceConfig

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        config: Optional[StackBalanceConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(width, height, config)
        self._rng = rng or random.Random()
        self.platform = self._make_platform()
        self.bodies: Dict[int, StackBody] = {}
        self.stacked: List[Stone] = []
        self.is_toppling = False
        self.topple_count = 0
        self._topple_time = 0.0

    def _make_platform(self) -> stack.Platform:
        cfg = self.config
        return stack.Platform(
            x=self.width / 2,
            y=self.height - cfg.platform_bottom_offset,
            width=cfg.platform_width,
            height=cfg.platform_height,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _setup(self) -> None:
        cfg = self.config
        self.platform = self._make_platform()
        self.bodies = {}
        self.stacked = []
        self.is_toppling = False

        count = cfg.stone_count
        tray_width = self.width * cfg.tray_width_fraction
        start = self.width / 2 - tray_width / 2
        spacing = tray_width / (count - 1) if count > 1 else 0
        names = list(palette.NAMED_COLORS)

        for i in range(count):
            radius = cfg.stone_radius * self._rng.uniform(cfg.min_size, cfg.max_size)
            x = start + i * spacing if count > 1 else self.width / 2
            y = cfg.tray_y + self._rng.random() * 20
            name = self._rng.choice(names)
            self.add_body(Stone(x, y, mass=radius / cfg.stone_radius, radius=radius,
                                color=palette.NAMED_COLORS[name]), name)

    def _teardown(self) -> None:
        self.bodies.clear()
        self.stacked = []
        self.is_toppling = False

    def add_body(self, stone: Stone, color_name: str) -> StackBody:
        """Add a tray stone with a named colour."""
        self.add_stone(stone)
        body = StackBody(
            stone=stone,
            color_name=color_name,
            tray_x=stone.x,
            tray_y=stone.y,
            base_color=palette.NAMED_COLORS.get(color_name, stone.color),
        )
        body.display_color = body.base_color
        self.bodies[stone.id] = body
        return body

    def body(self, stone: Stone) -> StackBody:
        return self.bodies[stone.id]

    def in_phase(self, phase: StackPhase) -> List[StackBody]:
        return [b for b in self.bodies.values() if b.phase == phase]

    @property
    def stack_height(self) -> int:
        return len(self.stacked)

    # =========================================================================
    # Stacking
    # =========================================================================

    def in_drop_zone(self, x: float, y: float) -> bool:
        return y > self.config.drop_zone_y and abs(x - self.platform.x) < self.platform.width

    def drop(self, stone: Stone) -> None:
        """Let a stone fall from where it is."""
        body = self.body(stone)
        body.phase = StackPhase.FALLING
        stone.stop()

    def return_to_tray(self, stone: Stone) -> None:
        body = self.body(stone)
        body.phase = StackPhase.AVAILABLE
        stone.stop()
        stone.set_target(body.tray_x, body.tray_y)

    def settle(self, stone: Stone) -> bool:
        """Rest a stone where it is on the stack and re-check stability.

        Returns:
            True if the stack still stands
        """
        body = self.body(stone)
        body.phase = StackPhase.STACKED
        stone.stop()
        stone.set_position(stone.x, stone.y)
        if stone not in self.stacked:
            self.stacked.append(stone)
        return self.check_stability()

    def lift(self, stone: Stone) -> None:
        """Take a stone off the stack (it is in hand now)."""
        if stone in self.stacked:
            self.stacked.remove(stone)
            if self.check_stability():
                self.release_unsupported()
        body = self.body(stone)
        body.phase = StackPhase.AVAILABLE
        body.wobble = body.wobble_velocity = 0.0
        stone.stop()

    def release_unsupported(self) -> List[Stone]:
        """Let stacked stones with nothing left under them fall again.

        Returns:
            The stones that started falling
        """
        footprint = self.config.landing_footprint
        released: List[Stone] = []
        changed = True
        while changed:
            changed = False
            for stone in list(self.stacked):
                if stack.is_supported(stone, self.platform, self.stacked, footprint):
                    continue
                self.stacked.remove(stone)
                self.drop(stone)
                released.append(stone)
                changed = True
        if released:
            log.debug(f"{len(released)} stones lost their support")
            self.check_stability()
        return released

    def check_stability(self) -> bool:
        cfg = self.config
        if stack.is_stack_stable(self.stacked, self.platform.x, self.platform.half_width,
                                 cfg.stability_tolerance):
            return True
        offset = stack.stack_offset(self.stacked, self.platform.x)
        self.topple_stack(1 if offset >= 0 else -1)
        return False

    def topple_stack(self, direction: int) -> None:
        cfg = self.config
        bodies = [self.body(s) for s in self.stacked]
        stack.topple(bodies, direction, cfg.topple_force, cfg.topple_height_factor,
                     cfg.topple_kick, (cfg.topple_spin_min, cfg.topple_spin_max), self._rng)
        log.info(f"Stack of {len(bodies)} toppled {'right' if direction > 0 else 'left'}")
        self.stacked = []
        self.is_toppling = True
        self.topple_count += 1
        self._topple_time = 0.0

    # =========================================================================
    # Frame
    # =========================================================================

    def update(self, dt: float) -> None:
        cfg = self.config
        dt = clamp_dt(dt, cfg.max_dt)

        for body in list(self.bodies.values()):
            stone = body.stone
            if stone.is_dragging:
                continue
            if body.phase == StackPhase.FALLING:
                self._step_falling(body, dt)
            elif body.phase == StackPhase.TOPPLING:
                self._step_toppling(body, dt)
            elif body.phase == StackPhase.STACKED:
                stack.step_wobble(body, dt, cfg.wobble_spring, cfg.wobble_damping)
            elif body.phase == StackPhase.AVAILABLE:
                stone.update(dt)

        bodies = list(self.bodies.values())
        for body in bodies:
            colors.decay(body, dt, cfg.glow_decay)
        colors.apply_reactions(bodies, cfg.touch_factor, cfg.spark_duration)
        colors.blend_colors(bodies, cfg.blend_radius, cfg.blend_strength)

        self._topple_time += dt
        self.is_toppling = bool(self.in_phase(StackPhase.TOPPLING))

    def _step_falling(self, body: StackBody, dt: float) -> None:
        cfg = self.config
        stone = body.stone
        stone.vy += cfg.gravity * dt
        stone.set_position(stone.x + stone.vx * dt, stone.y + stone.vy * dt)

        if stone.y - stone.radius > self.height:
            log.debug(f"Stone {stone.id} missed the platform")
            self.return_to_tray(stone)
            return

        contact = stack.find_contact(stone, self.platform, self.stacked, cfg.landing_footprint)
        if contact is None:
            return

        rested, impact = stack.resolve_contact(
            stone, contact, cfg.rest_speed, self._rng, cfg.bounce_scatter,
            cfg.restitution_base, cfg.restitution_per_speed, cfg.restitution_max,
        )
        if not rested:
            return

        stack.transfer_wobble(stone, list(self.bodies.values()), impact,
                              cfg.wobble_transfer, cfg.wobble_radius_factor)
        stable = self.settle(stone)
        if stable:
            log.debug(f"Stone {stone.id} landed, stack height {self.stack_height}")

    def _step_toppling(self, body: StackBody, dt: float) -> None:
        cfg = self.config
        stone = body.stone
        stone.vy += cfg.gravity * dt
        stone.vx *= cfg.topple_friction
        body.rotation += body.spin * dt
        stone.set_position(stone.x + stone.vx * dt, stone.y + stone.vy * dt)

        margin = cfg.offscreen_margin
        if (stone.y > self.height + margin or stone.x < -margin
                or stone.x > self.width + margin):
            body.phase = StackPhase.REMOVED
            self.remove_stone(stone)
            del self.bodies[stone.id]

    def render(self, surface: pygame.Surface) -> None:
        cfg = self.config
        renderer.draw_background(surface, cfg.background_color, cfg.show_texture)
        p = self.platform

        left = p.x - p.half_width
        pygame.draw.rect(surface, palette.WOOD,
                         pygame.Rect(int(left), int(p.top), int(p.width), int(p.height)),
                         border_radius=3)
        pygame.draw.rect(surface, palette.WOOD, pygame.Rect(int(left + 10), int(p.top + p.height), 6, 20))
        pygame.draw.rect(surface, palette.WOOD,
                         pygame.Rect(int(left + p.width - 16), int(p.top + p.height), 6, 20))

        if self.in_phase(StackPhase.AVAILABLE):
            renderer.draw_text(surface, "drag stones down to stack", (self.width / 2, 110),
                               size=20, alpha=80)

        for stone in self.stones:
            body = self.bodies.get(stone.id)
            if body is None:
                renderer.draw_stone(surface, stone)
                continue
            renderer.draw_stone(surface, stone, color=body.display_color, glow=body.glow,
                                offset_x=body.wobble)
            if body.spark > 0:
                self._render_spark(surface, body)
            if body.phase == StackPhase.TOPPLING:
                end = (stone.x + math.cos(body.rotation) * stone.radius * 0.6,
                       stone.y + math.sin(body.rotation) * stone.radius * 0.6)
                pygame.draw.line(surface, palette.STONE_HIGHLIGHT,
                                 (int(stone.x), int(stone.y)), (int(end[0]), int(end[1])), 2)

        if self.stack_height > 0:
            renderer.draw_text(surface, str(self.stack_height), (self.width - 50, self.height - 50),
                               size=32, alpha=110)
            renderer.draw_text(surface, "stacked", (self.width - 50, self.height - 28),
                               size=18, alpha=80)

        if self.is_toppling and self._topple_time < 0.3:
            sway = math.sin(self._topple_time * 30) * 3
            pygame.draw.line(surface, palette.lerp_color(cfg.background_color, palette.WOOD, 0.4),
                             (int(p.x + sway), int(p.y - 200)), (int(p.x + sway), int(p.y)), 2)

    def _render_spark(self, surface: pygame.Surface, body: StackBody) -> None:
        stone = body.stone
        length = stone.radius * (0.4 + body.spark)
        for i in range(6):
            a = i * math.pi / 3 + body.spark * 4
            start = (stone.x + math.cos(a) * stone.radius, stone.y + math.sin(a) * stone.radius)
            end = (stone.x + math.cos(a) * (stone.radius + length),
                   stone.y + math.sin(a) * (stone.radius + length))
            pygame.draw.line(surface, (255, 230, 160), (int(start[0]), int(start[1])),
                             (int(end[0]), int(end[1])), 2)

    # =========================================================================
    # Pointer hooks
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> Optional[Stone]:
        grabbable = (StackPhase.AVAILABLE, StackPhase.FALLING, StackPhase.STACKED)
        for stone in reversed(self.stones):
            body = self.bodies.get(stone.id)
            if body is None or body.phase not in grabbable or not stone.contains(x, y):
                continue
            if not stone.start_drag():
                return None
            self.lift(stone)
            self.move_stone_to_top(stone)
            return stone
        return None

    def on_pointer_up(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is None:
            return
        dragged.stop_drag()
        if dragged.id not in self.bodies:
            return
        if self.in_drop_zone(x, y):
            self.drop(dragged)
        else:
            self.return_to_tray(dragged)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_state(self) -> StackState:
        def snap(stone: Stone) -> StoneSnapshot:
            return StoneSnapshot.of(stone, self.bodies[stone.id].color_name)

        return StackState(
            stacked=tuple(snap(s) for s in self.stacked),
            available=tuple(snap(b.stone) for b in self.in_phase(StackPhase.AVAILABLE)),
            is_toppling=self.is_toppling,
            platform_x=self.platform.x,
            platform_width=self.platform.width,
        )

"""
Free Explore Mode

Open play with stones: drag them around and nearby stones form groups.
A pool at the bottom creates new stones (double-tap for a gravity well) and
an optional gravity sandbox lets stones fall, collide and break apart.
"""
import math
import random
import time
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional, Tuple

import pygame

from models import Rectangle
from zen.logging import get_logger
from zen.modes import palette, renderer
from zen.modes.base_mode import BaseMode
from zen.modes.mode_state import FreeExploreState, ModeKind, StoneSnapshot
from zen.modes.motion import clamp_dt
from zen.modes.stone import Stone, StoneKind, radius_for_mass
from games.FreeExplore.config import FreeExploreConfig
from games.FreeExplore.grouping import StoneGroup, compute_groups
from games.FreeExplore import gravity

log = get_logger('free_explore')


class _SimState(Enum):
    """Gravity sandbox states."""
    PAUSED = "paused"
    RUNNING = "running"


class FreeExploreMode(BaseMode):
    """Free Explore - grouping, stone creation and a gravity sandbox.

    Interaction flow:
    1. Drag stones; after every release the proximity groups are rebuilt
    2. Tap the pool to create a stone (double-tap: gravity well)
    3. Start the sandbox: wells pull stones, stones collide, labelled
       stones hit hard enough break into pieces
    """

    MODE_ID = ModeKind.FREE_EXPLORE.value
    NAME = "Free Explore"
    DESCRIPTION = "Gather stones into groups, make new ones, and play with gravity."
    VERSION = "1.0.0"
    HINTS = [
        "Try moving stones close together",
        "Can you make a group of three?",
        "What happens if you make two groups?",
        "Tap the pool at the bottom to make a new stone",
        "Double-tap the pool for something heavier",
        "Press start and watch the stones drift",
    ]

    CONFIG_CLASS = FreeExploreConfig

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        config: Optional[FreeExploreConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        """Initialize Free Explore.

        Args:
            clock: Monotonic time source used for double-tap and throw timing
            rng: Random source (seeded in tests)
        """
        super().__init__(width, height, config)
        self._clock = clock
        self._rng = rng or random.Random()

        self.groups: List[StoneGroup] = []
        self.central_well: Optional[gravity.CentralWell] = None
        self._sim_state = _SimState.PAUSED

        self._last_tap: Optional[Tuple[float, float, float]] = None
        self._last_tap_stone: Optional[Stone] = None
        self._pointer_history: Deque[Tuple[float, float, float]] = deque(
            maxlen=self.config.throw_samples
        )

        # Countdown fields for transient visuals
        self._button_flash = {'toggle': 0.0, 'reset': 0.0}
        self._pool_used = False
        self._pool_label_alpha = 1.0

    # =========================================================================
    # Layout
    # =========================================================================

    @property
    def pool_rect(self) -> Rectangle:
        cfg = self.config
        return Rectangle(
            x=cfg.pool_padding,
            y=self.height - cfg.pool_height - cfg.pool_padding,
            width=self.width - cfg.pool_padding * 2,
            height=cfg.pool_height,
        )

    @property
    def toggle_button(self) -> Rectangle:
        return Rectangle(x=self.width - 220, y=20, width=100, height=36)

    @property
    def reset_button(self) -> Rectangle:
        return Rectangle(x=self.width - 110, y=20, width=90, height=36)

    @property
    def is_running(self) -> bool:
        return self._sim_state == _SimState.RUNNING

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _setup(self) -> None:
        cx, cy = self.center
        cfg = self.config
        self.central_well = gravity.CentralWell(
            x=cx, y=cy,
            mass=cfg.central_well_mass,
            radius=cfg.central_well_radius,
            strength=cfg.gravitational_constant,
        )
        self._sim_state = _SimState.PAUSED
        self._pool_used = False
        self._pool_label_alpha = 1.0

        masses = cfg.initial_masses
        for i, mass in enumerate(masses):
            angle = (i / len(masses)) * math.pi * 2
            distance = cfg.initial_spread + self._rng.random() * 50
            self.add_stone(self._make_stone(
                cx + math.cos(angle) * distance,
                cy + math.sin(angle) * distance,
                mass,
            ))

        self.update_groups()

    def _teardown(self) -> None:
        self.groups = []
        self._pointer_history.clear()
        self._last_tap = None
        self._last_tap_stone = None
        self._sim_state = _SimState.PAUSED

    def _make_stone(self, x: float, y: float, mass: float, label: Optional[int] = None) -> Stone:
        return Stone(
            x, y,
            mass=mass,
            radius=radius_for_mass(mass, self.config.stone_radius),
            color=self.palette.tone_for_mass(mass),
            label=label,
        )

    def _make_gravity_well(self, x: float, y: float) -> Stone:
        cfg = self.config
        well = Stone(
            x, y,
            mass=cfg.well_mass,
            radius=cfg.stone_radius * cfg.well_radius_factor,
            color=palette.GRAVITY_WELL,
            kind=StoneKind.GRAVITY_WELL,
        )
        well.gravitational_radius = well.radius * cfg.well_reach_factor
        well.gravitational_strength = cfg.well_strength
        return well

    def spawn_stone(self, x: float, y: float) -> Stone:
        """Create a regular stone with random mass (and maybe a label)."""
        cfg = self.config
        mass = self._rng.uniform(cfg.min_spawn_mass, cfg.max_spawn_mass)
        label = None
        if self._rng.random() < cfg.label_chance:
            label = self._rng.randint(2, 5)
        stone = self.add_stone(self._make_stone(x, y, mass, label))
        self._pool_used = True
        log.debug(f"Spawned stone {stone.id} mass={mass:.2f} label={label}")
        return stone

    def spawn_gravity_well(self, x: float, y: float) -> Stone:
        well = self.add_stone(self._make_gravity_well(x, y))
        self._pool_used = True
        log.debug(f"Spawned gravity well {well.id}")
        return well

    def update_groups(self) -> List[StoneGroup]:
        self.groups = compute_groups(self.stones, self.config.group_threshold)
        return self.groups

    # =========================================================================
    # Gravity sandbox
    # =========================================================================

    def toggle_simulation(self) -> bool:
        """Start or pause the sandbox. Pausing freezes every stone.

        Returns:
            True if the sandbox is now running
        """
        if self._sim_state == _SimState.PAUSED:
            self._sim_state = _SimState.RUNNING
        else:
            self._sim_state = _SimState.PAUSED
            for stone in self.stones:
                stone.stop()
        log.info(f"Gravity sandbox {self._sim_state.value}")
        return self.is_running

    def reset_simulation(self) -> None:
        """Pause, stop everything and lay the stones out on a ring again."""
        self._sim_state = _SimState.PAUSED
        cx, cy = self.center
        count = len(self.stones)
        for i, stone in enumerate(self.stones):
            stone.stop()
            angle = (i / count) * math.pi * 2
            distance = self.config.initial_spread + self._rng.random() * 50
            stone.set_position(cx + math.cos(angle) * distance, cy + math.sin(angle) * distance)
        self.update_groups()
        log.info("Gravity sandbox reset")

    def _step_physics(self, dt: float) -> None:
        cfg = self.config
        well = self.central_well
        wells = [s for s in self.stones if s.is_gravity_well and not s.is_dragging]

        for stone in self.stones:
            if stone.is_dragging or stone.is_gravity_well:
                continue
            if well is not None:
                gravity.attract(stone, well.x, well.y, well.strength * well.mass, dt,
                                min_distance=well.radius)
            for source in wells:
                gravity.attract(stone, source.x, source.y,
                                source.gravitational_strength * source.mass, dt,
                                min_distance=source.radius,
                                max_distance=source.gravitational_radius)

        for stone in self.stones:
            if stone.is_dragging:
                continue
            stone.update(dt)
            stone.vx *= cfg.damping
            stone.vy *= cfg.damping
            gravity.wrap_position(stone, self.width, self.height)

        self._process_collisions()
        self._process_absorptions()

    def _process_collisions(self) -> None:
        cfg = self.config
        broken = set()
        movers = [s for s in self.stones if not s.is_dragging and not s.is_gravity_well]

        for i, a in enumerate(movers):
            for b in movers[i + 1:]:
                if a.id in broken or b.id in broken:
                    continue
                if not gravity.overlapping(a, b):
                    continue

                if gravity.relative_speed(a, b) > cfg.break_speed:
                    shattered = [s for s in (a, b) if gravity.is_breakable(s)]
                    if shattered:
                        for stone in shattered:
                            self._break(stone)
                            broken.add(stone.id)
                        continue

                gravity.resolve_collision(a, b)

    def _break(self, stone: Stone) -> List[Stone]:
        pieces = gravity.break_stone(stone, self.config.explosion_speed)
        self.remove_stone(stone)
        for piece in pieces:
            self.add_stone(piece)
        log.debug(f"Stone {stone.id} broke into {len(pieces)} pieces")
        return pieces

    def _process_absorptions(self) -> None:
        cfg = self.config
        absorbed = []
        for well in self.stones:
            if not well.is_gravity_well:
                continue
            for stone in self.stones:
                if stone.is_gravity_well or stone.is_dragging or stone in absorbed:
                    continue
                if gravity.can_absorb(well, stone):
                    gravity.absorb(well, stone, cfg.well_growth, cfg.well_max_radius,
                                   cfg.well_reach_factor)
                    absorbed.append(stone)
                    log.debug(f"Well {well.id} absorbed stone {stone.id} (mass now {well.mass:.1f})")
        for stone in absorbed:
            self.remove_stone(stone)

    # =========================================================================
    # Frame
    # =========================================================================

    def update(self, dt: float) -> None:
        dt = clamp_dt(dt, self.config.max_dt)

        for key in self._button_flash:
            self._button_flash[key] = max(0.0, self._button_flash[key] - dt)
        if self._pool_used and self._pool_label_alpha > 0:
            self._pool_label_alpha = max(0.0, self._pool_label_alpha - dt * 0.5)

        if self.is_running:
            self._step_physics(dt)
        else:
            super().update(dt)

    def render(self, surface: pygame.Surface) -> None:
        renderer.draw_background(surface, self.config.background_color, self.config.show_texture)

        if self.central_well is not None:
            renderer.draw_gravity_well(surface, self.central_well.x, self.central_well.y,
                                       self.central_well.radius, self.central_well.radius * 3)

        self._render_pool(surface)

        for group in self.groups:
            renderer.draw_group_halo(surface, group.stones)

        self._render_stones(surface)

        renderer.draw_button(surface, self.toggle_button, "Pause" if self.is_running else "Start",
                             active=self._button_flash['toggle'] > 0)
        renderer.draw_button(surface, self.reset_button, "Reset",
                             active=self._button_flash['reset'] > 0)

    def _render_pool(self, surface: pygame.Surface) -> None:
        pool = self.pool_rect
        renderer.draw_panel(surface, pool, color=palette.STONE_HIGHLIGHT, alpha=90)
        if self._pool_label_alpha > 0.01:
            renderer.draw_text(surface, "tap: stone  |  double-tap: gravity well",
                               (pool.center.x, pool.center.y), size=22,
                               alpha=int(255 * 0.6 * self._pool_label_alpha))

    # =========================================================================
    # Pointer hooks
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> Optional[Stone]:
        if self.toggle_button.contains(x, y):
            self._button_flash['toggle'] = self.config.button_flash
            self.toggle_simulation()
            return None
        if self.reset_button.contains(x, y):
            self._button_flash['reset'] = self.config.button_flash
            self.reset_simulation()
            return None

        # A double-tap lands on the stone the first tap created, so it is
        # checked before the hit test
        in_pool = self.pool_rect.contains(x, y)
        if in_pool and self._is_double_tap(x, y):
            stone = self._convert_to_well(x, y)
        else:
            stone = self.find_stone_at(x, y)
            if stone is None and in_pool:
                stone = self.spawn_stone(x, y)
                self._last_tap = (x, y, self._clock())
                self._last_tap_stone = stone
        if stone is None or not stone.start_drag():
            return None

        stone.stop()
        self.move_stone_to_top(stone)
        self._pointer_history.clear()
        self._pointer_history.append((x, y, self._clock()))
        return stone

    def _is_double_tap(self, x: float, y: float) -> bool:
        if self._last_tap is None:
            return False
        tap_x, tap_y, tap_time = self._last_tap
        return (self._clock() - tap_time <= self.config.double_tap_time
                and math.hypot(x - tap_x, y - tap_y) <= self.config.double_tap_distance)

    def _convert_to_well(self, x: float, y: float) -> Stone:
        """Replace the first tap's stone with a gravity well."""
        previous = self._last_tap_stone
        if previous is not None and not previous.is_dragging:
            self.remove_stone(previous)
        self._last_tap = None
        self._last_tap_stone = None
        return self.spawn_gravity_well(x, y)

    def on_pointer_move(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is None:
            return
        self._pointer_history.append((x, y, self._clock()))
        follow = self.drag_follow(dragged.mass)
        dragged.set_position(
            dragged.x + (x - dragged.x) * follow,
            dragged.y + (y - dragged.y) * follow,
        )

    @staticmethod
    def drag_follow(mass: float) -> float:
        """Fraction of the way to the pointer a dragged stone moves per event."""
        if mass < 1.0:
            return 1.0
        if mass <= 2.0:
            return 0.7
        return 0.3 + (1.0 / mass) * 0.2

    def on_pointer_up(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is not None:
            if self.is_running:
                vx, vy = self.throw_velocity()
                resistance = 1.0 / math.sqrt(dragged.mass)
                dragged.vx = vx * resistance
                dragged.vy = vy * resistance
            else:
                dragged.stop()
            dragged.stop_drag()
        self._pointer_history.clear()
        self.update_groups()

    def throw_velocity(self) -> Tuple[float, float]:
        """Average pointer velocity over the recorded history."""
        history = list(self._pointer_history)
        if len(history) < 2:
            return (0.0, 0.0)

        total_vx = total_vy = 0.0
        samples = 0
        for (x0, y0, t0), (x1, y1, t1) in zip(history, history[1:]):
            elapsed = t1 - t0
            if elapsed <= 0:
                continue
            total_vx += (x1 - x0) / elapsed
            total_vy += (y1 - y0) / elapsed
            samples += 1

        if samples == 0:
            return (0.0, 0.0)
        return (total_vx / samples, total_vy / samples)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_state(self) -> FreeExploreState:
        return FreeExploreState(
            stones=tuple(StoneSnapshot.of(s) for s in self.stones if not s.is_gravity_well),
            groups=tuple(tuple(StoneSnapshot.of(s) for s in g.stones) for g in self.groups),
            running=self.is_running,
        )

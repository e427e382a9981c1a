"""
Balance Scale Mode

Stones dragged from the tray onto two pans tip a beam by the difference
in mass. In guess mode a puzzle is posed with the beam held level and the
child predicts which side is heavier before the beam is released.
"""
import math
import random
from typing import Dict, List, Optional, Tuple, Union

import pygame

from models import InitialConfig, Rectangle
from zen.logging import get_logger
from zen.modes import palette, renderer
from zen.modes.base_mode import BaseMode
from zen.modes.mode_state import BalanceState, ModeKind, StoneSnapshot
from zen.modes.motion import clamp_dt
from zen.modes.stone import Stone
from games.BalanceScale.config import BalanceScaleConfig
from games.BalanceScale.puzzle import Answer, GuessState, Puzzle, generate_puzzle
from games.BalanceScale import scale

log = get_logger('balance_scale')


class BalanceScaleMode(BaseMode):
    """Balance Scale - equality and weight comparison.

    Play mode: drag stones between the tray and the pans freely.
    Guess mode: IDLE -> WAITING (puzzle posed) -> REVEALED (feedback) -> IDLE,
    with a new puzzle posed each time the feedback runs out.
    """

    MODE_ID = ModeKind.BALANCE_SCALE.value
    NAME = "Balance"
    DESCRIPTION = "Put stones on the scale and find out which side is heavier."
    VERSION = "1.0.0"
    HINTS = [
        "Put a stone on each side",
        "Can you make both sides the same?",
        "Which side is heavier?",
        "Try two small stones against one big stone",
    ]

    CONFIG_CLASS = BalanceScaleConfig

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        config: Optional[BalanceScaleConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(width, height, config)
        self._rng = rng or random.Random()

        self.beam = scale.Beam(width=self.config.beam_width)
        self.left_pan = scale.Pan('left')
        self.right_pan = scale.Pan('right')
        self.tray_slots: Dict[int, Tuple[float, float]] = {}
        self.is_balanced = False

        # Guess game
        self.guess_mode = False
        self.difficulty = 1
        self.guess_state = GuessState.IDLE
        self.puzzle: Optional[Puzzle] = None
        self.last_guess: Optional[Answer] = None
        self.last_correct: Optional[bool] = None
        self.correct = 0
        self.attempts = 0

        # Countdown fields
        self._feedback_remaining = 0.0
        self._balance_glow = 0.0

    # =========================================================================
    # Layout
    # =========================================================================

    @property
    def fulcrum(self) -> Tuple[float, float]:
        cx, cy = self.center
        return (cx, cy + self.config.fulcrum_offset)

    @property
    def pans(self) -> Tuple[scale.Pan, scale.Pan]:
        return (self.left_pan, self.right_pan)

    def guess_buttons(self) -> Dict[Answer, Rectangle]:
        """Three answer buttons along the bottom edge."""
        width, height, gap = 150, 44, 20
        total = width * 3 + gap * 2
        x0 = (self.width - total) / 2
        y = self.height - height - 30
        order = (Answer.LEFT, Answer.BALANCED, Answer.RIGHT)
        return {
            answer: Rectangle(x=x0 + i * (width + gap), y=y, width=width, height=height)
            for i, answer in enumerate(order)
        }

    def _place_beam(self) -> None:
        fx, fy = self.fulcrum
        self.beam.x = fx
        self.beam.y = fy - self.config.fulcrum_size
        self._update_pans()

    def _update_pans(self) -> None:
        (lx, ly), (rx, ry) = scale.pan_positions(self.beam)
        self.left_pan.x, self.left_pan.y = lx, ly
        self.right_pan.x, self.right_pan.y = rx, ry

    def _tray_positions(self, count: int) -> List[Tuple[float, float]]:
        cx, _ = self.center
        tray_width = self.width * self.config.tray_width_fraction
        if count == 1:
            return [(cx, self.config.tray_y)]
        start = cx - tray_width / 2
        spacing = tray_width / (count - 1) if count > 1 else 0
        return [(start + i * spacing, self.config.tray_y) for i in range(count)]

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _setup(self) -> None:
        self.beam.angle = 0.0
        self.beam.target_angle = 0.0
        self.beam.frozen = False
        self._place_beam()
        self._build_tray(self.config.tray_masses)

    def _teardown(self) -> None:
        self.left_pan.stones.clear()
        self.right_pan.stones.clear()
        self.tray_slots.clear()
        self.is_balanced = False
        self.guess_mode = False
        self.guess_state = GuessState.IDLE
        self.puzzle = None
        self._feedback_remaining = 0.0
        self._balance_glow = 0.0

    def _make_stone(self, x: float, y: float, mass: float, label: Optional[int] = None) -> Stone:
        return Stone(
            x, y,
            mass=mass,
            radius=self.config.stone_radius * (0.7 + mass * 0.2),
            color=self.palette.tone_for_mass(mass),
            label=label,
        )

    def _clear_scene(self) -> None:
        self.stones = []
        self.left_pan.stones.clear()
        self.right_pan.stones.clear()
        self.tray_slots.clear()

    def _build_tray(self, masses: List[float],
                    positions: Optional[List[Tuple[float, float]]] = None) -> None:
        self._clear_scene()
        positions = positions or self._tray_positions(len(masses))
        for mass, (x, y) in zip(masses, positions):
            stone = self.add_stone(self._make_stone(x, y, mass))
            self.tray_slots[stone.id] = (x, y)

    def apply_configuration(self, initial_config: InitialConfig) -> bool:
        """Replace the tray with the configured stones (offsets from centre)."""
        if not initial_config.stones:
            return False
        cx, cy = self.center
        self.beam.angle = self.beam.target_angle = 0.0
        self._build_tray(
            [spec.mass for spec in initial_config.stones],
            [(cx + spec.offset_x, cy + spec.offset_y) for spec in initial_config.stones],
        )
        for stone, spec in zip(self.stones, initial_config.stones):
            stone.label = spec.label
        log.info(f"Configured tray with {len(self.stones)} stones")
        return True

    # =========================================================================
    # Pans
    # =========================================================================

    def pan_of(self, stone: Stone) -> Optional[scale.Pan]:
        for pan in self.pans:
            if pan.holds(stone):
                return pan
        return None

    def place_on_pan(self, stone: Stone, side: str) -> None:
        """Put a stone on a pan, taking it off the other one."""
        target = self.left_pan if side == 'left' else self.right_pan
        for pan in self.pans:
            if pan is not target:
                pan.discard(stone)
        target.add(stone)
        self._arrange_pan(target)

    def return_to_tray(self, stone: Stone) -> None:
        for pan in self.pans:
            if pan.discard(stone):
                self._arrange_pan(pan)
        slot = self.tray_slots.get(stone.id)
        if slot is not None:
            stone.set_target(*slot)

    def _arrange_pan(self, pan: scale.Pan) -> None:
        for stone, spot in zip(pan.stones, scale.pan_layout(pan, self.config.pan_lift)):
            if not stone.is_dragging:
                stone.set_target(*spot)

    def tray_stones(self) -> List[Stone]:
        return [s for s in self.stones if self.pan_of(s) is None]

    def target_angle(self) -> float:
        cfg = self.config
        return scale.compute_target_angle(
            [s.mass for s in self.left_pan.stones],
            [s.mass for s in self.right_pan.stones],
            self.beam.half_width,
            cfg.max_tilt,
            cfg.torque_normalizer,
        )

    def _check_balance(self) -> bool:
        has_stones = bool(self.left_pan.stones or self.right_pan.stones)
        return (not self.beam.frozen
                and has_stones
                and abs(self.beam.angle) < self.config.balance_epsilon)

    # =========================================================================
    # Guess game
    # =========================================================================

    def start_guess_mode(self, difficulty: int = 1) -> Puzzle:
        self.guess_mode = True
        self.difficulty = max(1, min(3, difficulty))
        self.correct = 0
        self.attempts = 0
        log.info(f"Guess mode started (difficulty {self.difficulty})")
        return self.new_puzzle()

    def new_puzzle(self) -> Puzzle:
        """Pose a fresh puzzle: stones on the pans, beam held level, locked."""
        puzzle = generate_puzzle(self.difficulty, self._rng)
        masses = list(puzzle.left) + list(puzzle.right)
        self._build_tray([float(m) for m in masses])

        self.beam.frozen = True
        self.beam.angle = self.beam.target_angle = 0.0
        self._update_pans()

        stones = list(self.stones)
        for stone in stones[:len(puzzle.left)]:
            self.left_pan.add(stone)
        for stone in stones[len(puzzle.left):]:
            self.right_pan.add(stone)
        for pan in self.pans:
            self._arrange_pan(pan)
            for stone in pan.stones:
                stone.is_locked = True
                stone.set_position(stone.target_x, stone.target_y)

        self.puzzle = puzzle
        self.last_guess = None
        self.last_correct = None
        self.guess_state = GuessState.WAITING
        log.debug(f"Puzzle posed: left={puzzle.left} right={puzzle.right} answer={puzzle.answer.value}")
        return puzzle

    def submit_guess(self, side: Union[str, Answer]) -> Optional[bool]:
        """Answer the current puzzle.

        Returns:
            Whether the guess was right, or None if no puzzle is waiting
        """
        if self.guess_state != GuessState.WAITING or self.puzzle is None:
            return None
        guess = Answer(side)
        is_correct = guess == self.puzzle.answer

        self.attempts += 1
        if is_correct:
            self.correct += 1
        self.last_guess = guess
        self.last_correct = is_correct

        self.beam.frozen = False
        for stone in self.stones:
            stone.is_locked = False
        self.guess_state = GuessState.REVEALED
        self._feedback_remaining = self.config.feedback_duration
        log.info(f"Guess {guess.value}: {'correct' if is_correct else 'wrong'} "
                 f"({self.correct}/{self.attempts})")
        return is_correct

    def set_play_mode(self) -> None:
        """Leave guess mode and restore the free-play tray."""
        self.guess_mode = False
        self.guess_state = GuessState.IDLE
        self.puzzle = None
        self._feedback_remaining = 0.0
        self.beam.frozen = False
        self.beam.angle = self.beam.target_angle = 0.0
        self._build_tray(self.config.tray_masses)
        log.info("Play mode")

    def _finish_feedback(self) -> None:
        self.guess_state = GuessState.IDLE
        if self.guess_mode:
            self.new_puzzle()

    # =========================================================================
    # Frame
    # =========================================================================

    def update(self, dt: float) -> None:
        dt = clamp_dt(dt, self.config.max_dt)

        if self.beam.frozen:
            self.beam.angle = self.beam.target_angle = 0.0
        else:
            self.beam.target_angle = self.target_angle()
            self.beam.angle = scale.ease_angle(self.beam.angle, self.beam.target_angle,
                                               self.config.tilt_speed, dt)

        self._update_pans()
        for pan in self.pans:
            self._arrange_pan(pan)

        self.is_balanced = self._check_balance()
        self._balance_glow = self._balance_glow + dt if self.is_balanced else 0.0

        if self.guess_state == GuessState.REVEALED:
            self._feedback_remaining -= dt
            if self._feedback_remaining <= 0:
                self._feedback_remaining = 0.0
                self._finish_feedback()

        super().update(dt)

    def render(self, surface: pygame.Surface) -> None:
        cfg = self.config
        renderer.draw_background(surface, cfg.background_color, cfg.show_texture)
        cx, _ = self.center

        if not self.guess_mode:
            renderer.draw_text(surface, "drag stones onto the pans", (cx, cfg.tray_y + 50),
                               size=20, alpha=90)

        fx, fy = self.fulcrum
        size = cfg.fulcrum_size
        if self.is_balanced:
            pulse = 0.5 + 0.5 * math.sin(self._balance_glow * 3)
            glow = pygame.Surface((int(size * 4), int(size * 4)), pygame.SRCALPHA)
            pygame.draw.circle(glow, (180, 165, 140, int(80 * pulse)),
                               (int(size * 2), int(size * 2)), int(size * 1.5 + pulse * 10))
            surface.blit(glow, (fx - size * 2, fy - size * 2.5))
        pygame.draw.polygon(surface, palette.WOOD_DARK, [
            (fx, fy - size), (fx - size * 0.7, fy + 5), (fx + size * 0.7, fy + 5)
        ])

        pygame.draw.line(surface, palette.WOOD,
                         (int(self.left_pan.x), int(self.left_pan.y)),
                         (int(self.right_pan.x), int(self.right_pan.y)), 6)
        for pan in self.pans:
            pygame.draw.circle(surface, palette.lerp_color(cfg.background_color, palette.WOOD, 0.2),
                               (int(pan.x), int(pan.y)), int(cfg.pan_radius))
            pygame.draw.circle(surface, palette.lerp_color(cfg.background_color, palette.WOOD, 0.5),
                               (int(pan.x), int(pan.y)), int(cfg.pan_radius), 2)

        hide_totals = self.guess_state == GuessState.WAITING
        if not hide_totals:
            for stone in self.tray_stones():
                renderer.draw_text(surface, f"{stone.mass:g}", (stone.x, stone.y + stone.radius + 15),
                                   size=20, alpha=150)

        self._render_stones(surface)

        if not hide_totals:
            for pan in self.pans:
                if pan.stones:
                    renderer.draw_text(surface, f"{pan.total_mass:g}",
                                       (pan.x, pan.y + cfg.pan_radius + 25), size=30)

        if self.guess_state == GuessState.WAITING:
            renderer.draw_text(surface, "Which side is heavier?", (cx, 60), size=36)
            for answer, rect in self.guess_buttons().items():
                renderer.draw_button(surface, rect, answer.value)
        elif self.guess_state == GuessState.REVEALED and self.puzzle is not None:
            message = "Yes!" if self.last_correct else f"It was {self.puzzle.answer.value}"
            renderer.draw_text(surface, message, (cx, 60), size=40)

        if self.guess_mode:
            renderer.draw_text(surface, f"{self.correct} / {self.attempts}",
                               (self.width - 80, 30), size=28, alpha=160)

    # =========================================================================
    # Pointer hooks
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> Optional[Stone]:
        if self.guess_state == GuessState.WAITING:
            for answer, rect in self.guess_buttons().items():
                if rect.contains(x, y):
                    self.submit_guess(answer)
                    return None

        stone = super().on_pointer_down(x, y)
        if stone is not None:
            for pan in self.pans:
                if pan.discard(stone):
                    self._arrange_pan(pan)
        return stone

    def on_pointer_up(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is None:
            return
        dragged.stop_drag()

        reach = self.config.pan_radius + self.config.pan_snap_margin
        for pan in self.pans:
            if pan.accepts(x, y, reach):
                self.place_on_pan(dragged, pan.side)
                log.debug(f"Stone {dragged.id} placed on {pan.side} pan")
                return
        self.return_to_tray(dragged)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_state(self) -> BalanceState:
        return BalanceState(
            left=tuple(StoneSnapshot.of(s) for s in self.left_pan.stones),
            right=tuple(StoneSnapshot.of(s) for s in self.right_pan.stones),
            tray=tuple(StoneSnapshot.of(s) for s in self.tray_stones()),
            is_balanced=self.is_balanced,
            angle=self.beam.angle,
        )

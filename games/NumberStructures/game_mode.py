"""
Number Structures Mode

Stones laid out in dice- and domino-like patterns become numbers. Loose
stones arranged close to a canonical pattern are recognised and snapped
into place; pushing two structures together adds them up, and pulling a
stone out of one takes one away.
"""
import itertools
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import pygame

from models import InitialConfig
from zen.logging import get_logger
from zen.modes import palette, renderer
from zen.modes.base_mode import BaseMode
from zen.modes.mode_state import ModeKind, StoneSnapshot, StructureSnapshot, StructuresState
from zen.modes.motion import advance_stones, centroid, clamp_dt, cluster_by_proximity
from zen.modes.stone import Stone
from games.NumberStructures.config import NumberStructuresConfig
from games.NumberStructures import patterns
from games.NumberStructures.structure import Structure

log = get_logger('number_structures')


class GestureKind(Enum):
    """What a press on a structure member turned into."""
    UNDECIDED = "undecided"
    EXTRACT = "extract"
    WHOLE = "whole"


@dataclass
class _Gesture:
    stone: Stone
    structure: Structure
    press_x: float
    press_y: float
    press_time: float
    last_x: float
    last_y: float
    kind: GestureKind = GestureKind.UNDECIDED


class NumberStructuresMode(BaseMode):
    """Number Structures - composing and decomposing numbers 1 to 20.

    Interaction flow:
    1. Arrange loose stones; on release, clusters matching a pattern become
       structures and snap onto the exact pattern
    2. Drag a structure by a quick press-and-move; it moves as one piece
    3. Release two structures near each other to merge them (sum up to 20)
    4. Press, hold briefly, then move to pull a single stone out
    """

    MODE_ID = ModeKind.NUMBER_STRUCTURES.value
    NAME = "Number Structures"
    DESCRIPTION = "Build numbers from stone patterns, then combine and split them."
    VERSION = "1.0.0"
    HINTS = [
        "Drag one structure next to the other",
        "What do 3 and 5 make together?",
        "Hold a stone for a moment, then pull it away",
        "Arrange loose stones like the dots on a die",
    ]

    CONFIG_CLASS = NumberStructuresConfig

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        config: Optional[NumberStructuresConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize Number Structures.

        Args:
            clock: Monotonic time source used to tell extraction from a whole drag
        """
        super().__init__(width, height, config)
        self._clock = clock
        self.structures: List[Structure] = []
        self._structure_ids = itertools.count(1)
        self._gesture: Optional[_Gesture] = None
        self.merge_count = 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _setup(self) -> None:
        cfg = self.config
        cx, cy = self.center
        self.structures = []
        self._gesture = None
        self.create_structure(cfg.initial_left_value, cx - cfg.initial_offset, cy)
        self.create_structure(cfg.initial_right_value, cx + cfg.initial_offset, cy)

    def _teardown(self) -> None:
        self.structures = []
        self._gesture = None

    def _make_stone(self, x: float, y: float, mass: float = 1.0,
                    label: Optional[int] = None) -> Stone:
        return Stone(x, y, mass=mass, radius=self.config.structure_stone_radius,
                     color=self.palette.tone_for_mass(mass), label=label)

    def _new_structure(self, value: int) -> Structure:
        structure = Structure(id=next(self._structure_ids), value=value)
        self.structures.append(structure)
        return structure

    def create_structure(self, value: int, cx: float, cy: float) -> Optional[Structure]:
        """Build an intact structure with fresh stones centred on (cx, cy)."""
        slots = patterns.slot_positions(value, cx, cy, self.config.spacing)
        if not slots:
            log.warning(f"No pattern for value {value}")
            return None
        structure = self._new_structure(value)
        structure.stones = [self.add_stone(self._make_stone(x, y)) for x, y in slots]
        structure.tag()
        structure.center = (cx, cy)
        return structure

    def apply_configuration(self, initial_config: InitialConfig) -> bool:
        """Rebuild from structure and loose-stone offsets around the screen centre."""
        for stone in self.stones:
            stone.stop_drag()
        self.stones = []
        self._teardown()

        cx, cy = self.center
        for spec in initial_config.structures:
            self.create_structure(spec.value, cx + spec.offset_x, cy + spec.offset_y)
        for spec in initial_config.stones:
            self.add_stone(self._make_stone(cx + spec.offset_x, cy + spec.offset_y,
                                            mass=spec.mass, label=spec.label))
        log.info(f"Configured {len(self.structures)} structures, "
                 f"{len(self.loose_stones())} loose stones")
        return True

    # =========================================================================
    # Structure bookkeeping
    # =========================================================================

    def structure_of(self, stone: Stone) -> Optional[Structure]:
        if stone.structure_id is None:
            return None
        for structure in self.structures:
            if structure.id == stone.structure_id:
                return structure
        return None

    def intact_structures(self) -> List[Structure]:
        return [s for s in self.structures if s.intact and len(s) > 0]

    def loose_stones(self) -> List[Stone]:
        """Stones outside every intact structure."""
        owned = {s.id for structure in self.intact_structures() for s in structure.stones}
        return [s for s in self.stones if s.id not in owned]

    def refresh_structures(self) -> None:
        """Recompute centres and intact flags; drop empty structures."""
        cfg = self.config
        self.structures = [s for s in self.structures if len(s) > 0]
        for structure in self.structures:
            structure.refresh(cfg.recognition_threshold, cfg.spacing)

    def _dissolve(self, structure: Structure) -> None:
        structure.release()
        if structure in self.structures:
            self.structures.remove(structure)

    def _recognize(self, stones: List[Stone]) -> Optional[patterns.PatternMatch]:
        cfg = self.config
        return patterns.recognize_pattern([(s.x, s.y) for s in stones],
                                          cfg.recognition_threshold,
                                          cfg.average_error_fraction,
                                          cfg.spacing)

    def promote_loose(self) -> List[Structure]:
        """Turn recognisable clusters of loose stones into structures.

        Returns:
            Newly created structures
        """
        cfg = self.config
        for structure in [s for s in self.structures if not s.intact]:
            self._dissolve(structure)

        created = []
        for cluster in cluster_by_proximity(self.loose_stones(), cfg.cluster_distance):
            match = self._recognize(cluster)
            if match is None:
                continue
            structure = self._new_structure(match.value)
            structure.adopt(cluster, match)
            structure.snap(cfg.spacing)
            structure.intact = True
            structure.glow = cfg.glow_duration
            created.append(structure)
            log.info(f"Recognised {match.value} (error {match.error:.1f})")
        return created

    def merge_structures(self) -> int:
        """Merge nearby intact structures until no pair qualifies.

        Returns:
            Number of merges performed
        """
        merges = 0
        while self._merge_once():
            merges += 1
        self.merge_count += merges
        return merges

    def _merge_once(self) -> bool:
        cfg = self.config
        candidates = self.intact_structures()
        for i, a in enumerate(candidates):
            for b in candidates[i + 1:]:
                gap = math.hypot(a.center[0] - b.center[0], a.center[1] - b.center[1])
                if gap > cfg.merge_distance:
                    continue
                total = a.value + b.value
                if total > patterns.MAX_VALUE:
                    log.debug(f"Declined merge {a.value} + {b.value} = {total}")
                    continue

                mid_x = (a.center[0] + b.center[0]) / 2
                mid_y = (a.center[1] + b.center[1]) / 2
                for old in (a, b):
                    for stone in old.release():
                        self.remove_stone(stone)
                    self.structures.remove(old)

                merged = self.create_structure(total, mid_x, mid_y)
                merged.glow = cfg.glow_duration
                log.info(f"Merged {a.value} + {b.value} = {total}")
                return True
        return False

    def extract(self, stone: Stone) -> Optional[Structure]:
        """Pull one stone out of its structure.

        The remainder must be recognised again as value - 1, otherwise it
        falls apart into loose stones.

        Returns:
            The remaining structure, or None if nothing intact is left
        """
        structure = self.structure_of(stone)
        if structure is None:
            return None
        old_value = structure.value
        structure.remove(stone)
        remainder = list(structure.stones)

        match = self._recognize(remainder) if remainder else None
        if match is None:
            self._dissolve(structure)
            log.info(f"Took one from {old_value}; the rest fell apart")
            return None

        structure.adopt(remainder, match)
        structure.intact = True
        structure.snap(self.config.spacing)
        structure.glow = self.config.glow_duration
        log.info(f"Took one from {old_value}, {match.value} left")
        return structure

    # =========================================================================
    # Frame
    # =========================================================================

    def update(self, dt: float) -> None:
        dt = clamp_dt(dt, self.config.max_dt)
        advance_stones(self.stones, dt)
        self.refresh_structures()
        for structure in self.structures:
            structure.glow = max(0.0, structure.glow - dt)

    def render(self, surface: pygame.Surface) -> None:
        cfg = self.config
        renderer.draw_background(surface, cfg.background_color, cfg.show_texture)

        faint = palette.lerp_color(cfg.background_color, palette.WOOD, 0.35)
        for cluster in cluster_by_proximity(self.loose_stones(), cfg.cluster_distance):
            center = centroid(cluster)
            for x, y in patterns.slot_positions(len(cluster), center[0], center[1], cfg.spacing):
                pygame.draw.circle(surface, faint, (int(x), int(y)), 4)

        for structure in self.intact_structures():
            self._render_structure(surface, structure)

        self._render_stones(surface)

        for structure in self.intact_structures():
            top = min(s.y - s.radius for s in structure.stones)
            renderer.draw_text(surface, str(structure.value),
                               (structure.center[0], top - 25), size=36, color=palette.WOOD_DARK)

    def _render_structure(self, surface: pygame.Surface, structure: Structure) -> None:
        line = palette.lerp_color(self.config.background_color, palette.WOOD, 0.5)
        for a, b in zip(structure.stones, structure.stones[1:]):
            pygame.draw.line(surface, line, (int(a.x), int(a.y)), (int(b.x), int(b.y)), 2)

        if structure.glow > 0 and self.config.glow_duration > 0:
            strength = structure.glow / self.config.glow_duration
            reach = max(math.hypot(s.x - structure.center[0], s.y - structure.center[1]) + s.radius
                        for s in structure.stones) + 12
            color = palette.lerp_color(self.config.background_color, palette.STONE_HIGHLIGHT, strength)
            pygame.draw.circle(surface, color,
                               (int(structure.center[0]), int(structure.center[1])), int(reach), 3)

    # =========================================================================
    # Pointer hooks
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> Optional[Stone]:
        stone = self.find_stone_at(x, y)
        if stone is None or not stone.start_drag():
            return None
        self.move_stone_to_top(stone)

        structure = self.structure_of(stone)
        if structure is not None and structure.intact:
            # Moves arrive in stone coordinates (the manager removes the grab offset)
            self._gesture = _Gesture(stone, structure, stone.x, stone.y, self._clock(),
                                     stone.x, stone.y)
        else:
            self._gesture = None
        return stone

    def on_pointer_move(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is None:
            return
        gesture = self._gesture
        if gesture is None or gesture.stone is not dragged:
            dragged.set_position(x, y)
            return

        if gesture.kind == GestureKind.UNDECIDED:
            moved = math.hypot(x - gesture.press_x, y - gesture.press_y)
            if moved <= self.config.extract_distance:
                return
            held = self._clock() - gesture.press_time
            if held >= self.config.extract_hold_time:
                gesture.kind = GestureKind.EXTRACT
                self.extract(dragged)
            else:
                gesture.kind = GestureKind.WHOLE

        if gesture.kind == GestureKind.EXTRACT:
            dragged.set_position(x, y)
        else:
            gesture.structure.translate(x - gesture.last_x, y - gesture.last_y)
        gesture.last_x, gesture.last_y = x, y

    def on_pointer_up(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is not None:
            dragged.stop_drag()
        self._gesture = None
        self.refresh_structures()
        self.promote_loose()
        self.merge_structures()

    @property
    def gesture_kind(self) -> Optional[GestureKind]:
        return self._gesture.kind if self._gesture is not None else None

    # =========================================================================
    # Queries
    # =========================================================================

    def get_state(self) -> StructuresState:
        return StructuresState(
            structures=tuple(
                StructureSnapshot(id=s.id, value=s.value, intact=s.intact,
                                  center=s.center, stone_ids=s.stone_ids)
                for s in self.structures if len(s) > 0
            ),
            loose=tuple(StoneSnapshot.of(s) for s in self.loose_stones()),
        )

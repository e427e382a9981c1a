"""
Challenge engine - runs one challenge at a time on top of the mode manager.

Goals are checked after every pointer release. A completed challenge is
recorded in the progress store and a completion banner counts down.
"""
from typing import List, Optional

import pygame

from models import Challenge, ChallengeLibrary
from zen.challenges.evaluator import evaluate_goals
from zen.challenges.progress import ProgressStore
from zen.logging import get_logger
from zen.modes import palette, renderer

log = get_logger('challenge_engine')

BANNER_DURATION = 3.0


class ChallengeEngine:
    """Loads challenges into the manager and watches for completion.

    Usage:
        engine = ChallengeEngine(manager, progress, library)
        engine.load_challenge('struct-001')
        # manager calls check_goals() after each pointer-up
    """

    def __init__(self, manager, progress: ProgressStore, library: ChallengeLibrary,
                 banner_duration: float = BANNER_DURATION):
        self.manager = manager
        self.progress = progress
        self.library = library
        self.banner_duration = banner_duration

        self.active: Optional[Challenge] = None
        self.completed_active = False
        self._banner_remaining = 0.0
        self._banner_title = ""

        manager.add_pointer_up_listener(self._on_pointer_up)

    # =========================================================================
    # Library queries
    # =========================================================================

    @property
    def challenges(self) -> List[Challenge]:
        return list(self.library.challenges)

    def get_challenge(self, challenge_id: str) -> Challenge:
        for challenge in self.library.challenges:
            if challenge.id == challenge_id:
                return challenge
        raise KeyError(f"Unknown challenge: {challenge_id}")

    def challenges_for_mode(self, mode_id: str) -> List[Challenge]:
        return [c for c in self.library.challenges if c.mode == mode_id]

    def is_completed(self, challenge_id: str) -> bool:
        return self.progress.is_completed(challenge_id)

    def progress_percentage(self) -> float:
        """Share of library challenges completed, 0-100."""
        total = len(self.library.challenges)
        if total == 0:
            return 0.0
        done = sum(1 for c in self.library.challenges if self.is_completed(c.id))
        return 100.0 * done / total

    # =========================================================================
    # Running a challenge
    # =========================================================================

    def load_challenge(self, challenge_id: str) -> Challenge:
        """Switch to the challenge's mode and build its starting scene.

        Raises:
            KeyError: Unknown challenge id (or mode id)
        """
        challenge = self.get_challenge(challenge_id)
        mode = self.manager.switch_mode(challenge.mode)

        config = challenge.initial_config
        if config is not None and not config.is_empty:
            if not mode.apply_configuration(config):
                log.warning(f"{mode.NAME} ignored the starting scene of {challenge.id}")

        self.active = challenge
        self.completed_active = False
        log.info(f"Challenge {challenge.id} '{challenge.title}' started")
        return challenge

    def check_goals(self) -> bool:
        """Evaluate the active challenge.

        Returns:
            True only on the call that completes the challenge
        """
        if self.active is None or self.completed_active:
            return False
        mode = self.manager.current_mode
        if mode is None or mode.MODE_ID != self.active.mode:
            return False

        if not evaluate_goals(self.active.goals, mode.get_state()):
            return False

        self.completed_active = True
        new = self.progress.mark_completed(self.active.id)
        self._banner_remaining = self.banner_duration
        self._banner_title = self.active.title
        log.info(f"Challenge {self.active.id} completed{' for the first time' if new else ''}")
        return True

    def _on_pointer_up(self, x: float, y: float) -> None:
        self.check_goals()

    def next_challenge(self) -> Optional[Challenge]:
        """Load the challenge after the active one (or the first not yet done).

        Returns:
            The loaded challenge, or None at the end of the library
        """
        challenges = self.library.challenges
        if self.active is not None:
            ids = [c.id for c in challenges]
            index = ids.index(self.active.id) + 1
            if index >= len(challenges):
                log.info("No more challenges")
                return None
            return self.load_challenge(challenges[index].id)

        for challenge in challenges:
            if not self.is_completed(challenge.id):
                return self.load_challenge(challenge.id)
        return None

    def exit_challenge(self) -> None:
        if self.active is not None:
            log.info(f"Left challenge {self.active.id}")
        self.active = None
        self.completed_active = False

    # =========================================================================
    # Frame
    # =========================================================================

    @property
    def banner_visible(self) -> bool:
        return self._banner_remaining > 0

    def update(self, dt: float) -> None:
        self._banner_remaining = max(0.0, self._banner_remaining - dt)

    def render(self, surface: pygame.Surface) -> None:
        width = surface.get_width()
        if self.active is not None:
            renderer.draw_text(surface, self.active.title, (width / 2, 28), size=28,
                               color=palette.WOOD_DARK)
            if self.active.hint and not self.completed_active:
                renderer.draw_text(surface, self.active.hint, (width / 2, 58), size=20, alpha=150)

        if self.banner_visible:
            alpha = int(255 * min(1.0, self._banner_remaining))
            renderer.draw_text(surface, "Well done", (width / 2, surface.get_height() / 2 - 200),
                               size=48, color=palette.WOOD_DARK, alpha=alpha)
            renderer.draw_text(surface, self._banner_title,
                               (width / 2, surface.get_height() / 2 - 160), size=24, alpha=alpha)

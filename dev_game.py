#!/usr/bin/env python3
"""
Development Launcher

Runs the stone modes in a window with mouse input. Uses the mode registry
for auto-discovery and the challenge library for challenge runs.

Usage:
    # List available modes / challenges
    python dev_game.py --list-modes
    python dev_game.py --list-challenges

    # Play a mode
    python dev_game.py --mode stack-balance

    # Start a challenge (switches to its mode)
    python dev_game.py --challenge struct-004

    # With custom window size and verbose logging
    python dev_game.py --width 1920 --height 1080 --log-level DEBUG
"""

import argparse
import sys

import pygame

from games.registry import get_registry
from zen.challenges import ChallengeEngine, ChallengeLoader, ChallengeLoadError, ProgressStore
from zen.hints import HintSystem
from zen.logging import configure_logging, get_logger
from zen.modes.input.sources.mouse import MouseInputSource
from zen.modes.manager import ModeManager
from zen.modes.mode_state import ModeKind

log = get_logger('dev_game')

# Number keys 1-4 switch mode in this order
MODE_KEYS = {
    pygame.K_1: ModeKind.FREE_EXPLORE.value,
    pygame.K_2: ModeKind.BALANCE_SCALE.value,
    pygame.K_3: ModeKind.STACK_BALANCE.value,
    pygame.K_4: ModeKind.NUMBER_STRUCTURES.value,
}


def build_parser(available_modes) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Zen Stones development launcher',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available modes: {', '.join(available_modes)}

Keys:
  1-4     switch mode
  G       guess game (balance scale)
  SPACE   start/pause gravity (free explore)
  R       reset gravity (free explore)
  N       next challenge
  ESC     quit
        """
    )
    parser.add_argument('--mode', '-m', default=ModeKind.FREE_EXPLORE.value,
                        help='Mode to start in (default: free-explore)')
    parser.add_argument('--challenge', '-c', help='Challenge id to start')
    parser.add_argument('--width', type=int, default=1280, help='Window width (default: 1280)')
    parser.add_argument('--height', type=int, default=720, help='Window height (default: 720)')
    parser.add_argument('--fps', type=int, default=60, help='Frame rate cap (default: 60)')
    parser.add_argument('--list-modes', action='store_true', help='List modes and exit')
    parser.add_argument('--list-challenges', action='store_true', help='List challenges and exit')
    parser.add_argument('--log-level', default='INFO',
                        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
                        help='Default log level (default: INFO)')
    return parser


def list_modes(registry) -> None:
    print("\nAvailable Modes")
    print("=" * 50)
    for mode_id in registry.list_modes():
        info = registry.get_mode_info(mode_id)
        print(f"\n  {mode_id}")
        print(f"    Name: {info.name}")
        print(f"    Description: {info.description}")
    print()


def list_challenges(library, progress) -> None:
    print("\nChallenges")
    print("=" * 50)
    for challenge in library.challenges:
        mark = 'x' if progress.is_completed(challenge.id) else ' '
        print(f"  [{mark}] {challenge.id:<14} {challenge.mode:<18} {challenge.title}")
    print()


def handle_key(key: int, manager: ModeManager, engine: ChallengeEngine) -> None:
    mode = manager.current_mode
    if key in MODE_KEYS:
        engine.exit_challenge()
        manager.switch_mode(MODE_KEYS[key])
    elif key == pygame.K_g and hasattr(mode, 'start_guess_mode'):
        mode.start_guess_mode()
    elif key == pygame.K_SPACE and hasattr(mode, 'toggle_simulation'):
        mode.toggle_simulation()
    elif key == pygame.K_r and hasattr(mode, 'reset_simulation'):
        mode.reset_simulation()
    elif key == pygame.K_n:
        engine.next_challenge()


def main():
    """Main entry point for the development launcher."""
    registry = get_registry()
    available_modes = registry.list_modes()

    args = build_parser(available_modes).parse_args()
    configure_logging(args.log_level)

    if args.list_modes:
        list_modes(registry)
        return 0

    try:
        library = ChallengeLoader().load()
    except ChallengeLoadError as e:
        print(f"ERROR: {e}")
        return 1

    progress = ProgressStore()
    progress.load()

    if args.list_challenges:
        list_challenges(library, progress)
        return 0

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Zen Stones - Development Mode")

    manager = ModeManager(registry, args.width, args.height)
    engine = ChallengeEngine(manager, progress, library)
    hints = HintSystem(registry.hints_by_mode())
    manager.add_mode_switch_listener(hints.set_mode)
    mouse = MouseInputSource()

    try:
        if args.challenge:
            engine.load_challenge(args.challenge)
        else:
            manager.switch_mode(args.mode)
    except KeyError as e:
        print(f"ERROR: {e}")
        pygame.quit()
        return 1

    print("=" * 60)
    print(f"Mode: {manager.current_mode.NAME}  ({args.width}x{args.height})")
    print(f"Progress: {engine.progress_percentage():.0f}% of {len(library.challenges)} challenges")
    print("=" * 60)

    clock = pygame.time.Clock()
    running = True

    while running:
        dt = clock.tick(args.fps) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    hints.record_interaction()
                    handle_key(event.key, manager, engine)
            elif event.type == pygame.WINDOWFOCUSLOST:
                mouse.release()
                manager.blur()
            elif mouse.process_event(event):
                hints.record_interaction()

        manager.handle_input(mouse.poll_events())

        manager.update(dt)
        engine.update(dt)
        hints.update(dt)

        manager.render(screen)
        engine.render(screen)
        hints.render(screen)
        pygame.display.flip()

    manager.shutdown()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Mode Registry - auto-discovery of stone modes.

Modes are discovered by scanning the games/ directory for subdirectories
containing a game_mode.py with a class inheriting from BaseMode. Metadata
is read from the class attributes, so nothing is instantiated until a mode
is actually created.

Usage:
    from games.registry import ModeRegistry

    registry = ModeRegistry()
    available = registry.list_modes()  # ['balance-scale', 'free-explore', ...]

    info = registry.get_mode_info('stack-balance')
    mode = registry.create_mode('stack-balance', width=1280, height=720)
"""

import importlib
import inspect
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Type

from zen.logging import get_logger
from zen.modes.base_mode import BaseMode
from zen.modes.config import ModeConfig

log = get_logger('registry')

GAMES_DIR = Path(__file__).parent


@dataclass
class ModeInfo:
    """Information about a registered mode."""
    mode_id: str
    name: str
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.StackBalance.game_mode'
    has_config: bool = False


class ModeRegistry:
    """
    Registry for auto-discovering and creating stone modes.

    Discovery works by:
    1. Looking for game_mode.py in each directory under games/
    2. Importing it as games.<Dir>.game_mode
    3. Taking the BaseMode subclass defined there
    4. Keying it by its MODE_ID
    """

    def __init__(self, games_dir: Optional[Path] = None):
        self._games_dir = Path(games_dir) if games_dir is not None else GAMES_DIR
        self._modes: Dict[str, ModeInfo] = {}
        self._mode_classes: Dict[str, Type[BaseMode]] = {}
        self._discover_modes()

    def _discover_modes(self) -> None:
        for mode_dir in sorted(self._games_dir.iterdir()):
            if not mode_dir.is_dir():
                continue
            if mode_dir.name.startswith('_') or mode_dir.name.startswith('.'):
                continue
            if (mode_dir / 'game_mode.py').exists():
                self._register_mode(mode_dir)

    def _register_mode(self, mode_dir: Path) -> None:
        module_path = f"games.{mode_dir.name}.game_mode"
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            log.warning(f"Failed to load mode from {mode_dir}: {e}")
            return

        mode_class = self._find_mode_class(module)
        if mode_class is None:
            log.debug(f"No BaseMode subclass in {module_path}")
            return

        mode_id = mode_class.MODE_ID
        if mode_id in self._mode_classes:
            log.warning(f"Duplicate mode id '{mode_id}' in {module_path}, skipped")
            return

        self._mode_classes[mode_id] = mode_class
        self._modes[mode_id] = ModeInfo(
            mode_id=mode_id,
            name=mode_class.NAME,
            description=mode_class.DESCRIPTION,
            version=mode_class.VERSION,
            author=mode_class.AUTHOR,
            module_path=module_path,
            has_config=(mode_dir / 'config.py').exists(),
        )
        log.debug(f"Registered mode '{mode_id}' from {module_path}")

    @staticmethod
    def _find_mode_class(module) -> Optional[Type[BaseMode]]:
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Only classes defined in this module
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseMode) and obj is not BaseMode and not inspect.isabstract(obj):
                return obj
        return None

    def list_modes(self) -> List[str]:
        """Registered mode ids, sorted."""
        return sorted(self._modes.keys())

    def get_mode_info(self, mode_id: str) -> Optional[ModeInfo]:
        return self._modes.get(mode_id)

    def get_mode_class(self, mode_id: str) -> Type[BaseMode]:
        """
        Raises:
            KeyError: Unknown mode id
        """
        if mode_id not in self._mode_classes:
            raise KeyError(f"Unknown mode: {mode_id}. Available: {', '.join(self.list_modes())}")
        return self._mode_classes[mode_id]

    def get_all_modes(self) -> Dict[str, ModeInfo]:
        return self._modes.copy()

    def hints_by_mode(self) -> Dict[str, List[str]]:
        """HINTS of every registered mode class."""
        return {mode_id: list(cls.HINTS) for mode_id, cls in self._mode_classes.items()}

    def create_mode(
        self,
        mode_id: str,
        width: int,
        height: int,
        config: Optional[ModeConfig] = None,
        **kwargs
    ) -> BaseMode:
        """
        Create a (not yet initialised) mode instance.

        Args:
            mode_id: Mode identifier
            width: Screen width
            height: Screen height
            config: Mode config object; None means the mode's defaults
            **kwargs: Extra constructor arguments (clock, rng, ...)

        Raises:
            KeyError: Unknown mode id
        """
        mode_class = self.get_mode_class(mode_id)
        return mode_class(width=width, height=height, config=config, **kwargs)


_registry: Optional[ModeRegistry] = None


def get_registry() -> ModeRegistry:
    """Shared registry instance (discovery runs once)."""
    global _registry
    if _registry is None:
        _registry = ModeRegistry()
    return _registry

"""Completed-challenge persistence: a flat JSON list of ids."""
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from zen.logging import get_logger

log = get_logger('progress')


def default_progress_path() -> Path:
    """ZEN_PROGRESS_FILE if set, otherwise the user data directory."""
    override = os.environ.get('ZEN_PROGRESS_FILE')
    if override:
        return Path(override).expanduser()

    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', Path.home()))
    elif sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support'
    else:
        base = Path(os.environ.get('XDG_DATA_HOME', Path.home() / '.local' / 'share'))
    return base / 'zen' / 'progress.json'


class ProgressStore:
    """Remembers which challenges have been completed.

    Usage:
        store = ProgressStore()
        store.load()
        store.mark_completed('stack-001')
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_progress_path()
        self._completed: List[str] = []

    @property
    def completed(self) -> List[str]:
        return list(self._completed)

    def is_completed(self, challenge_id: str) -> bool:
        return challenge_id in self._completed

    def load(self) -> List[str]:
        """Read the file; a missing or unreadable file means no progress."""
        self._completed = []
        if not self.path.exists():
            return self.completed

        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Ignoring unreadable progress file {self.path}: {e}")
            return self.completed

        if not isinstance(data, list):
            log.warning(f"Ignoring progress file {self.path}: expected a list of ids")
            return self.completed

        for item in data:
            if isinstance(item, str) and item not in self._completed:
                self._completed.append(item)
        log.debug(f"Loaded {len(self._completed)} completed challenges")
        return self.completed

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(self._completed, f, indent=2)

    def mark_completed(self, challenge_id: str) -> bool:
        """Record a completion once.

        Returns:
            True if this is a new completion
        """
        if challenge_id in self._completed:
            return False
        self._completed.append(challenge_id)
        self.save()
        return True

    def reset(self) -> None:
        self._completed = []
        self.save()

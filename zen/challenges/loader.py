"""
Challenge library loading - YAML (or JSON) with Pydantic validation.

Examples:
    >>> loader = ChallengeLoader()
    >>> library = loader.load()
    >>> library.challenges[0].mode
    'free-explore'
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from models import ChallengeLibrary
from zen.logging import get_logger

log = get_logger('challenge_loader')

DEFAULT_LIBRARY_PATH = Path(__file__).parent / 'library.yaml'


class ChallengeLoadError(Exception):
    """Raised when a challenge library file cannot be read or is invalid."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class ChallengeLoader:
    """Loads and validates a challenge library file.

    Attributes:
        path: Library file; ``.json`` is parsed as JSON, anything else as YAML
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DEFAULT_LIBRARY_PATH

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise ChallengeLoadError("library file not found", self.path)

        try:
            with open(self.path, 'r') as f:
                if self.path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ChallengeLoadError(f"failed to parse: {e}", self.path) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ChallengeLoadError("top level must be a mapping with a 'challenges' list", self.path)
        return data

    def load(self) -> ChallengeLibrary:
        """Read and validate the library.

        Raises:
            ChallengeLoadError: Missing file, malformed YAML/JSON, or a
                document that fails validation
        """
        data = self._read()
        try:
            library = ChallengeLibrary(**data)
        except ValidationError as e:
            raise ChallengeLoadError(f"invalid challenge library:\n{e}", self.path) from e

        log.info(f"Loaded {len(library.challenges)} challenges from {self.path.name}")
        return library

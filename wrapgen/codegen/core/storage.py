"""
Storage collaborators: override detection and whole-file writes.
"""

import threading
from pathlib import Path
from typing import Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class OverrideDetector:
    """Answers whether a hand-written file occupies a location.

    Only existence is checked; override content is never read.
    """

    def exists(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()


class StorageWriter:
    """Whole-file writes, creating parent directories as needed."""

    def __init__(self):
        self._lock = threading.Lock()
        self.written: list[Path] = []

    def write(self, path: Union[str, Path], text: str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(text)

        with self._lock:
            self.written.append(path)
        logger.debug("Wrote %s", path)
        return path

    def ensure_file(self, path: Union[str, Path]) -> Path:
        """Create an empty file if missing; existing files are untouched."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            path.touch()
            logger.debug("Created %s", path)
        return path

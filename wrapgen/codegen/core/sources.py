"""
Source unit enumeration.

A source unit is one file of the wrapped library (or a configured
custom class with no library counterpart). Each unit yields a primary
class named after the file.
"""

import fnmatch
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Sequence

from ...logging_config import get_logger
from .naming import class_name_from_unit
from .schema import ConfigStore

logger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class SourceUnit:
    """Opaque unit key (POSIX relative path) plus derived names."""

    path: str
    is_custom: bool = False

    @property
    def class_name(self) -> str:
        return class_name_from_unit(self.path)

    @property
    def directory(self) -> str:
        parent = PurePosixPath(self.path).parent.as_posix()
        return "" if parent == "." else parent

    @property
    def stem_path(self) -> str:
        """Unit path without its file extension."""
        path = PurePosixPath(self.path)
        return path.with_suffix("").as_posix() if path.suffix else path.as_posix()


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """fnmatch where a leading ``**/`` also matches top-level files."""
    for pattern in patterns:
        if fnmatch.fnmatchcase(path, pattern):
            return True
        if pattern.startswith("**/") and fnmatch.fnmatchcase(path, pattern[3:]):
            return True
    return False


def _merge_units(units: List[SourceUnit], custom_classes: Sequence[str]) -> List[SourceUnit]:
    by_path = {unit.path: unit for unit in units}
    for custom in custom_classes:
        path = PurePosixPath(custom.replace("\\", "/")).as_posix()
        by_path[path] = SourceUnit(path, is_custom=True)
    return sorted(by_path.values())


class SourceTreeEnumerator:
    """Walks the wrapped library's source tree."""

    def __init__(
        self,
        source_dir: Path,
        pattern: str = "**/*.js",
        ignore_patterns: Sequence[str] = (),
        custom_classes: Sequence[str] = (),
    ):
        self.source_dir = Path(source_dir)
        self.pattern = pattern
        self.ignore_patterns = list(ignore_patterns)
        self.custom_classes = list(custom_classes)

    def units(self) -> List[SourceUnit]:
        found = []
        for path in self.source_dir.glob(self.pattern):
            if not path.is_file():
                continue
            relative = path.relative_to(self.source_dir).as_posix()
            if matches_any(relative, self.ignore_patterns):
                logger.debug("Ignoring %s", relative)
                continue
            found.append(SourceUnit(relative))

        units = _merge_units(found, self.custom_classes)
        logger.info("Found %d source units in %s", len(units), self.source_dir)
        return units


class ConfigStoreEnumerator:
    """Derives units from the class table when no library tree is given."""

    def __init__(
        self,
        store: ConfigStore,
        extension: str = ".js",
        custom_classes: Sequence[str] = (),
    ):
        self.store = store
        self.extension = extension
        self.custom_classes = list(custom_classes)

    def units(self) -> List[SourceUnit]:
        primaries = []
        for relative_path in self.store.relative_paths():
            path = PurePosixPath(relative_path.replace("\\", "/"))
            unit = SourceUnit(f"{path.as_posix()}{self.extension}")

            # Extra definitions are generated alongside their primary class
            if unit.class_name in self.store:
                primaries.append(unit)
                continue
            logger.warning(
                "No class named after %s, skipping %s",
                unit.path,
                ", ".join(self.store.classes_at(relative_path)),
            )

        return _merge_units(primaries, self.custom_classes)

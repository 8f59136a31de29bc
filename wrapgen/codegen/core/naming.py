"""
Naming utilities for generated artifacts.

Handles class names derived from source units, the generated/override
file naming schemes, and conversion of relative file paths into each
target language's import syntax.
"""

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

PATH_SEPARATORS = re.compile(r"[\\/]")


def split_path(path: str) -> List[str]:
    """Split a path on either separator style."""
    return PATH_SEPARATORS.split(path)


def class_name_from_unit(unit_path: str) -> str:
    """``core/Object3D.js`` -> ``Object3D``; dots become underscores."""
    stem = split_path(unit_path)[-1]
    if "." in stem:
        stem = stem.rsplit(".", 1)[0]
    return stem.replace(".", "_")


def to_python_import_path(relative_path: str) -> str:
    """
    Convert a relative file path to a package-relative import path.

    ``Foo`` -> ``.Foo``, ``../core/Foo`` -> ``..core.Foo``,
    ``..`` -> ``..``, ``.`` -> ``.``

    Args:
        relative_path: Path relative to the importing module's directory,
            without the ``.py`` suffix

    Returns:
        Dotted relative import path
    """
    tokens = split_path(relative_path)
    if not tokens:
        return "."

    result = ""
    first = tokens[0]
    if first == ".":
        tokens = tokens[1:]
    elif first == "..":
        tokens = tokens[1:]
        result = "."

    saw_folder = False
    for token in tokens:
        if token in ("", "."):
            continue
        if token == "..":
            result += "."
        else:
            result += "." + token
            saw_folder = True

    if not saw_folder:
        result += "."

    return result


def to_js_require_path(relative_path: str) -> str:
    """Forward slashes, always starting with ``./`` or ``../``."""
    path = relative_path.replace("\\", "/")
    if not path.startswith("."):
        path = "./" + path
    return path


def relative_to(target: Path, from_dir: Path) -> str:
    """POSIX-style relative path from a directory to a file."""
    return Path(os.path.relpath(target, from_dir)).as_posix()


class ArtifactLayout(ABC):
    """Generated/override file naming for one target language."""

    extension: str = ""

    def __init__(self, root: Path, tag: str = "autogen"):
        self.root = Path(root)
        self.tag = tag

    @abstractmethod
    def generated_filename(self, class_name: str) -> str:
        """File name of the generated artifact for a class."""
        pass

    def override_filename(self, class_name: str) -> str:
        """File name a hand-written override must use."""
        return f"{class_name}{self.extension}"

    @abstractmethod
    def override_for(self, filename: str) -> Optional[str]:
        """
        Override file name matching a generated file name.

        Returns:
            Override file name, or None if ``filename`` is not generated
        """
        pass

    def is_generated(self, filename: str) -> bool:
        return self.override_for(filename) is not None

    @abstractmethod
    def import_path(self, from_dir: Path, target: Path) -> str:
        """Import path of ``target`` as seen from a module in ``from_dir``."""
        pass

    def directory_for(self, relative_path: str) -> Path:
        """Output directory holding artifacts for a table ``relativePath``."""
        parent = os.path.dirname(relative_path.replace("\\", "/"))
        return Path(os.path.normpath(self.root / parent))

    def generated_path(self, directory: Path, class_name: str) -> Path:
        return directory / self.generated_filename(class_name)

    def override_path(self, directory: Path, class_name: str) -> Path:
        return directory / self.override_filename(class_name)

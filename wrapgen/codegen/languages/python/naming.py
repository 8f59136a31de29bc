"""
Python artifact naming.

Generated wrappers are ``<Class>_autogen.py``; a hand-written
``<Class>.py`` beside it takes precedence.
"""

from pathlib import Path
from typing import Optional

from ...core.naming import ArtifactLayout, relative_to, to_python_import_path

PACKAGE_MARKER = "__init__.py"


class PythonLayout(ArtifactLayout):
    """Naming scheme for generated Python modules."""

    extension = ".py"

    @property
    def generated_suffix(self) -> str:
        return f"_{self.tag}{self.extension}"

    def generated_filename(self, class_name: str) -> str:
        return f"{class_name}{self.generated_suffix}"

    def override_for(self, filename: str) -> Optional[str]:
        if not filename.endswith(self.generated_suffix):
            return None
        return filename[: -len(self.generated_suffix)] + self.extension

    def import_path(self, from_dir: Path, target: Path) -> str:
        return to_python_import_path(relative_to(Path(target).with_suffix(""), from_dir))

    def package_path(self, from_dir: Path) -> str:
        """Dotted relative path from a module directory to the package root."""
        return to_python_import_path(relative_to(self.root, from_dir))

    def module_path(self, path: Path) -> str:
        """Package-relative import path of a module under the root."""
        relative = Path(path).relative_to(self.root).with_suffix("").as_posix()
        parent, _, name = relative.rpartition("/")
        name = name.replace(".", "_")
        return to_python_import_path(f"{parent}/{name}" if parent else name)

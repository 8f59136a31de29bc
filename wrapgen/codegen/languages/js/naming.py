"""
JavaScript artifact naming.

Generated wrappers are ``<Class>.autogen.js``; a hand-written
``<Class>.js`` beside it takes precedence.
"""

from pathlib import Path
from typing import Optional

from ...core.naming import ArtifactLayout, relative_to, to_js_require_path


class JsLayout(ArtifactLayout):
    """Naming scheme for generated JavaScript modules."""

    extension = ".js"

    @property
    def generated_suffix(self) -> str:
        return f".{self.tag}{self.extension}"

    def generated_filename(self, class_name: str) -> str:
        return f"{class_name}{self.generated_suffix}"

    def override_for(self, filename: str) -> Optional[str]:
        if not filename.endswith(self.generated_suffix):
            return None
        return filename[: -len(self.generated_suffix)] + self.extension

    def import_path(self, from_dir: Path, target: Path) -> str:
        return to_js_require_path(relative_to(target, from_dir))

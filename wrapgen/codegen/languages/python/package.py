"""
Package registration for the Python tree.

Makes every output directory importable and writes the top-level
``__init__.py`` that pulls every widget module into one namespace.
"""

from pathlib import Path
from typing import List, Sequence, Set

from ....logging_config import get_logger
from ...core.generator import AggregationGenerator
from ...core.sources import SourceUnit, matches_any
from ..js.generator import GENERATOR_NAME
from .naming import PACKAGE_MARKER

logger = get_logger(__name__)

TOP_LEVEL_TEMPLATE = "py_top_level_init.py.j2"


class PackageRegistrationGenerator(AggregationGenerator):
    """Writes package markers and the top-level module registry."""

    def aggregate(self, units: Sequence[SourceUnit]) -> List[Path]:
        written = self.ensure_package_markers(units)
        written.append(self.write_top_level_init())
        return written

    def package_directories(self, units: Sequence[SourceUnit]) -> List[Path]:
        """Every directory below the root that must be a package."""
        root = self.layout.root
        relative_dirs: Set[Path] = {Path(self.config.base_dir_name)}
        for unit in units:
            if unit.directory:
                relative_dirs.add(Path(unit.directory))

        # Parents too, or the subpackages are unreachable
        directories = set()
        for relative in relative_dirs:
            for part in [relative, *relative.parents]:
                if part != Path("."):
                    directories.add(root / part)

        return sorted(directories)

    def ensure_package_markers(self, units: Sequence[SourceUnit]) -> List[Path]:
        markers = []
        for directory in self.package_directories(units):
            markers.append(self.writer.ensure_file(directory / PACKAGE_MARKER))
        return markers

    def list_modules(self) -> List[str]:
        """
        Import paths of every module the top-level package re-exports.

        Returns:
            Sorted package-relative import paths
        """
        root = self.layout.root
        modules = []

        for path in sorted(root.rglob(f"*{self.layout.extension}")):
            if not path.is_file() or path.name == PACKAGE_MARKER:
                continue
            relative = path.relative_to(root).as_posix()
            if matches_any(relative, self.config.py_init_excludes):
                continue

            # The override subclasses the generated class; import only the override
            override = self.layout.override_for(path.name)
            if override is not None and self.detector.exists(path.parent / override):
                logger.info("Python override exists: %s. Skipping...", relative)
                continue

            modules.append(self.layout.module_path(path))

        return modules

    def write_top_level_init(self) -> Path:
        context = {
            "generator_name": GENERATOR_NAME,
            "modules": [{"import_path": module} for module in self.list_modules()],
        }
        output = self.template_engine.render_template(TOP_LEVEL_TEMPLATE, context)
        return self.writer.write(self.layout.root / PACKAGE_MARKER, output)

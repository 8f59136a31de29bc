"""
Directory index generation for the JavaScript tree.

Every directory gets an ``index.js`` that re-exports its modules and
subdirectories. Where a hand-written override sits next to a generated
module only the override is listed; it builds on the generated module
itself.
"""

import os
import re
from pathlib import Path
from typing import List, Sequence

from ....logging_config import get_logger
from ...core.generator import AggregationGenerator
from ...core.sources import SourceUnit
from .generator import GENERATOR_NAME

logger = get_logger(__name__)

INDEX_FILENAME = "index.js"
INDEX_TEMPLATE = "js_index.js.j2"

# Editor and OS droppings
EXCLUDE_PATTERNS = [
    re.compile(r"\.swp$"),
    re.compile(r"\.DS_Store$"),
]


class DirectoryIndexGenerator(AggregationGenerator):
    """Writes one ``index.js`` per directory of the output tree."""

    def aggregate(self, units: Sequence[SourceUnit]) -> List[Path]:
        root = self.layout.root
        if not root.is_dir():
            logger.warning("JavaScript output directory missing: %s", root)
            return []

        logger.info("Writing javascript indices...")
        directories = sorted(path for path in root.rglob("*") if path.is_dir())

        written = [self.write_index(directory, False) for directory in directories]
        written.append(self.write_index(root, True))
        return written

    def write_index(self, directory: Path, top_level: bool) -> Path:
        context = {
            "generator_name": GENERATOR_NAME,
            "top_level": top_level,
            "submodules": self.list_submodules(directory),
        }
        output = self.template_engine.render_template(INDEX_TEMPLATE, context)
        return self.writer.write(directory / INDEX_FILENAME, output)

    def list_submodules(self, directory: Path) -> List[str]:
        """
        Entries of ``directory`` that its index should require.

        Args:
            directory: Directory inside the JavaScript output root

        Returns:
            Sorted ``./name`` require paths
        """
        root = self.layout.root
        relative_dir = directory.relative_to(root)
        in_base_dir = self.config.base_dir_name in relative_dir.parts
        entries = sorted(os.listdir(directory))

        submodules = []
        for name in entries:
            path = directory / name
            relative = (relative_dir / name).as_posix()

            if name == INDEX_FILENAME:
                continue
            if any(pattern.search(name) for pattern in EXCLUDE_PATTERNS):
                continue
            if relative in self.config.js_index_excludes:
                continue

            if path.is_dir():
                submodules.append(f"./{name}")
                continue
            if not name.endswith(self.layout.extension):
                continue

            override = self.layout.override_for(name)
            if override is not None:
                # Base classes are only exported through their hand-written files
                if in_base_dir:
                    continue
                if self.detector.exists(directory / override):
                    logger.debug("override exists for: %s", relative)
                    continue

            submodules.append(f"./{name}")

        return submodules

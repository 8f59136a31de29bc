"""
Dependency inference and import path resolution.

For a resolved class, works out which other artifacts its generated
wrapper has to import and how to spell each import from the file being
generated.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ...logging_config import get_logger
from .errors import InvalidReference
from .naming import ArtifactLayout, class_name_from_unit
from .schema import ConfigStore, ResolvedConfig, normalize_class_name
from .storage import OverrideDetector

logger = get_logger(__name__)

DEFAULT_BASE_TYPE_PATH = "./_base/Widget"


def is_bare_path(descriptor: str) -> bool:
    return "/" in descriptor or "\\" in descriptor


@dataclass(frozen=True)
class ReferenceDescriptor:
    """One artifact a generated file must import."""

    class_name: str
    relative_path: str
    resolved_path: Path
    import_path: str
    is_override: bool
    symbol: str

    @property
    def model_name(self) -> str:
        return f"{self.class_name}Model"

    def as_context(self) -> Dict[str, object]:
        """Template-facing view of the reference."""
        return {
            "class_name": self.class_name,
            "symbol": self.symbol,
            "model_name": self.model_name,
            "relative_path": self.relative_path,
            "import_path": self.import_path,
            "is_override": self.is_override,
        }


class ReferenceResolver:
    """Resolves class references for one target language."""

    def __init__(
        self,
        store: ConfigStore,
        layout: ArtifactLayout,
        detector: Optional[OverrideDetector] = None,
        base_type_path: str = DEFAULT_BASE_TYPE_PATH,
        symbol_aliases: Optional[Dict[str, str]] = None,
    ):
        self.store = store
        self.layout = layout
        self.detector = detector or OverrideDetector()
        self.base_type_path = base_type_path
        self.symbol_aliases = symbol_aliases or {}

    def resolve(
        self, config: ResolvedConfig, generating_file: Path
    ) -> Dict[str, ReferenceDescriptor]:
        """
        Compute every reference of a class's generated wrapper.

        Covers the superclass, explicit dependencies, and classes named
        by the class's own reference-typed properties. Inherited
        properties are covered through the superclass's own wrapper.

        Args:
            config: Resolved class configuration
            generating_file: Output path of the file being generated

        Returns:
            Dict mapping reference key to ReferenceDescriptor

        Raises:
            InvalidReference: If a name is neither a known class nor a path
        """
        from_dir = Path(generating_file).parent
        references: Dict[str, ReferenceDescriptor] = {}

        references[config.super_class] = self.describe(
            config.super_class, from_dir, owner=config.class_name
        )

        for dependency in config.dependencies:
            references[dependency] = self.describe(
                dependency, from_dir, owner=config.class_name
            )

        # A later entry for the same key replaces the earlier one; both
        # describe the same target
        for prop in config.properties.values():
            for target in prop.referenced_classes(self.base_type_path):
                references[target] = self.describe(
                    target, from_dir, owner=config.class_name
                )

        return references

    def describe(
        self, descriptor: str, from_dir: Path, owner: Optional[str] = None
    ) -> ReferenceDescriptor:
        """Resolve a single class name or bare path."""
        if not isinstance(descriptor, str) or not descriptor:
            raise InvalidReference(
                f"{owner}: invalid class descriptor {descriptor!r}", owner
            )

        if descriptor in self.store:
            class_name = normalize_class_name(descriptor)
            relative_path = self.store.get(class_name).relative_path
            if relative_path is None:
                raise InvalidReference(
                    f"{owner}: class {class_name} has no relativePath", owner
                )
        elif descriptor == self.store.root_class:
            class_name = descriptor
            relative_path = self.base_type_path
        elif is_bare_path(descriptor):
            class_name = class_name_from_unit(descriptor)
            relative_path = descriptor
        else:
            raise InvalidReference(f"{owner}: unknown class '{descriptor}'", owner)

        directory = self.layout.directory_for(relative_path)
        override_path = self.layout.override_path(directory, class_name)
        is_override = self.detector.exists(override_path)
        resolved_path = (
            override_path
            if is_override
            else self.layout.generated_path(directory, class_name)
        )

        return ReferenceDescriptor(
            class_name=class_name,
            relative_path=relative_path,
            resolved_path=Path(os.path.normpath(resolved_path)),
            import_path=self.layout.import_path(from_dir, resolved_path),
            is_override=is_override,
            symbol=self.symbol_aliases.get(class_name, class_name),
        )

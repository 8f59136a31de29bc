"""
Inheritance resolution over the class table.

Walks superclass chains iteratively, memoizing every resolved ancestor,
so long or malformed chains never recurse and cycles fail cleanly.
"""

import threading
from typing import Dict, List, Optional

from ...logging_config import get_logger
from .errors import ConfigCycle
from .schema import ClassConfig, ConfigStore, ResolvedConfig, normalize_class_name

logger = get_logger(__name__)


class ConfigResolver:
    """Produces ``ResolvedConfig`` values from a ``ConfigStore``."""

    def __init__(self, store: ConfigStore):
        self.store = store
        self._cache: Dict[str, ResolvedConfig] = {}
        self._lock = threading.Lock()

    def resolve(self, class_name: str) -> ResolvedConfig:
        """
        Resolve a class together with all of its ancestors.

        Args:
            class_name: Name of the class in the table

        Returns:
            ResolvedConfig with inherited properties merged in

        Raises:
            UnknownClass: If the class or one of its ancestors is missing
            ConfigCycle: If the superclass chain loops
        """
        name = normalize_class_name(class_name)
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        chain = self._superclass_chain(name)

        # Fold from the top-most ancestor down to the requested class
        resolved: Optional[ResolvedConfig] = None
        for config in reversed(chain):
            current = self._cache.get(config.class_name)
            if current is None:
                current = self._merge(config, resolved)
                with self._lock:
                    current = self._cache.setdefault(config.class_name, current)
            resolved = current

        return resolved

    def _superclass_chain(self, name: str) -> List[ClassConfig]:
        """Entries from ``name`` up to (not including) the root sentinel."""
        root = self.store.root_class
        chain: List[ClassConfig] = []
        visiting: List[str] = []
        current = name

        while True:
            if current in visiting:
                raise ConfigCycle(visiting + [current])
            visiting.append(current)

            config = self.store.get(current)
            chain.append(config)

            # An already resolved ancestor carries the rest of the chain
            if current in self._cache:
                break

            parent = config.super_class
            if not parent or parent == root:
                break
            current = normalize_class_name(parent)

        return chain

    def _merge(
        self, config: ClassConfig, parent: Optional[ResolvedConfig]
    ) -> ResolvedConfig:
        defaults = self.store.defaults

        all_properties = dict(parent.all_properties) if parent else {}
        all_properties.update(config.properties)

        externals = list(config.props_defined_externally)
        if parent:
            externals.extend(
                prop for prop in parent.props_defined_externally if prop not in externals
            )

        if config.constructor_args is not None:
            constructor_args = config.constructor_args
        elif parent:
            constructor_args = list(parent.constructor_args)
        else:
            constructor_args = defaults.constructor_args or []

        if config.dependencies is not None:
            dependencies = config.dependencies
        elif parent:
            dependencies = list(parent.dependencies)
        else:
            dependencies = defaults.dependencies or []

        return ResolvedConfig(
            class_name=config.class_name,
            relative_path=config.relative_path or defaults.relative_path,
            super_class=config.super_class or self.store.root_class,
            properties=dict(config.properties),
            all_properties=all_properties,
            constructor_args=tuple(constructor_args),
            dependencies=tuple(dependencies),
            props_defined_externally=tuple(externals),
            ancestors=((parent.class_name,) + parent.ancestors) if parent else (),
        )


class ExtraDefinitionLocator:
    """Finds classes that share a source unit with a given class.

    E.g. a geometry source file may define both ``RingGeometry`` and
    ``RingBufferGeometry``; both table entries carry the same
    ``relativePath`` and the locator returns the sibling.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    def extra_definitions(self, class_name: str) -> List[str]:
        config = self.store.get(class_name)
        if config.relative_path is None:
            return []

        shared = [
            name
            for name in self.store.classes_at(config.relative_path)
            if name != config.class_name
        ]
        if shared:
            logger.debug("Extra definitions for %s: %s", config.class_name, shared)
        return shared

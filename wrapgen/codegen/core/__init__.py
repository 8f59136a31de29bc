"""
Core code generation components.

Provides the class table model, inheritance and reference resolution,
and base classes used by all language generators.
"""

from .config import ConfigManager, GeneratorConfig, load_config
from .errors import (
    AggregationError,
    ClassGenerationError,
    ConfigCycle,
    ConfigError,
    GeneratorError,
    InvalidReference,
    MalformedClass,
    TemplateRenderError,
    UnknownClass,
)
from .generator import (
    AggregationGenerator,
    GenerationResult,
    RenderedFile,
    WrapperGenerator,
)
from .naming import ArtifactLayout, to_js_require_path, to_python_import_path
from .references import ReferenceDescriptor, ReferenceResolver
from .resolver import ConfigResolver, ExtraDefinitionLocator
from .schema import (
    ClassConfig,
    ConfigStore,
    PropertyDescriptor,
    PropertyKind,
    ResolvedConfig,
)
from .sources import ConfigStoreEnumerator, SourceTreeEnumerator, SourceUnit
from .storage import OverrideDetector, StorageWriter
from .templates import TemplateEngine, create_template_engine

__all__ = [
    # Class table
    "ClassConfig",
    "ConfigStore",
    "PropertyDescriptor",
    "PropertyKind",
    "ResolvedConfig",
    # Resolution
    "ConfigResolver",
    "ExtraDefinitionLocator",
    "ReferenceDescriptor",
    "ReferenceResolver",
    # Base generator interface
    "WrapperGenerator",
    "AggregationGenerator",
    "GenerationResult",
    "RenderedFile",
    # Naming utilities
    "ArtifactLayout",
    "to_js_require_path",
    "to_python_import_path",
    # Source units and storage
    "SourceUnit",
    "SourceTreeEnumerator",
    "ConfigStoreEnumerator",
    "OverrideDetector",
    "StorageWriter",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Template system
    "TemplateEngine",
    "create_template_engine",
    # Errors
    "GeneratorError",
    "ConfigError",
    "ClassGenerationError",
    "UnknownClass",
    "ConfigCycle",
    "MalformedClass",
    "InvalidReference",
    "TemplateRenderError",
    "AggregationError",
]

"""
wrapgen code generation module.

Generates paired JavaScript and Python widget wrappers from a class
table, plus the index and package files that make them importable.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.errors import (
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
from .core.generator import GenerationResult, WrapperGenerator
from .core.resolver import ConfigResolver, ExtraDefinitionLocator
from .core.schema import ConfigStore, PropertyDescriptor, PropertyKind
from .pipeline import PipelineReport, WrapperPipeline, run_pipeline
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)

__all__ = [
    "ConfigStore",
    "PropertyDescriptor",
    "PropertyKind",
    "ConfigResolver",
    "ExtraDefinitionLocator",
    "WrapperGenerator",
    "GenerationResult",
    "WrapperPipeline",
    "PipelineReport",
    "run_pipeline",
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
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

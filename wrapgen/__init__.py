"""wrapgen: schema-driven widget wrapper generator."""

from .codegen import ConfigStore, GeneratorConfig, WrapperPipeline, run_pipeline

__version__ = "0.1.0"

__all__ = ["ConfigStore", "GeneratorConfig", "WrapperPipeline", "run_pipeline"]

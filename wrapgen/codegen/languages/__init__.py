"""
Target-language wrapper generators.

Each language package provides a wrapper generator and the aggregation
generator that runs after it.
"""

from .js import JavascriptWrapperGenerator
from .python import PythonWrapperGenerator

__all__ = ["JavascriptWrapperGenerator", "PythonWrapperGenerator"]

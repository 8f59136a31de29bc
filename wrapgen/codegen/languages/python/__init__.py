"""
Python wrapper generator module.

Generates traitlets widget classes, package markers and the top-level
``__init__.py``.
"""

from .config import to_python_literal, trait_declaration
from .generator import PythonWrapperGenerator
from .naming import PythonLayout
from .package import PackageRegistrationGenerator

__all__ = [
    # Generator
    "PythonWrapperGenerator",
    "PackageRegistrationGenerator",
    # Naming
    "PythonLayout",
    # Configuration
    "to_python_literal",
    "trait_declaration",
]

"""
JavaScript wrapper generator module.

Generates widget model modules and per-directory ``index.js`` files.
"""

from .config import JS_PROPERTY_MAP, JsPropertyCapability, get_js_capability
from .generator import JavascriptWrapperGenerator
from .index import DirectoryIndexGenerator
from .naming import JsLayout

__all__ = [
    # Generator
    "JavascriptWrapperGenerator",
    "DirectoryIndexGenerator",
    # Naming
    "JsLayout",
    # Configuration
    "JS_PROPERTY_MAP",
    "JsPropertyCapability",
    "get_js_capability",
]

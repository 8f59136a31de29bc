"""
Tests for the language generator registry.
"""

import pytest

from wrapgen.codegen.core.config import GeneratorConfig
from wrapgen.codegen.languages.js import JavascriptWrapperGenerator
from wrapgen.codegen.languages.python import PythonWrapperGenerator
from wrapgen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)


class TestGeneratorRegistry:
    def test_builtin_languages(self):
        assert get_registry().list_languages() == ["javascript", "python"]

    def test_aliases(self):
        registry = get_registry()
        assert registry.canonical_name("js") == "javascript"
        assert registry.canonical_name("PY") == "python"
        assert registry.get_generator_class("js") is JavascriptWrapperGenerator

    def test_unknown_language(self):
        with pytest.raises(RegistryError, match="Available: javascript, python"):
            get_registry().canonical_name("cobol")

    def test_rejects_non_generator(self):
        with pytest.raises(RegistryError):
            GeneratorRegistry().register("bogus", dict)

    def test_alias_conflict(self):
        registry = GeneratorRegistry()
        registry.register("javascript", JavascriptWrapperGenerator, aliases=["js"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("python", PythonWrapperGenerator, aliases=["js"])

    def test_unregister_drops_aliases(self):
        registry = GeneratorRegistry()
        registry.register("javascript", JavascriptWrapperGenerator, aliases=["js"])
        registry.unregister("javascript")
        assert not registry.is_supported("js")

    def test_create_generator(self, store, gen_config: GeneratorConfig):
        generator = get_registry().create_generator("py", store, gen_config)
        assert isinstance(generator, PythonWrapperGenerator)
        assert generator.config is gen_config

    def test_create_generator_from_dict(self, store, tmp_path):
        generator = get_registry().create_generator(
            "js", store, {"js_output_dir": str(tmp_path)}
        )
        assert generator.output_root == tmp_path

    def test_language_info(self):
        info = get_registry().get_language_info("js")
        assert info["name"] == "javascript"
        assert info["aliases"] == ["js"]
        assert info["aggregator"] == "DirectoryIndexGenerator"


class TestModuleHelpers:
    def test_list_supported_languages(self):
        assert list_supported_languages() == ["javascript", "python"]

    def test_get_generator(self, store, gen_config: GeneratorConfig):
        generator = get_generator("javascript", store, gen_config)
        assert isinstance(generator, JavascriptWrapperGenerator)

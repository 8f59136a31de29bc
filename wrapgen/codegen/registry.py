"""
Generator registry system for managing available wrapper generators.

Provides registration and instantiation of language generators by name
or alias.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import WrapperGenerator
from .core.schema import ConfigStore
from .core.storage import OverrideDetector
from .core.templates import TemplateEngine


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available wrapper generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[WrapperGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[WrapperGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a language.

        Args:
            language: Primary language name (e.g., 'javascript', 'python')
            generator_class: Class implementing WrapperGenerator
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or aliases conflict
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, WrapperGenerator
        ):
            raise RegistryError("Generator class must inherit from WrapperGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            return

        self._generators[language_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Unregister a generator and its aliases."""
        language_key = language.lower()
        self._generators.pop(language_key, None)

        for alias in [a for a, target in self._aliases.items() if target == language_key]:
            del self._aliases[alias]

    def canonical_name(self, language: str) -> str:
        """
        Primary name for a language name or alias.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[WrapperGenerator]:
        return self._generators[self.canonical_name(language)]

    def create_generator(
        self,
        language: str,
        store: ConfigStore,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        template_engine: Optional[TemplateEngine] = None,
        detector: Optional[OverrideDetector] = None,
    ) -> WrapperGenerator:
        """
        Create generator instance for language.

        Args:
            language: Language name or alias
            store: Class table for the run
            config: Configuration as GeneratorConfig, dict, or file path
            template_engine: Shared engine, built from the language's templates if None
            detector: Override detector, filesystem-backed if None

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the language is unknown or the config type invalid
        """
        generator_class = self.get_generator_class(language)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(
            store, final_config, template_engine=template_engine, detector=detector
        )

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        """Check if language name or alias is registered."""
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Args:
            language: Language name or alias

        Returns:
            Dict with language information
        """
        language_key = self.canonical_name(language)
        generator_class = self._generators[language_key]
        aggregator = generator_class.aggregator_class()

        return {
            "name": generator_class.language_name,
            "class": generator_class.__name__,
            "file_extension": generator_class.file_extension,
            "aliases": self.get_aliases_for_language(language_key),
            "aggregator": aggregator.__name__ if aggregator else None,
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in generators with their aliases."""
    from .languages.js import JavascriptWrapperGenerator
    from .languages.python import PythonWrapperGenerator

    registry.register("javascript", JavascriptWrapperGenerator, aliases=["js"])
    registry.register("python", PythonWrapperGenerator, aliases=["py"])


def get_generator(
    language: str,
    store: ConfigStore,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> WrapperGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(language, store, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()

"""
Configuration management for wrapper generation.

Handles loading and merging run settings from JSON files,
providing defaults and validation for generator settings.
"""

import copy
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ...utils import JSONLoaderError, load_json_object
from .errors import ConfigError


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    # Input settings
    source_dir: Optional[str] = None
    source_glob: str = "**/*.js"
    ignore_patterns: List[str] = field(default_factory=list)
    custom_classes: List[str] = field(default_factory=list)

    # Output settings
    js_output_dir: Optional[str] = "js/src"
    py_output_dir: Optional[str] = "widgets"
    languages: List[str] = field(default_factory=lambda: ["javascript", "python"])

    # Naming settings
    autogen_tag: str = "autogen"
    base_dir_name: str = "_base"
    base_type_path: str = "./_base/Widget"
    python_root_symbol: str = "WidgetBase"
    js_native_module: str = "three"

    # Aggregation settings
    js_index_excludes: List[str] = field(
        default_factory=lambda: ["embed.js", "extension.js"]
    )
    py_init_excludes: List[str] = field(default_factory=lambda: ["install.py"])

    # Documentation links for Python wrappers
    docs_url_base: Optional[str] = None
    docs_url_replacements: Dict[str, str] = field(default_factory=dict)

    # Execution
    max_workers: int = 8

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Explicit overrides (highest precedence)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            return load_json_object(path)
        except JSONLoaderError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        try:
            return GeneratorConfig(**config_args)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def validate_config(
        self, config: GeneratorConfig, known_languages: Optional[Iterable[str]] = None
    ) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if known_languages is not None:
            known = {name.lower() for name in known_languages}
            for language in config.languages:
                if language.lower() not in known:
                    warnings.append(f"Unknown language: {language}")

        if not isinstance(config.max_workers, int) or config.max_workers < 1:
            warnings.append(f"Invalid max_workers: {config.max_workers}")

        if not config.autogen_tag:
            warnings.append("autogen_tag must not be empty")

        languages = {language.lower() for language in config.languages}
        if languages & {"javascript", "js"} and not config.js_output_dir:
            warnings.append("JavaScript enabled but js_output_dir is not set")
        if languages & {"python", "py"} and not config.py_output_dir:
            warnings.append("Python enabled but py_output_dir is not set")

        if config.source_dir and not Path(config.source_dir).is_dir():
            warnings.append(f"Source directory not found: {config.source_dir}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)

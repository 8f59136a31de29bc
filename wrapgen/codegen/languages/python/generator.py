"""
Python wrapper generator implementation.

Generates one ipywidgets/traitlets class per configured class, paired
with the JavaScript model of the same name.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from ...core.errors import TemplateRenderError
from ...core.generator import AggregationGenerator, WrapperGenerator
from ...core.naming import ArtifactLayout
from ...core.references import ReferenceDescriptor
from ...core.schema import PARAMETERS_ARG, ResolvedConfig
from ...core.sources import SourceUnit
from ..js.generator import GENERATOR_NAME, unique_imports
from .config import TRAITLETS_IMPORTS, to_python_literal, trait_declaration
from .naming import PythonLayout


class PythonWrapperGenerator(WrapperGenerator):
    """Code generator for Python widget classes."""

    language_name = "python"
    file_extension = ".py"
    wrapper_template = "py_wrapper.py.j2"

    @classmethod
    def get_template_directory(cls) -> Path:
        return Path(__file__).parent / "templates"

    @classmethod
    def aggregator_class(cls) -> Optional[Type[AggregationGenerator]]:
        from .package import PackageRegistrationGenerator

        return PackageRegistrationGenerator

    def template_names(self):
        return [self.wrapper_template, "py_top_level_init.py.j2"]

    def symbol_aliases(self) -> Dict[str, str]:
        # The root widget class is imported under a distinct name
        return {self.store.root_class: self.config.python_root_symbol}

    def create_layout(self) -> ArtifactLayout:
        return PythonLayout(Path(self.config.py_output_dir or "."), self.config.autogen_tag)

    def build_context(
        self,
        unit: SourceUnit,
        config: ResolvedConfig,
        references: Dict[str, ReferenceDescriptor],
        has_override: bool,
    ) -> Dict[str, Any]:
        """Generate template context for one class."""
        unit_dir = self.unit_directory(unit)
        args = self._constructor_args(config)

        return {
            "generator_name": GENERATOR_NAME,
            "docs_url": self.docs_url(unit),
            "py_base_relative_path": self.layout.package_path(unit_dir),
            "traitlets_imports": TRAITLETS_IMPORTS,
            "constructor": {
                "args": args,
                "has_parameters": any(arg["name"] == PARAMETERS_ARG for arg in args),
            },
            "class_name": config.class_name,
            "model_name": config.model_name,
            "super_class": references[config.super_class].as_context(),
            "properties": self._properties(config, references),
            "dependencies": {
                key: reference.as_context() for key, reference in references.items()
            },
            "imports": unique_imports(references),
            "has_override": has_override,
        }

    def docs_url(self, unit: SourceUnit) -> Optional[str]:
        """
        Documentation link for a wrapped library class.

        Args:
            unit: Source unit of the class

        Returns:
            URL, or None for custom classes or when no base URL is set
        """
        if unit.is_custom or not self.config.docs_url_base:
            return None

        url = self.config.docs_url_base + unit.stem_path
        for old, new in self.config.docs_url_replacements.items():
            url = url.replace(old, new)
        return url

    def _properties(
        self, config: ResolvedConfig, references: Dict[str, ReferenceDescriptor]
    ) -> Dict[str, Dict[str, str]]:
        properties = {}
        for name, prop in config.properties.items():
            qualified = f"{config.class_name}.{name}"
            properties[name] = {
                "trait_declaration": trait_declaration(
                    prop, qualified, references, self.config.base_type_path
                ),
                "default_json": to_python_literal(prop.default, qualified),
            }
        return properties

    def _constructor_args(self, config: ResolvedConfig) -> List[Dict[str, str]]:
        args = []
        for prop_name in config.constructor_args:
            # No __init__ is generated for the parameters convention
            if prop_name == PARAMETERS_ARG:
                args.append({"name": prop_name, "default_json": "{}"})
                continue

            prop = config.all_properties.get(prop_name)
            if prop is None:
                raise TemplateRenderError(
                    f"invalid propName: {prop_name} (constructor of {config.class_name})",
                    config.class_name,
                )
            args.append(
                {
                    "name": prop_name,
                    "default_json": to_python_literal(
                        prop.default, f"{config.class_name}.{prop_name}"
                    ),
                }
            )
        return args

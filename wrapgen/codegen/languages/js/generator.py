"""
JavaScript wrapper generator implementation.

Generates one widget model module per class, wrapping the native
library object of the same name.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from ...core.errors import TemplateRenderError
from ...core.generator import AggregationGenerator, WrapperGenerator
from ...core.naming import ArtifactLayout
from ...core.references import ReferenceDescriptor
from ...core.schema import PARAMETERS_ARG, ResolvedConfig
from ...core.sources import SourceUnit
from .config import get_js_capability, js_default_literal
from .naming import JsLayout

GENERATOR_NAME = "wrapgen"


def unique_imports(references: Dict[str, ReferenceDescriptor]) -> List[Dict[str, Any]]:
    """One import per resolved file, in reference order."""
    seen = set()
    imports = []
    for reference in references.values():
        if reference.import_path in seen:
            continue
        seen.add(reference.import_path)
        imports.append(reference.as_context())
    return imports


class JavascriptWrapperGenerator(WrapperGenerator):
    """Code generator for JavaScript widget models."""

    language_name = "javascript"
    file_extension = ".js"
    wrapper_template = "js_wrapper.js.j2"

    @classmethod
    def get_template_directory(cls) -> Path:
        return Path(__file__).parent / "templates"

    @classmethod
    def aggregator_class(cls) -> Optional[Type[AggregationGenerator]]:
        from .index import DirectoryIndexGenerator

        return DirectoryIndexGenerator

    def template_names(self):
        return [self.wrapper_template, "js_index.js.j2"]

    def create_layout(self) -> ArtifactLayout:
        return JsLayout(Path(self.config.js_output_dir or "."), self.config.autogen_tag)

    def build_context(
        self,
        unit: SourceUnit,
        config: ResolvedConfig,
        references: Dict[str, ReferenceDescriptor],
        has_override: bool,
    ) -> Dict[str, Any]:
        """Generate template context for one class."""
        return {
            "generator_name": GENERATOR_NAME,
            "native_module": self.config.js_native_module,
            "class_name": config.class_name,
            "model_name": config.model_name,
            "super_class": references[config.super_class].as_context(),
            "constructor": {"args": self._constructor_args(config)},
            "properties": self._properties(config),
            "dependencies": {
                key: reference.as_context() for key, reference in references.items()
            },
            "imports": unique_imports(references),
            "props_created_externally": list(config.props_defined_externally),
            "serialized_props": {
                name: prop.effective_serializer
                for name, prop in config.properties.items()
                if prop.effective_serializer
            },
            "enum_properties": {
                name: prop.enum_type
                for name, prop in config.properties.items()
                if prop.enum_type
            },
            "override_class": self._override_class(config, has_override),
        }

    def _properties(self, config: ResolvedConfig) -> Dict[str, Dict[str, Any]]:
        properties = {}
        for name, prop in config.properties.items():
            capability = get_js_capability(prop, f"{config.class_name}.{name}")
            properties[name] = {
                "default_json": js_default_literal(
                    prop.default, f"{config.class_name}.{name}"
                ),
                "property_array_name": capability.array_name,
                "property_converter": capability.converter,
                "property_assigner": capability.assigner,
            }
        return properties

    def _constructor_args(self, config: ResolvedConfig) -> List[str]:
        args = []
        for prop_name in config.constructor_args:
            if prop_name == PARAMETERS_ARG:
                args.append(self._parameters_object(config))
            else:
                args.append(self._model_getter(config, prop_name))
        return args

    def _parameters_object(self, config: ResolvedConfig) -> str:
        """Object literal collecting every own property."""
        lines = ["{"]
        for prop_name in config.properties:
            lines.append(
                "                "
                + f"{prop_name}: {self._model_getter(config, prop_name)},"
            )
        lines.append("            }")
        return "\n".join(lines)

    def _model_getter(self, config: ResolvedConfig, prop_name: str) -> str:
        prop = config.all_properties.get(prop_name)
        if prop is None:
            raise TemplateRenderError(
                f"invalid propName: {prop_name} (constructor of {config.class_name})",
                config.class_name,
            )
        converter = get_js_capability(prop, prop_name).converter
        if converter:
            return (
                f"this.{converter}ModelToNative(this.get('{prop_name}'), '{prop_name}')"
            )
        return f"this.get('{prop_name}')"

    def _override_class(
        self, config: ResolvedConfig, has_override: bool
    ) -> Optional[Dict[str, str]]:
        if not has_override:
            return None
        return {
            "relative_path": "./" + self.layout.override_filename(config.class_name),
            "model_name": f"Override.{config.model_name}",
        }

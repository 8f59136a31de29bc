"""
Python-specific property handling.

Maps each property kind to the traitlets declaration used in the
generated widget class, and renders defaults as Python literals.
"""

import math
from typing import Any, Dict, List

from ...core.errors import TemplateRenderError
from ...core.references import ReferenceDescriptor
from ...core.schema import SELF_REFERENCE, PropertyDescriptor, PropertyKind

# Default vector/matrix dimensions when the table gives no size
DEFAULT_VECTOR_SIZE = 3
DEFAULT_MATRIX_SIZE = 4

# Plain value kinds -> traitlets class
PYTHON_TRAIT_MAP = {
    PropertyKind.BOOL: "Bool",
    PropertyKind.INT: "CInt",
    PropertyKind.FLOAT: "CFloat",
    PropertyKind.STRING: "Unicode",
    PropertyKind.COLOR: "Unicode",
    PropertyKind.ARRAY: "List",
    PropertyKind.DICT: "Dict",
    PropertyKind.BUFFER: "Bytes",
}

# Names the generated module imports from traitlets
TRAITLETS_IMPORTS = [
    "Bool",
    "Bytes",
    "CFloat",
    "CInt",
    "Dict",
    "Enum",
    "Instance",
    "List",
    "This",
    "Unicode",
    "Union",
]


def to_python_literal(value: Any, prop_name: str = "") -> str:
    """
    Render a JSON default as Python source.

    Args:
        value: Decoded JSON value
        prop_name: Property the value belongs to, for error messages

    Returns:
        Python literal

    Raises:
        TemplateRenderError: If the value has no literal form
    """
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return repr(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "float('nan')"
        if math.isinf(value):
            return "float('inf')" if value > 0 else "float('-inf')"
        return repr(value)
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, (list, tuple)):
        items = ", ".join(to_python_literal(item, prop_name) for item in value)
        return f"[{items}]"
    if isinstance(value, dict):
        items = ", ".join(
            f"{to_python_literal(key, prop_name)}: {to_python_literal(item, prop_name)}"
            for key, item in value.items()
        )
        return "{" + items + "}"

    raise TemplateRenderError(
        f"Default of {prop_name} has no Python literal: {value!r}"
    )


def _container_default(prop: PropertyDescriptor, empty: str, literal: str) -> str:
    return empty if prop.default is None else literal


def _tag(serialization: bool = False) -> str:
    if serialization:
        return ".tag(sync=True, **widget_serialization)"
    return ".tag(sync=True)"


def _instance_trait(
    prop: PropertyDescriptor,
    references: Dict[str, ReferenceDescriptor],
    base_type_path: str,
    options_suffix: str = "",
) -> str:
    """Trait accepting the widget class(es) a property points at."""
    if prop.type_name == SELF_REFERENCE:
        return f"This({options_suffix.lstrip(', ')})"

    names = prop.type_name if isinstance(prop.type_name, list) else None
    if names is None:
        target = prop.type_name or base_type_path
        return f"Instance({references[target].symbol}{options_suffix})"

    options: List[str] = []
    for name in names:
        if name == SELF_REFERENCE:
            options.append("This()")
        else:
            options.append(f"Instance({references[name].symbol})")
    return "Union([" + ", ".join(options) + "]" + options_suffix + ")"


def trait_declaration(
    prop: PropertyDescriptor,
    prop_name: str,
    references: Dict[str, ReferenceDescriptor],
    base_type_path: str,
) -> str:
    """
    traitlets declaration for one property.

    Args:
        prop: Property descriptor
        prop_name: Qualified property name, for error messages
        references: Reference mapping of the owning class
        base_type_path: Key used for reference properties naming no type

    Returns:
        Declaration source, e.g. ``CFloat(1.0, allow_none=False).tag(sync=True)``

    Raises:
        TemplateRenderError: If the kind or default cannot be declared
    """
    allow_none = "True" if prop.nullable else "False"
    default = to_python_literal(prop.default, prop_name)

    try:
        if prop.kind == PropertyKind.INSTANCE:
            inner = _instance_trait(
                prop, references, base_type_path, f", allow_none={allow_none}"
            )
            return f"{inner}{_tag(True)}"

        if prop.kind == PropertyKind.INSTANCE_ARRAY:
            inner = _instance_trait(prop, references, base_type_path)
            default = _container_default(prop, "[]", default)
            return f"List(trait={inner}, default_value={default}){_tag(True)}"

        if prop.kind == PropertyKind.INSTANCE_DICT:
            inner = _instance_trait(prop, references, base_type_path)
            default = _container_default(prop, "{}", default)
            return f"Dict(value_trait={inner}, default_value={default}){_tag(True)}"
    except KeyError as e:
        raise TemplateRenderError(
            f"No reference resolved for {prop_name}: {e.args[0]}"
        ) from None

    if prop.kind == PropertyKind.ENUM:
        return f"Enum({prop.enum_type}, {default}, allow_none={allow_none}){_tag()}"

    if prop.kind == PropertyKind.VECTOR:
        size = prop.size or DEFAULT_VECTOR_SIZE
        return f"Vector{size}(default_value={default}){_tag()}"

    if prop.kind == PropertyKind.MATRIX:
        size = prop.size or DEFAULT_MATRIX_SIZE
        return f"Matrix{size}(default_value={default}){_tag()}"

    trait = PYTHON_TRAIT_MAP.get(prop.kind)
    if trait is None:
        raise TemplateRenderError(
            f"No Python trait for {prop.kind.value} property {prop_name}"
        )

    if prop.kind in (PropertyKind.ARRAY, PropertyKind.DICT):
        empty = "[]" if prop.kind == PropertyKind.ARRAY else "{}"
        default = _container_default(prop, empty, default)
        return f"{trait}(default_value={default}, allow_none={allow_none}){_tag()}"

    return f"{trait}({default}, allow_none={allow_none}){_tag()}"

"""
JavaScript-specific property capabilities.

Maps each property kind to the converter, assignment function and
array-grouping key the generated model uses for it.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from ...core.errors import TemplateRenderError
from ...core.schema import PropertyDescriptor, PropertyKind


@dataclass(frozen=True)
class JsPropertyCapability:
    """How a property kind is handled on the JavaScript side."""

    converter: Optional[str] = None
    assigner: Optional[str] = None
    array_name: Optional[str] = None


JS_PROPERTY_MAP = {
    PropertyKind.BOOL: JsPropertyCapability(converter="convertBool"),
    PropertyKind.INT: JsPropertyCapability(),
    PropertyKind.FLOAT: JsPropertyCapability(converter="convertFloat"),
    PropertyKind.STRING: JsPropertyCapability(),
    PropertyKind.ENUM: JsPropertyCapability(converter="convertEnum"),
    PropertyKind.COLOR: JsPropertyCapability(
        converter="convertColor", assigner="assignColor"
    ),
    PropertyKind.VECTOR: JsPropertyCapability(
        converter="convertVector", assigner="assignVector"
    ),
    PropertyKind.MATRIX: JsPropertyCapability(
        converter="convertMatrix", assigner="assignMatrix"
    ),
    PropertyKind.ARRAY: JsPropertyCapability(converter="convertArray"),
    PropertyKind.DICT: JsPropertyCapability(converter="convertDict"),
    PropertyKind.BUFFER: JsPropertyCapability(converter="convertArrayBuffer"),
    PropertyKind.INSTANCE: JsPropertyCapability(converter="convertWidget"),
    PropertyKind.INSTANCE_ARRAY: JsPropertyCapability(
        converter="convertWidgetArray", array_name="widget_arrays"
    ),
    PropertyKind.INSTANCE_DICT: JsPropertyCapability(
        converter="convertWidgetDict", array_name="widget_dicts"
    ),
}


def get_js_capability(prop: PropertyDescriptor, prop_name: str = "") -> JsPropertyCapability:
    try:
        return JS_PROPERTY_MAP[prop.kind]
    except KeyError:
        raise TemplateRenderError(
            f"No JavaScript handling for {prop.kind.value} property {prop_name}"
        ) from None


def js_default_literal(value: Any, prop_name: str = "") -> str:
    """JSON literal for a property default."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise TemplateRenderError(
            f"Default of {prop_name} has no JavaScript literal: {e}"
        ) from e

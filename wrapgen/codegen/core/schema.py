"""
Core schema representation for wrapper generation.

Converts the hand-maintained class table (a JSON object keyed by class
name) into typed records that the resolver and generators work with.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .errors import ConfigError, MalformedClass, UnknownClass

logger = get_logger(__name__)

DEFAULTS_KEY = "_defaults"
DEFAULT_ROOT_CLASS = "Widget"
SELF_REFERENCE = "this"
PARAMETERS_ARG = "parameters"


class PropertyKind(Enum):
    """Closed set of property variants a class table may declare."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ENUM = "enum"
    COLOR = "color"
    VECTOR = "vector"
    MATRIX = "matrix"
    ARRAY = "array"
    DICT = "dict"
    BUFFER = "buffer"
    INSTANCE = "instance"
    INSTANCE_ARRAY = "instance_array"
    INSTANCE_DICT = "instance_dict"


# Kinds whose values are other generated widgets
REFERENCE_KINDS = frozenset(
    {PropertyKind.INSTANCE, PropertyKind.INSTANCE_ARRAY, PropertyKind.INSTANCE_DICT}
)

# Serializers implied by the kind when the table doesn't name one
DEFAULT_SERIALIZERS = {
    PropertyKind.BUFFER: "serializeArrayBuffer",
}


def normalize_class_name(name: str) -> str:
    """Class table keys never contain dots."""
    return name.replace(".", "_")


def _optional_str(owner: str, key: str, value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{owner}: {key} must be a string, got {value!r}")
    return value


def _optional_str_list(owner: str, key: str, value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{owner}: {key} must be a list of strings, got {value!r}")
    return list(value)


def _parse_kind(value: Any) -> PropertyKind:
    if isinstance(value, PropertyKind):
        return value
    if not isinstance(value, str):
        raise ConfigError(f"Property type must be a string, got {value!r}")
    key = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value).lower()
    try:
        return PropertyKind(key)
    except ValueError:
        raise ConfigError(f"Unknown property type: {value}") from None


@dataclass(frozen=True)
class PropertyDescriptor:
    """A single declared property of a class."""

    kind: PropertyKind
    default: Any = None
    nullable: bool = False
    type_name: Union[str, List[str], None] = None
    enum_type: Optional[str] = None
    serializer: Optional[str] = None
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, name: str, data: Union[str, Dict[str, Any]]) -> "PropertyDescriptor":
        """Build a descriptor from its class-table entry.

        A bare string is shorthand for ``{"type": <string>}``.
        """
        if isinstance(data, str):
            data = {"type": data}
        if not isinstance(data, dict) or "type" not in data:
            raise ConfigError(f"Property '{name}' must declare a type")

        kind = _parse_kind(data["type"])
        type_name = data.get("typeName")
        if isinstance(type_name, list):
            type_name = _optional_str_list(name, "typeName", type_name)
        else:
            _optional_str(name, "typeName", type_name)
        _optional_str(name, "enumType", data.get("enumType"))
        _optional_str(name, "serializer", data.get("serializer"))
        size = data.get("size")
        if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
            raise ConfigError(f"{name}: size must be an integer, got {size!r}")

        if kind == PropertyKind.ENUM and not data.get("enumType"):
            raise ConfigError(f"Enum property '{name}' needs an enumType")
        if type_name is not None and kind not in REFERENCE_KINDS:
            raise ConfigError(
                f"Property '{name}' of type {kind.value} cannot name a typeName"
            )

        return cls(
            kind=kind,
            default=data.get("default"),
            nullable=bool(data.get("nullable", False)),
            type_name=type_name,
            enum_type=data.get("enumType"),
            serializer=data.get("serializer"),
            size=size,
        )

    @property
    def is_reference(self) -> bool:
        return self.kind in REFERENCE_KINDS

    @property
    def effective_serializer(self) -> Optional[str]:
        return self.serializer or DEFAULT_SERIALIZERS.get(self.kind)

    def referenced_classes(self, base_type_path: str) -> List[str]:
        """
        Names (or bare paths) of the classes this property points at.

        Args:
            base_type_path: Path used when a reference kind names no type

        Returns:
            List of class names / paths, empty for non-reference kinds
        """
        if self.kind not in REFERENCE_KINDS:
            return []
        if self.type_name == SELF_REFERENCE:
            return []
        if isinstance(self.type_name, list):
            return [name for name in self.type_name if name != SELF_REFERENCE]
        return [self.type_name or base_type_path]


@dataclass
class ClassConfig:
    """Partial configuration of one class as written in the class table.

    ``None`` marks a field the class leaves to its ancestors or to the
    defaults record.
    """

    class_name: str
    relative_path: Optional[str] = None
    super_class: Optional[str] = None
    properties: Dict[str, PropertyDescriptor] = field(default_factory=dict)
    constructor_args: Optional[List[str]] = None
    dependencies: Optional[List[str]] = None
    props_defined_externally: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, class_name: str, data: Dict[str, Any]) -> "ClassConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"Class entry '{class_name}' must be an object")

        raw_properties = data.get("properties") or {}
        if not isinstance(raw_properties, dict):
            raise ConfigError(f"{class_name}: properties must be an object")
        properties = {
            prop_name: PropertyDescriptor.from_dict(f"{class_name}.{prop_name}", prop)
            for prop_name, prop in raw_properties.items()
        }

        return cls(
            class_name=class_name,
            relative_path=_optional_str(
                class_name, "relativePath", data.get("relativePath")
            ),
            super_class=_optional_str(class_name, "superClass", data.get("superClass")),
            properties=properties,
            constructor_args=_optional_str_list(
                class_name, "constructorArgs", data.get("constructorArgs")
            ),
            dependencies=_optional_str_list(
                class_name, "dependencies", data.get("dependencies")
            ),
            props_defined_externally=_optional_str_list(
                class_name,
                "propsDefinedExternally",
                data.get("propsDefinedExternally"),
            )
            or [],
        )


@dataclass(frozen=True)
class ResolvedConfig:
    """Inheritance-merged view of a class and all of its ancestors."""

    class_name: str
    relative_path: Optional[str]
    super_class: str
    properties: Dict[str, PropertyDescriptor]
    all_properties: Dict[str, PropertyDescriptor]
    constructor_args: tuple
    dependencies: tuple
    props_defined_externally: tuple
    ancestors: tuple = ()

    @property
    def model_name(self) -> str:
        return f"{self.class_name}Model"


@dataclass(frozen=True)
class InvalidEntry:
    """A class table entry that failed to parse."""

    reason: str
    relative_path: Optional[str] = None


class ConfigStore:
    """Immutable class table for one generation run.

    Entries that fail to parse stay in the table as invalid: looking one
    up raises ``MalformedClass``, so only that class and the classes
    that depend on it are skipped.
    """

    def __init__(
        self,
        classes: Dict[str, ClassConfig],
        defaults: ClassConfig,
        invalid: Optional[Dict[str, InvalidEntry]] = None,
    ):
        self._classes = dict(classes)
        self._invalid = dict(invalid or {})
        self.defaults = defaults

        # relative path -> class names, parsed entries before invalid ones
        self._path_index: Dict[str, List[str]] = {}
        paths = [(name, config.relative_path) for name, config in self._classes.items()]
        paths += [(name, entry.relative_path) for name, entry in self._invalid.items()]
        for name, relative_path in paths:
            if relative_path is not None:
                self._path_index.setdefault(relative_path, []).append(name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigStore":
        """
        Build a store from the JSON class table.

        Args:
            data: Mapping of class name to class entry, plus ``_defaults``

        Returns:
            ConfigStore
        """
        if not isinstance(data, dict):
            raise ConfigError("Class table must be a JSON object")

        defaults = ClassConfig.from_dict(DEFAULTS_KEY, data.get(DEFAULTS_KEY) or {})
        if defaults.super_class is None:
            defaults.super_class = DEFAULT_ROOT_CLASS

        classes = {}
        invalid = {}
        for key, entry in data.items():
            if key.startswith("_"):
                continue
            name = normalize_class_name(key)
            try:
                classes[name] = ClassConfig.from_dict(name, entry)
            except ConfigError as e:
                logger.warning("Invalid class table entry %s: %s", name, e)
                relative_path = None
                if isinstance(entry, dict) and isinstance(entry.get("relativePath"), str):
                    relative_path = entry["relativePath"]
                invalid[name] = InvalidEntry(str(e), relative_path)

        return cls(classes, defaults, invalid)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ConfigStore":
        from ...utils import JSONLoaderError, load_json_object

        try:
            return cls.from_dict(load_json_object(path))
        except (JSONLoaderError, FileNotFoundError) as e:
            raise ConfigError(str(e)) from e

    @property
    def root_class(self) -> str:
        """Superclass name that terminates every inheritance chain."""
        return self.defaults.super_class or DEFAULT_ROOT_CLASS

    def __contains__(self, class_name: object) -> bool:
        if not isinstance(class_name, str):
            return False
        name = normalize_class_name(class_name)
        return name in self._classes or name in self._invalid

    def __len__(self) -> int:
        return len(self._classes)

    def get(self, class_name: str) -> ClassConfig:
        """Return the raw entry for a class or raise ``UnknownClass``."""
        name = normalize_class_name(class_name)
        if name in self._invalid:
            raise MalformedClass(name, self._invalid[name].reason)
        try:
            return self._classes[name]
        except KeyError:
            raise UnknownClass(name) from None

    def class_names(self) -> List[str]:
        return list(self._classes)

    @property
    def invalid_classes(self) -> Dict[str, str]:
        """Names of unparseable entries mapped to the reason."""
        return {name: entry.reason for name, entry in self._invalid.items()}

    def classes_at(self, relative_path: str) -> List[str]:
        """All classes whose source of truth is ``relative_path``."""
        return list(self._path_index.get(relative_path, []))

    def relative_paths(self) -> List[str]:
        return list(self._path_index)

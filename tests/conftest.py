"""
Shared test fixtures and configuration.
"""

import copy
import json
from pathlib import Path

import pytest

from wrapgen.codegen.core.config import GeneratorConfig
from wrapgen.codegen.core.schema import ConfigStore

CLASS_TABLE = {
    "_defaults": {
        "superClass": "Widget",
        "constructorArgs": [],
    },
    "_comment": "ignored",
    "Base": {
        "relativePath": "./core/Base",
        "properties": {
            "color": {"type": "color", "default": "#ffffff"},
            "name": {"type": "string", "default": ""},
        },
        "propsDefinedExternally": ["name"],
    },
    "Shape": {
        "relativePath": "./shapes/Shape",
        "superClass": "Base",
        "properties": {
            "radius": {"type": "float", "default": 1.0},
        },
        "constructorArgs": ["radius"],
    },
    "Ring": {
        "relativePath": "./shapes/Ring",
        "superClass": "Shape",
        "properties": {
            "innerRadius": {"type": "float", "default": 0.5},
        },
        "constructorArgs": ["radius", "innerRadius"],
        "propsDefinedExternally": ["innerRadius"],
    },
    "RingOutline": {
        "relativePath": "./shapes/Ring",
        "superClass": "Shape",
        "properties": {
            "thickness": {"type": "int", "default": 1},
        },
    },
    "Group": {
        "relativePath": "./core/Group",
        "superClass": "Base",
        "properties": {
            "children": {"type": "instanceArray", "typeName": "Shape", "default": []},
            "parent": {"type": "instance", "typeName": "this", "nullable": True},
        },
    },
    "Material": {
        "relativePath": "./materials/Material",
        "superClass": "Base",
        "properties": {
            "side": {"type": "enum", "enumType": "Side", "default": "FrontSide"},
            "opacity": {"type": "float", "default": 1.0},
            "data": {"type": "buffer"},
        },
        "constructorArgs": ["parameters"],
    },
    "Mesh": {
        "relativePath": "./objects/Mesh",
        "superClass": "Base",
        "properties": {
            "geometry": {"type": "instance", "typeName": "Shape"},
            "material": {"type": "instance", "typeName": ["Material", "Shape"]},
            "position": {"type": "vector", "default": [0, 0, 0]},
        },
        "constructorArgs": ["geometry", "material"],
        "dependencies": ["Material"],
    },
}


@pytest.fixture
def class_table() -> dict:
    """Fresh copy of the sample class table."""
    return copy.deepcopy(CLASS_TABLE)


@pytest.fixture
def store(class_table: dict) -> ConfigStore:
    return ConfigStore.from_dict(class_table)


@pytest.fixture
def class_table_file(tmp_path: Path, class_table: dict) -> Path:
    path = tmp_path / "classes.json"
    path.write_text(json.dumps(class_table), encoding="utf-8")
    return path


@pytest.fixture
def js_root(tmp_path: Path) -> Path:
    return tmp_path / "js" / "src"


@pytest.fixture
def py_root(tmp_path: Path) -> Path:
    return tmp_path / "widgets"


@pytest.fixture
def gen_config(js_root: Path, py_root: Path) -> GeneratorConfig:
    """Run settings writing into temporary output trees."""
    return GeneratorConfig(
        js_output_dir=str(js_root),
        py_output_dir=str(py_root),
        max_workers=4,
    )


def write_file(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def touch():
    """Create a file (and its parents) with optional content."""
    return write_file

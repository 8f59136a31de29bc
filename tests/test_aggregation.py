"""
Tests for directory indices (JavaScript) and package registration (Python).

Files on disk → listings and written aggregation files.
"""

from pathlib import Path

import pytest

from wrapgen.codegen.core.config import GeneratorConfig
from wrapgen.codegen.core.errors import AggregationError
from wrapgen.codegen.core.schema import ConfigStore
from wrapgen.codegen.core.sources import SourceUnit
from wrapgen.codegen.core.storage import StorageWriter
from wrapgen.codegen.languages.js.generator import JavascriptWrapperGenerator
from wrapgen.codegen.languages.js.index import DirectoryIndexGenerator
from wrapgen.codegen.languages.python.generator import PythonWrapperGenerator
from wrapgen.codegen.languages.python.package import PackageRegistrationGenerator


class FailingWriter(StorageWriter):
    def write(self, path, text):
        raise OSError(f"disk full: {path}")


# ═══════════════════════════════════════════════════════════════════
#  JavaScript directory indices
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def js_tree(js_root: Path, touch) -> Path:
    touch(js_root / "shapes" / "Shape.autogen.js")
    touch(js_root / "shapes" / "Ring.autogen.js")
    touch(js_root / "shapes" / "Ring.js")
    touch(js_root / "shapes" / ".Ring.js.swp")
    touch(js_root / "shapes" / ".DS_Store")
    touch(js_root / "shapes" / "notes.txt")
    touch(js_root / "_base" / "Widget.autogen.js")
    touch(js_root / "_base" / "Widget.js")
    touch(js_root / "_base" / "utils.js")
    touch(js_root / "embed.js")
    touch(js_root / "extension.js")
    touch(js_root / "index.js", "stale")
    return js_root


@pytest.fixture
def indexer(store: ConfigStore, gen_config: GeneratorConfig):
    generator = JavascriptWrapperGenerator(store, gen_config)
    aggregator = generator.create_aggregator(StorageWriter())
    assert isinstance(aggregator, DirectoryIndexGenerator)
    return aggregator


class TestListSubmodules:
    def test_override_replaces_generated(self, indexer, js_tree: Path):
        submodules = indexer.list_submodules(js_tree / "shapes")
        assert submodules == ["./Ring.js", "./Shape.autogen.js"]

    def test_never_lists_both(self, indexer, js_tree: Path):
        submodules = indexer.list_submodules(js_tree / "shapes")
        assert not {"./Ring.js", "./Ring.autogen.js"} <= set(submodules)

    def test_base_dir_hides_generated(self, indexer, js_tree: Path):
        assert indexer.list_submodules(js_tree / "_base") == ["./Widget.js", "./utils.js"]

    def test_top_level_excludes_entry_points(self, indexer, js_tree: Path):
        assert indexer.list_submodules(js_tree) == ["./_base", "./shapes"]

    def test_generated_without_override(self, indexer, js_root: Path, touch):
        touch(js_root / "objects" / "Mesh.autogen.js")
        assert indexer.list_submodules(js_root / "objects") == ["./Mesh.autogen.js"]


class TestWriteIndices:
    def test_one_index_per_directory(self, indexer, js_tree: Path):
        written = indexer.run([])
        assert set(written) == {
            js_tree / "index.js",
            js_tree / "shapes" / "index.js",
            js_tree / "_base" / "index.js",
        }

    def test_index_content(self, indexer, js_tree: Path):
        indexer.run([])
        shapes = (js_tree / "shapes" / "index.js").read_text()
        assert "require('./Ring.js')," in shapes
        assert "require('./Ring.autogen.js')" not in shapes
        assert "module.exports['version']" not in shapes

    def test_top_level_index(self, indexer, js_tree: Path):
        indexer.run([])
        top = (js_tree / "index.js").read_text()
        assert "require('./shapes')," in top
        assert "embed.js" not in top
        assert "module.exports['version'] = require('../package.json').version;" in top

    def test_missing_output_root(self, indexer):
        assert indexer.run([]) == []

    def test_write_failure_is_aggregation_error(self, store, gen_config, js_tree):
        generator = JavascriptWrapperGenerator(store, gen_config)
        aggregator = generator.create_aggregator(FailingWriter())
        with pytest.raises(AggregationError, match="disk full"):
            aggregator.run([])


# ═══════════════════════════════════════════════════════════════════
#  Python package registration
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def registrar(store: ConfigStore, gen_config: GeneratorConfig):
    generator = PythonWrapperGenerator(store, gen_config)
    aggregator = generator.create_aggregator(StorageWriter())
    assert isinstance(aggregator, PackageRegistrationGenerator)
    return aggregator


@pytest.fixture
def py_tree(py_root: Path, touch) -> Path:
    touch(py_root / "shapes" / "Ring_autogen.py")
    touch(py_root / "shapes" / "Ring.py")
    touch(py_root / "shapes" / "Shape_autogen.py")
    touch(py_root / "core" / "Base_autogen.py")
    touch(py_root / "_base" / "Widget.py")
    touch(py_root / "_base" / "__init__.py")
    touch(py_root / "install.py")
    return py_root


class TestPackageMarkers:
    UNITS = [
        SourceUnit("shapes/Ring.js"),
        SourceUnit("core/Base.js"),
        SourceUnit("objects/deep/Thing.js"),
    ]

    def test_directories(self, registrar, py_root: Path):
        assert registrar.package_directories(self.UNITS) == [
            py_root / "_base",
            py_root / "core",
            py_root / "objects",
            py_root / "objects" / "deep",
            py_root / "shapes",
        ]

    def test_markers_created(self, registrar, py_root: Path):
        registrar.ensure_package_markers(self.UNITS)
        assert (py_root / "objects" / "__init__.py").is_file()
        assert (py_root / "objects" / "deep" / "__init__.py").is_file()
        assert (py_root / "_base" / "__init__.py").is_file()

    def test_existing_marker_untouched(self, registrar, py_root: Path, touch):
        marker = touch(py_root / "core" / "__init__.py", "from .Base import *\n")
        registrar.ensure_package_markers(self.UNITS)
        assert marker.read_text() == "from .Base import *\n"


class TestTopLevelInit:
    def test_module_listing(self, registrar, py_tree: Path):
        assert registrar.list_modules() == [
            "._base.Widget",
            ".core.Base_autogen",
            ".shapes.Ring",
            ".shapes.Shape_autogen",
        ]

    def test_written_file(self, registrar, py_tree: Path):
        registrar.run([SourceUnit("shapes/Ring.js")])
        init = (py_tree / "__init__.py").read_text()
        assert "from .shapes.Ring import *" in init
        assert "from .shapes.Ring_autogen import *" not in init
        assert "install" not in init

    def test_rerun_ignores_own_init(self, registrar, py_tree: Path):
        registrar.run([])
        first = (py_tree / "__init__.py").read_text()
        registrar.run([])
        assert (py_tree / "__init__.py").read_text() == first

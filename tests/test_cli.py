"""
Tests for the wrapgen command line.
"""

import json
from pathlib import Path

import pytest

from wrapgen.cli import main


@pytest.fixture
def out_args(js_root: Path, py_root: Path):
    return ["--js-out", str(js_root), "--py-out", str(py_root)]


class TestGenerateCommand:
    def test_success(self, class_table_file, out_args, js_root, py_root, capsys):
        assert main(["generate", str(class_table_file), *out_args]) == 0
        assert (js_root / "core" / "Base.autogen.js").is_file()
        assert (py_root / "__init__.py").is_file()
        assert "Generation Summary" in capsys.readouterr().out

    def test_language_filter(self, class_table_file, out_args, py_root):
        assert main(["generate", str(class_table_file), "-l", "js", *out_args]) == 0
        assert not py_root.exists()

    def test_skipped_class_fails_run(self, tmp_path, class_table, out_args, capsys):
        class_table["Broken"] = {"relativePath": "./Broken", "dependencies": ["Nope"]}
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(class_table), encoding="utf-8")

        assert main(["generate", str(path), *out_args]) == 1
        assert "Skipped" in capsys.readouterr().out

    def test_invalid_entry_reported(self, tmp_path, class_table, out_args, capsys):
        class_table["Broken"] = {
            "relativePath": "./misc/Broken",
            "properties": {"x": {"type": "vector3"}},
        }
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(class_table), encoding="utf-8")

        assert main(["generate", str(path), *out_args]) == 1
        out = capsys.readouterr().out
        assert "Invalid entry Broken" in out
        assert "Generation Summary" in out

    def test_missing_class_table(self, tmp_path, out_args, capsys):
        assert main(["generate", str(tmp_path / "nope.json"), *out_args]) == 1
        assert "not found" in capsys.readouterr().out

    def test_unknown_language(self, class_table_file, out_args):
        assert main(["generate", str(class_table_file), "-l", "cobol", *out_args]) == 1

    def test_config_file(self, tmp_path, class_table_file, js_root):
        config = tmp_path / "wrapgen.json"
        config.write_text(
            json.dumps({"js_output_dir": str(js_root), "languages": ["javascript"]}),
            encoding="utf-8",
        )
        assert main(["generate", str(class_table_file), "--config", str(config)]) == 0
        assert (js_root / "index.js").is_file()


class TestResolveCommand:
    def test_resolve(self, class_table_file, capsys):
        assert main(["resolve", str(class_table_file), "Ring"]) == 0
        out = capsys.readouterr().out
        assert "RingOutline" in out
        assert "innerRadius" in out

    def test_unknown_class(self, class_table_file, capsys):
        assert main(["resolve", str(class_table_file), "Nope"]) == 1
        assert "invalid class name" in capsys.readouterr().out


class TestOtherCommands:
    def test_list_languages(self, capsys):
        assert main(["list-languages"]) == 0
        out = capsys.readouterr().out
        assert "javascript" in out
        assert "python" in out

    def test_no_command(self, capsys):
        assert main([]) == 1

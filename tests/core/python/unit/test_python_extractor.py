"""
Unit tests for TreeSitterPythonExtractor.
"""

from pathlib import Path

from mood_metrics.core.models import Visibility
from mood_metrics.core.treesitter.python_adapter import visibility_from_name
from mood_metrics.core.treesitter.python_extractor import TreeSitterPythonExtractor


def by_name(classes):
    return {c.name: c for c in classes}


class TestPythonVisibility:

    def test_naming_convention(self):
        assert visibility_from_name("run") is Visibility.PUBLIC
        assert visibility_from_name("_cache") is Visibility.PROTECTED
        assert visibility_from_name("__secret") is Visibility.PRIVATE
        assert visibility_from_name("__init__") is Visibility.PUBLIC


class TestTreeSitterPythonExtractor:
    """Test cases for TreeSitterPythonExtractor."""

    def test_extracts_all_classes(self, python_extractor, sample_python_source):
        classes = python_extractor.extract_from_source(sample_python_source)
        assert [c.name for c in classes] == ["Mixin", "Base", "Child", "Inner"]

    def test_methods_include_decorated_and_keep_first_duplicate(self, python_extractor, sample_python_source):
        base = by_name(python_extractor.extract_from_source(sample_python_source))["Base"]
        assert [m.name for m in base.methods] == ["__init__", "run", "__helper", "label", "build"]

        methods = {m.name: m for m in base.methods}
        assert methods["__helper"].visibility is Visibility.PRIVATE
        assert methods["build"].is_static
        assert methods["run"].signature == "(self)"
        assert all(m.kind == "method" for m in base.methods)

    def test_attributes_from_class_body_and_init(self, python_extractor, sample_python_source):
        base = by_name(python_extractor.extract_from_source(sample_python_source))["Base"]
        attributes = {a.name: a for a in base.attributes}
        assert list(attributes) == ["kind", "_registry", "count", "name", "__secret", "_cache"]
        assert attributes["kind"].is_static
        assert not attributes["name"].is_static
        assert attributes["_registry"].visibility is Visibility.PROTECTED
        assert attributes["__secret"].visibility is Visibility.PRIVATE

    def test_first_positional_base_is_extends(self, python_extractor, sample_python_source):
        classes = by_name(python_extractor.extract_from_source(sample_python_source))
        assert classes["Child"].extends == "Base"
        assert classes["Child"].metadata["bases"] == ["Base", "Mixin"]
        assert classes["Base"].extends is None
        assert classes["Inner"].extends == "Child"

    def test_nested_functions_are_not_methods(self, python_extractor, sample_python_source):
        child = by_name(python_extractor.extract_from_source(sample_python_source))["Child"]
        assert [m.name for m in child.methods] == ["run", "fetch"]
        assert child.attributes == ()

    def test_extract_from_file(self, python_extractor, sample_python_file):
        classes = python_extractor.extract_from_file(sample_python_file)
        assert len(classes) == 4
        assert classes[0].file_path == str(sample_python_file.resolve())
        assert classes[1].line_start == 6
        assert python_extractor.performance_metrics["total_files"] == 1
        assert python_extractor.performance_metrics["total_classes"] == 4

    def test_extract_from_empty_file(self, python_extractor, temp_dir):
        py_file = temp_dir / "empty.py"
        py_file.write_text("")
        assert python_extractor.extract_from_file(py_file) == []

    def test_extract_from_nonexistent_file(self, python_extractor):
        assert python_extractor.extract_from_file(Path("nonexistent.py")) == []

    def test_extract_from_non_python_file(self, python_extractor, temp_dir):
        txt_file = temp_dir / "test.txt"
        txt_file.write_text("class NotPython: pass")
        assert python_extractor.extract_from_file(txt_file) == []

    def test_syntax_errors_do_not_abort_extraction(self, python_extractor):
        classes = python_extractor.extract_from_source("class Ok:\n    def run(self):\n        pass\n\ndef broken(:\n")
        assert [c.name for c in classes] == ["Ok"]

    def test_extract_from_directory_respects_ignores(self, temp_dir, sample_python_source):
        (temp_dir / "pkg").mkdir()
        (temp_dir / "pkg" / "models.py").write_text(sample_python_source)
        (temp_dir / "venv").mkdir()
        (temp_dir / "venv" / "lib.py").write_text("class Vendored:\n    pass\n")

        extractor = TreeSitterPythonExtractor(ignored_patterns=["venv"])
        classes = extractor.extract(temp_dir)
        assert "Vendored" not in {c.name for c in classes}
        assert len(classes) == 4

    def test_typing_markers_are_not_the_base_class(self, python_extractor):
        source = (
            "from typing import Generic, Protocol, TypeVar\n"
            "import abc\n"
            "T = TypeVar('T')\n"
            "class Base:\n    pass\n"
            "class Box(Generic[T], Base):\n    pass\n"
            "class Shape(abc.ABC):\n    pass\n"
            "class Sized(Protocol):\n    pass\n"
        )
        classes = by_name(python_extractor.extract_from_source(source))
        assert classes["Box"].extends == "Base"
        assert classes["Box"].metadata["bases"] == ["Generic", "Base"]
        assert classes["Shape"].extends is None
        assert classes["Sized"].extends is None

"""
Tests for the ClassMetricsAnalyzer pipeline.
"""

import json

import pytest

from mood_metrics.core.analyzer import ClassMetricsAnalyzer
from mood_metrics.core.config import MoodConfig
from mood_metrics.core.errors import MoodMetricsError, UnknownClassError, UnresolvedBaseClassError

WORKED_EXAMPLE = {
    "classes": [
        {"name": "Root", "methods": ["a", {"name": "b", "visibility": "private"}]},
        {"name": "Child", "extends": "Root", "methods": ["a", "c"]},
        {"name": "Sibling", "extends": "Root"},
    ]
}

PYTHON_SOURCE = '''
class Base(object):
    def __init__(self):
        self.__token = None
        self.size = 0

    def run(self):
        pass


class Worker(Base):
    def run(self):
        pass

    def stop(self):
        pass
'''


@pytest.fixture
def schema_file(temp_dir):
    path = temp_dir / "classes.json"
    path.write_text(json.dumps(WORKED_EXAMPLE))
    return path


class TestClassMetricsAnalyzer:

    def test_analyze_schema(self, schema_file):
        analyzer = ClassMetricsAnalyzer(schema_file, MoodConfig(language="schema"))
        report = analyzer.analyze()

        assert report.language == "schema"
        assert report.class_count == 3
        assert [(c.name, c.depth, c.children) for c in report.classes] == [
            ("Root", 0, 2), ("Child", 1, 0), ("Sibling", 1, 0),
        ]
        assert report.metrics["mif"].value == pytest.approx(3 / 7)
        assert report.metrics["ahf"].defined is False
        assert report.metrics["ahf"].value is None

    def test_inspect(self, schema_file):
        analyzer = ClassMetricsAnalyzer(schema_file, MoodConfig(language="schema"))
        breakdown = analyzer.inspect("Child")
        assert [m.name for m in breakdown.overridden_methods] == ["a"]
        with pytest.raises(UnknownClassError):
            analyzer.inspect("Missing")

    def test_python_source_with_external_base(self, temp_dir):
        source_file = temp_dir / "workers.py"
        source_file.write_text(PYTHON_SOURCE)

        report = ClassMetricsAnalyzer(source_file, MoodConfig(language="python")).analyze()
        summaries = {c.name: c for c in report.classes}
        assert summaries["Base"].depth == 0
        assert summaries["Base"].base is None
        assert summaries["Worker"].depth == 1
        # Worker overrides run and inherits __init__: mif = 1 / (2 + 3)
        assert report.metrics["mif"].numerator == 1
        assert report.metrics["mif"].denominator == 5
        assert report.metrics["ahf"].value == pytest.approx(0.5)

    def test_unresolved_base_error_policy(self, temp_dir):
        source_file = temp_dir / "workers.py"
        source_file.write_text(PYTHON_SOURCE)
        config = MoodConfig(language="python", unresolved_bases="error")
        with pytest.raises(UnresolvedBaseClassError):
            ClassMetricsAnalyzer(source_file, config).analyze()

    def test_signature_member_key(self, temp_dir):
        path = temp_dir / "classes.yaml"
        path.write_text(
            "classes:\n"
            "  - name: A\n"
            "    methods: [{name: m, signature: '()'}]\n"
            "  - name: B\n"
            "    extends: A\n"
            "    methods: [{name: m, signature: '(x)'}]\n"
        )
        by_name = ClassMetricsAnalyzer(path, MoodConfig(language="schema")).inspect("B")
        by_signature = ClassMetricsAnalyzer(path, MoodConfig(language="schema", member_key="signature")).inspect("B")
        assert len(by_name.overridden_methods) == 1
        assert by_signature.overridden_methods == ()

    def test_missing_path(self, temp_dir):
        analyzer = ClassMetricsAnalyzer(temp_dir / "nope", MoodConfig(language="schema"))
        with pytest.raises(MoodMetricsError):
            analyzer.load_classes()

    def test_export_report_formats(self, schema_file, temp_dir):
        analyzer = ClassMetricsAnalyzer(schema_file, MoodConfig(language="schema", precision=3))
        report = analyzer.analyze()

        json_path = temp_dir / "report.json"
        analyzer.export_report(report, json_path, "json")
        data = json.loads(json_path.read_text())
        assert data["metrics"]["aif"]["value"] is None
        assert data["metrics"]["pof"]["numerator"] == 1

        md_path = temp_dir / "report.md"
        analyzer.export_report(report, md_path, "markdown")
        assert "| MIF (Method Inheritance Factor) | 0.429 | 3 | 7 |" in md_path.read_text()

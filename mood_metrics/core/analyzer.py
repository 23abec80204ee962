"""
Pipeline orchestration: load classes, build the hierarchy, compute metrics.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from .aggregation import compute_metrics
from .classification import ClassBreakdown, MemberClassifier, get_member_key
from .config import MoodConfig
from .errors import MoodMetricsError, UnsupportedLanguageError
from .hierarchy import ClassHierarchy
from .models import ClassElement
from .report import MetricsReport, build_report, render
from .schema_loader import load_class_set, load_class_sets
from .treesitter.python_extractor import TreeSitterPythonExtractor
from .treesitter.typescript_extractor import TreeSitterTypeScriptExtractor


class ClassMetricsAnalyzer:
    """Runs the loader -> hierarchy -> metrics -> report pipeline for one path."""

    def __init__(self, path: Path, config: Optional[MoodConfig] = None):
        """
        Args:
            path: Source file, schema document, or directory to analyze.
            config: Resolved configuration. Defaults are used when omitted.
        """
        self.path = Path(path)
        self.config = config or MoodConfig()
        self.language = self.config.language
        self.member_key = get_member_key(self.config.member_key)
        self.extractor = self._get_extractor()

        self.classes: List[ClassElement] = []
        self.hierarchy: Optional[ClassHierarchy] = None
        self.classifier: Optional[MemberClassifier] = None

    def _get_extractor(self):
        """Get the class extractor for the configured language, or None for schema input."""
        if self.language == "typescript":
            return TreeSitterTypeScriptExtractor(ignored_patterns=self.config.ignored_patterns)
        elif self.language == "python":
            return TreeSitterPythonExtractor(ignored_patterns=self.config.ignored_patterns)
        elif self.language == "schema":
            return None
        raise UnsupportedLanguageError(self.language)

    def load_classes(self) -> List[ClassElement]:
        if not self.path.exists():
            raise MoodMetricsError(f"Path does not exist: {self.path}")

        start_time = time.time()
        if self.extractor is None:
            classes = load_class_sets(self.path) if self.path.is_dir() else load_class_set(self.path)
        else:
            classes = self.extractor.extract(self.path)
            metrics = self.extractor.performance_metrics
            if metrics["failed_files"]:
                logging.warning(f"{int(metrics['failed_files'])} files could not be read and were skipped")

        logging.info(f"Loaded {len(classes)} classes from {self.path} in {time.time() - start_time:.2f}s")
        self.classes = classes
        return classes

    def build_hierarchy(self, classes: List[ClassElement]) -> ClassHierarchy:
        """
        Build the class hierarchy, applying the unresolved-base policy.

        With ``unresolved_bases: ignore`` a base that is not defined in the
        class set (``object``, a library class) is dropped and the class
        becomes a root. With ``error`` the reference is kept and the
        hierarchy raises ``UnresolvedBaseClassError``.
        """
        if self.config.unresolved_bases == "ignore":
            known = {c.name for c in classes}
            resolved: List[ClassElement] = []
            for cls in classes:
                if cls.extends and cls.extends not in known:
                    logging.info(f"Treating '{cls.name}' as a root: base '{cls.extends}' is not in the class set")
                    cls = cls.with_base(None)
                resolved.append(cls)
            classes = resolved

        self.hierarchy = ClassHierarchy(classes)
        self.classifier = MemberClassifier(self.hierarchy, member_key=self.member_key, memoize=self.config.memoize)
        return self.hierarchy

    def _ensure_classifier(self) -> MemberClassifier:
        if self.classifier is None:
            self.build_hierarchy(self.load_classes())
        return self.classifier

    def analyze(self) -> MetricsReport:
        """
        Run the complete pipeline.

        Returns:
            The metrics report for every class found under the path.
        """
        logging.info(f"Starting analysis of {self.language} input at {self.path}")
        classifier = self._ensure_classifier()

        metrics = compute_metrics(classifier)
        report = build_report(classifier, metrics, language=self.language, source=str(self.path))
        logging.info(f"Analysis complete: {report.class_count} classes")
        return report

    def inspect(self, class_name: str) -> ClassBreakdown:
        """Classification breakdown of one class."""
        return self._ensure_classifier().classify(class_name)

    def export_report(self, report: MetricsReport, output_path: Path, output_format: Optional[str] = None) -> None:
        output_format = output_format or self.config.output_format
        text = render(report, output_format, self.config.precision)
        try:
            Path(output_path).write_text(text, encoding="utf-8")
        except OSError as e:
            raise MoodMetricsError(f"Error writing report to {output_path}: {e}") from e
        logging.info(f"Report exported to {output_path}")

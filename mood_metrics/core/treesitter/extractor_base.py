"""
Shared Tree-sitter class extractor base.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm
from tree_sitter import Tree

from ..errors import MoodMetricsError
from ..models import ClassElement
from ..utils import collect_source_files
from .parser import parse_source

Adapter = Callable[[Tree, str, str], List[ClassElement]]

SUFFIX_LANGUAGES = {
    ".py": "python",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".yaml": "schema",
    ".yml": "schema",
    ".json": "schema",
}


def _language_for_suffix(suffix: str) -> str:
    return SUFFIX_LANGUAGES.get(suffix, "typescript|python|schema")


@dataclass
class TreeSitterExtractorBase:
    language_id: str
    suffixes: Tuple[str, ...] = ()
    ignored_patterns: Sequence[str] = ()
    project_root: Optional[Path] = None
    enable_performance_monitoring: bool = True
    performance_metrics: Dict[str, float] = field(default_factory=lambda: {
        "total_files": 0,
        "total_classes": 0,
        "failed_files": 0,
        "processing_time": 0.0,
        "parse_time": 0.0,
        "io_time": 0.0,
    })

    def _adapter(self) -> Adapter:
        raise NotImplementedError

    def _language_for(self, file_path: Path) -> str:
        return self.language_id

    def _parse(self, source: str, language_id: Optional[str] = None) -> Tree:
        return parse_source(source, language_id or self.language_id)

    def extract_from_source(self, source: str, file_path: str = "<string>", language_id: Optional[str] = None) -> List[ClassElement]:
        tree = self._parse(source, language_id)
        return self._adapter()(tree, source, file_path)

    def extract_from_file(self, file_path: Path) -> List[ClassElement]:
        if not file_path.is_file() or file_path.suffix not in self.suffixes:
            return []
        start_time = time.time()
        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.performance_metrics["total_files"] += 1
            self.performance_metrics["failed_files"] += 1
            logging.warning(f"Skipping {file_path}: {e}")
            return []
        io_time = time.time() - start_time

        parse_start = time.time()
        language_id = self._language_for(file_path)
        classes = self.extract_from_source(source, str(file_path.resolve()), language_id)
        parse_time = time.time() - parse_start

        if self.enable_performance_monitoring:
            self.performance_metrics["total_files"] += 1
            self.performance_metrics["total_classes"] += len(classes)
            self.performance_metrics["processing_time"] += time.time() - start_time
            self.performance_metrics["parse_time"] += parse_time
            self.performance_metrics["io_time"] += io_time

        logging.debug(f"Extracted {len(classes)} classes from {file_path}")
        return classes

    def extract_from_directory(self, directory: Path) -> List[ClassElement]:
        self.project_root = directory.resolve()
        files = collect_source_files(directory, self.suffixes, self.ignored_patterns)
        logging.info(f"Found {len(files)} {self.language_id} files to analyze (after filtering ignore patterns).")

        classes: List[ClassElement] = []
        show_progress = len(files) > 1 and sys.stderr.isatty()
        for file_path in tqdm(files, desc="Extracting classes", disable=not show_progress):
            classes.extend(self.extract_from_file(file_path))
        return classes

    def extract(self, path: Path) -> List[ClassElement]:
        """Extract classes from a single file or a directory tree."""
        if path.is_dir():
            return self.extract_from_directory(path)
        if path.suffix not in self.suffixes:
            raise MoodMetricsError(
                f"Cannot read '{path.name}' as {self.language_id}: expected {', '.join(self.suffixes)} files",
                hint=f"Pass --language {_language_for_suffix(path.suffix)} for {path.suffix or 'extension-less'} files.",
            )
        return self.extract_from_file(path)

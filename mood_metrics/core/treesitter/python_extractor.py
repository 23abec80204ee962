"""
Tree-sitter-based Python class extractor.
"""

from __future__ import annotations

from typing import Sequence

from .extractor_base import Adapter, TreeSitterExtractorBase
from .python_adapter import extract_elements


class TreeSitterPythonExtractor(TreeSitterExtractorBase):
    def __init__(self, ignored_patterns: Sequence[str] = (), enable_performance_monitoring: bool = True):
        super().__init__(
            language_id="python",
            suffixes=(".py",),
            ignored_patterns=tuple(ignored_patterns),
            enable_performance_monitoring=enable_performance_monitoring,
        )

    def _adapter(self) -> Adapter:
        return extract_elements

"""
Tree-sitter-based TypeScript class extractor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .extractor_base import Adapter, TreeSitterExtractorBase
from .typescript_adapter import extract_elements


class TreeSitterTypeScriptExtractor(TreeSitterExtractorBase):
    def __init__(self, ignored_patterns: Sequence[str] = (), enable_performance_monitoring: bool = True):
        super().__init__(
            language_id="typescript",
            suffixes=(".ts", ".tsx"),
            ignored_patterns=tuple(ignored_patterns),
            enable_performance_monitoring=enable_performance_monitoring,
        )

    def _adapter(self) -> Adapter:
        return extract_elements

    def _language_for(self, file_path: Path) -> str:
        return "tsx" if file_path.suffix == ".tsx" else "typescript"

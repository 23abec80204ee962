"""
Tree-sitter integration for mood-metrics.

Provides grammar loading and parsing shared by the class extractors.
"""

from .parser import get_language, get_parser, parse_source

__all__ = [
    "get_language",
    "get_parser",
    "parse_source",
]

"""
Tree-sitter language and parser facade with cached instances.
"""

from functools import lru_cache
from typing import Callable, Dict

from tree_sitter import Language, Parser, Tree
from tree_sitter_python import language as py_language
from tree_sitter_typescript import language_tsx, language_typescript

from ..errors import UnsupportedLanguageError

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "python": py_language,
    "typescript": language_typescript,
    "tsx": language_tsx,
}


@lru_cache(maxsize=3)
def get_language(language_id: str) -> Language:
    grammar = _GRAMMARS.get(language_id)
    if grammar is None:
        raise UnsupportedLanguageError(language_id)
    return Language(grammar())


@lru_cache(maxsize=3)
def get_parser(language_id: str) -> Parser:
    return Parser(get_language(language_id))


def parse_source(source: str, language_id: str) -> Tree:
    parser = get_parser(language_id)
    return parser.parse(bytes(source, "utf-8"))

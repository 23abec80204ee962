"""
Pytest configuration and fixtures for Python extraction tests.
"""

from pathlib import Path

import pytest

from mood_metrics.core.treesitter.python_extractor import TreeSitterPythonExtractor


@pytest.fixture
def python_extractor() -> TreeSitterPythonExtractor:
    """Create a TreeSitterPythonExtractor instance for testing."""
    return TreeSitterPythonExtractor()


@pytest.fixture
def sample_python_source() -> str:
    return '''
class Mixin:
    pass


class Base:
    """A base class with every kind of member."""

    kind = "base"
    _registry = {}
    count: int = 0

    def __init__(self, name):
        self.name = name
        self.__secret = 1
        self._cache = None
        self.name = "again"

    def run(self):
        pass

    def __helper(self):
        pass

    @property
    def label(self):
        return self.name

    @label.setter
    def label(self, value):
        self.name = value

    @staticmethod
    def build():
        return Base("x")


class Child(Base, Mixin, metaclass=type):
    def run(self):
        def local():
            pass
        return local()

    async def fetch(this):
        pass


def outer():
    class Inner(Child):
        pass
    return Inner
'''


@pytest.fixture
def sample_python_file(temp_dir: Path, sample_python_source: str) -> Path:
    """Create a sample Python file for testing."""
    py_file = temp_dir / "sample.py"
    py_file.write_text(sample_python_source)
    return py_file

"""
Core data models for classes and members extracted from source code.

This module contains pure data structures for representing a class set
without any traversal logic. Instances are frozen so a loaded class set can
be shared by every metric computation as a read-only snapshot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Visibility(str, Enum):
    """Member visibility. Only private vs. non-private affects the metrics."""
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"  # protected or any other non-private modifier

    @classmethod
    def parse(cls, value: Optional[str]) -> "Visibility":
        if not value:
            return cls.PUBLIC
        value = value.strip().lower()
        if value == "private":
            return cls.PRIVATE
        if value == "public":
            return cls.PUBLIC
        return cls.PROTECTED


@dataclass(frozen=True)
class MemberElement:
    """A method or attribute declared directly on a class."""
    name: str
    kind: str = "method"  # 'method' or 'attribute'
    visibility: Visibility = Visibility.PUBLIC
    signature: Optional[str] = None  # parameter list text, used by signature_key only
    is_static: bool = False
    line: int = 0

    @property
    def is_private(self) -> bool:
        return self.visibility is Visibility.PRIVATE


@dataclass(frozen=True)
class ClassElement:
    """Represents a class node in a single-inheritance forest."""
    name: str
    methods: Tuple[MemberElement, ...] = ()
    attributes: Tuple[MemberElement, ...] = ()
    extends: Optional[str] = None  # name of the base class, None for a root
    kind: str = "class"
    file_path: str = ""
    line_start: int = 0
    line_end: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        # Accept lists from loaders but store tuples
        if not isinstance(self.methods, tuple):
            object.__setattr__(self, "methods", tuple(self.methods))
        if not isinstance(self.attributes, tuple):
            object.__setattr__(self, "attributes", tuple(self.attributes))

    def with_base(self, extends: Optional[str]) -> "ClassElement":
        """Return a copy of this class with a different base reference."""
        return ClassElement(
            name=self.name,
            methods=self.methods,
            attributes=self.attributes,
            extends=extends,
            kind=self.kind,
            file_path=self.file_path,
            line_start=self.line_start,
            line_end=self.line_end,
            metadata=dict(self.metadata),
        )

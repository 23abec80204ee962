"""
Structural queries over a single-inheritance class set.

``ClassHierarchy`` validates a class set once (unique names, resolvable base
references, no cycles) and builds a name index plus a base -> children reverse
index. After construction every accessor is a pure read of that snapshot.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import (
    DuplicateClassError,
    InheritanceCycleError,
    UnknownClassError,
    UnresolvedBaseClassError,
)
from .models import ClassElement, MemberElement

ClassRef = Union[ClassElement, str]


class ClassHierarchy:
    """Immutable view of a class set connected by single inheritance."""

    def __init__(self, classes: Iterable[ClassElement]):
        self._classes: Tuple[ClassElement, ...] = tuple(classes)
        self._by_name: Dict[str, ClassElement] = self._index_by_name(self._classes)
        self._check_bases()
        self._check_cycles()
        self._children: Dict[str, List[ClassElement]] = self._index_children()
        logging.debug(
            "Class hierarchy: classes=%d roots=%d",
            len(self._classes),
            sum(1 for c in self._classes if c.extends is None),
        )

    # --- Construction -----------------------------------------------------

    @staticmethod
    def _index_by_name(classes: Tuple[ClassElement, ...]) -> Dict[str, ClassElement]:
        counts = Counter(c.name for c in classes)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateClassError(duplicates)
        return {c.name: c for c in classes}

    def _check_bases(self) -> None:
        for cls in self._classes:
            if cls.extends is not None and cls.extends not in self._by_name:
                raise UnresolvedBaseClassError(cls.name, cls.extends)

    def _check_cycles(self) -> None:
        # Out-degree is at most one, so each chain is a simple walk
        acyclic: set[str] = set()
        for cls in self._classes:
            path: List[str] = []
            on_path: set[str] = set()
            current: Optional[str] = cls.name
            while current is not None and current not in acyclic:
                if current in on_path:
                    start = path.index(current)
                    raise InheritanceCycleError(path[start:] + [current])
                on_path.add(current)
                path.append(current)
                current = self._by_name[current].extends
            acyclic.update(path)

    def _index_children(self) -> Dict[str, List[ClassElement]]:
        children: Dict[str, List[ClassElement]] = {c.name: [] for c in self._classes}
        for cls in self._classes:
            if cls.extends is not None:
                children[cls.extends].append(cls)
        return children

    # --- Collection protocol ---------------------------------------------

    @property
    def classes(self) -> Tuple[ClassElement, ...]:
        """Classes in input order."""
        return self._classes

    def __iter__(self) -> Iterator[ClassElement]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ClassElement):
            return self._by_name.get(item.name) == item
        if isinstance(item, str):
            return item in self._by_name
        return False

    def get(self, ref: ClassRef) -> ClassElement:
        """Resolve a class or class name to the class held by this hierarchy."""
        name = ref.name if isinstance(ref, ClassElement) else ref
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownClassError(name) from None

    def roots(self) -> List[ClassElement]:
        return [c for c in self._classes if c.extends is None]

    # --- Accessors --------------------------------------------------------

    def local_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return self.get(ref).methods

    def local_attributes(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return self.get(ref).attributes

    def base_class(self, ref: ClassRef) -> Optional[ClassElement]:
        cls = self.get(ref)
        if cls.extends is None:
            return None
        return self._by_name[cls.extends]

    def derived_classes(self, ref: ClassRef) -> List[ClassElement]:
        """Direct subclasses in input order."""
        return list(self._children[self.get(ref).name])

    def inheritance_depth(self, ref: ClassRef) -> int:
        return len(self.ancestor_chain(ref))

    def ancestor_chain(self, ref: ClassRef) -> List[ClassElement]:
        """Ancestors from the immediate base class up to the root."""
        chain: List[ClassElement] = []
        base = self.base_class(ref)
        while base is not None:
            chain.append(base)
            base = self.base_class(base)
        return chain

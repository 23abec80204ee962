"""
Per-class member classification.

Derives, for one class of a ``ClassHierarchy``, the inherited, overridden,
new and default-inherited members and the effective member set. Members are
compared through a ``MemberKey``; the default compares names only, so
overloads of one method name count as a single member.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from .hierarchy import ClassHierarchy, ClassRef
from .models import ClassElement, MemberElement

MemberKey = Callable[[MemberElement], Hashable]


def name_key(member: MemberElement) -> Hashable:
    return member.name


def signature_key(member: MemberElement) -> Hashable:
    return (member.name, member.signature or "")


MEMBER_KEYS: Dict[str, MemberKey] = {
    "name": name_key,
    "signature": signature_key,
}


def get_member_key(name: str) -> MemberKey:
    try:
        return MEMBER_KEYS[name]
    except KeyError:
        raise ValueError(f"Unknown member key '{name}', expected one of: {', '.join(MEMBER_KEYS)}") from None


@dataclass(frozen=True)
class ClassBreakdown:
    """All classification results for one class, for reporting."""
    name: str
    base: Optional[str]
    depth: int
    ancestors: Tuple[str, ...]
    children: Tuple[str, ...]
    local_methods: Tuple[MemberElement, ...]
    local_attributes: Tuple[MemberElement, ...]
    inherited_methods: Tuple[MemberElement, ...]
    inherited_attributes: Tuple[MemberElement, ...]
    overridden_methods: Tuple[MemberElement, ...]
    new_methods: Tuple[MemberElement, ...]
    inherited_by_default_methods: Tuple[MemberElement, ...]
    inherited_by_default_attributes: Tuple[MemberElement, ...]
    all_methods: Tuple[MemberElement, ...]
    all_private_methods: Tuple[MemberElement, ...]
    all_private_attributes: Tuple[MemberElement, ...]

    @property
    def children_count(self) -> int:
        return len(self.children)


class MemberClassifier:
    """
    Classifies members of classes in a hierarchy.

    With ``memoize`` on, inherited member lists are cached per class on this
    instance. The cache never outlives the classifier.
    """

    def __init__(self, hierarchy: ClassHierarchy, member_key: MemberKey = name_key, memoize: bool = True):
        self.hierarchy = hierarchy
        self.member_key = member_key
        self.memoize = memoize
        self._inherited_cache: Dict[Tuple[str, str], Tuple[MemberElement, ...]] = {}

    # --- Helpers ----------------------------------------------------------

    def _keys(self, members: Sequence[MemberElement]) -> set:
        return {self.member_key(m) for m in members}

    def _unique(self, members: Sequence[MemberElement]) -> Tuple[MemberElement, ...]:
        """First declaration of each member key, in declaration order."""
        seen = set()
        unique: List[MemberElement] = []
        for member in members:
            key = self.member_key(member)
            if key not in seen:
                seen.add(key)
                unique.append(member)
        return tuple(unique)

    def local_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        """Declared methods, repeated keys collapsed onto the first declaration."""
        return self._unique(self.hierarchy.local_methods(ref))

    def local_attributes(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return self._unique(self.hierarchy.local_attributes(ref))

    def _collect_inherited(self, ref: ClassRef, kind: str) -> Tuple[MemberElement, ...]:
        cls = self.hierarchy.get(ref)
        cache_key = (cls.name, kind)
        if self.memoize and cache_key in self._inherited_cache:
            return self._inherited_cache[cache_key]

        collected: List[MemberElement] = []
        seen = set()
        # Nearest ancestor first, so its declaration shadows farther ones
        for ancestor in self.hierarchy.ancestor_chain(cls):
            local = ancestor.methods if kind == "method" else ancestor.attributes
            for member in local:
                key = self.member_key(member)
                if key not in seen:
                    seen.add(key)
                    collected.append(member)

        result = tuple(collected)
        if self.memoize:
            self._inherited_cache[cache_key] = result
        return result

    # --- Classification ---------------------------------------------------

    def inherited_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return self._collect_inherited(ref, "method")

    def inherited_attributes(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return self._collect_inherited(ref, "attribute")

    def overridden_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        inherited = self._keys(self.inherited_methods(ref))
        return tuple(m for m in self.local_methods(ref) if self.member_key(m) in inherited)

    def new_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        overridden = self._keys(self.overridden_methods(ref))
        return tuple(m for m in self.local_methods(ref) if self.member_key(m) not in overridden)

    def inherited_by_default_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        local = self._keys(self.local_methods(ref))
        return tuple(m for m in self.inherited_methods(ref) if self.member_key(m) not in local)

    def inherited_by_default_attributes(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        local = self._keys(self.local_attributes(ref))
        return tuple(m for m in self.inherited_attributes(ref) if self.member_key(m) not in local)

    def all_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        """Local methods followed by the inherited methods the class does not redeclare."""
        return self.local_methods(ref) + self.inherited_by_default_methods(ref)

    def all_private_methods(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        return tuple(m for m in self.all_methods(ref) if m.is_private)

    def all_private_attributes(self, ref: ClassRef) -> Tuple[MemberElement, ...]:
        """
        Private attributes counted for AHF.

        Unlike ``all_private_methods`` this looks at local attributes only and
        does not fold in inherited ones. Keep the two consistent here if that
        ever changes.
        """
        return tuple(a for a in self.local_attributes(ref) if a.is_private)

    def children_count(self, ref: ClassRef) -> int:
        return len(self.hierarchy.derived_classes(ref))

    def classify(self, ref: ClassRef) -> ClassBreakdown:
        cls: ClassElement = self.hierarchy.get(ref)
        return ClassBreakdown(
            name=cls.name,
            base=cls.extends,
            depth=self.hierarchy.inheritance_depth(cls),
            ancestors=tuple(a.name for a in self.hierarchy.ancestor_chain(cls)),
            children=tuple(c.name for c in self.hierarchy.derived_classes(cls)),
            local_methods=self.local_methods(cls),
            local_attributes=self.local_attributes(cls),
            inherited_methods=self.inherited_methods(cls),
            inherited_attributes=self.inherited_attributes(cls),
            overridden_methods=self.overridden_methods(cls),
            new_methods=self.new_methods(cls),
            inherited_by_default_methods=self.inherited_by_default_methods(cls),
            inherited_by_default_attributes=self.inherited_by_default_attributes(cls),
            all_methods=self.all_methods(cls),
            all_private_methods=self.all_private_methods(cls),
            all_private_attributes=self.all_private_attributes(cls),
        )

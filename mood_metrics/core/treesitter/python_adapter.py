"""
Tree-sitter adapter for Python source.

Produces ClassElement objects from Tree-sitter nodes. Python has no access
modifiers, so visibility follows naming convention: ``__name`` (not a dunder)
is private, ``_name`` is protected, anything else is public.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from tree_sitter import Node, Tree

from ..models import ClassElement, MemberElement, Visibility

STATIC_DECORATORS = {"staticmethod", "classmethod"}
TYPING_BASES = {"Generic", "Protocol", "ABC", "NamedTuple", "TypedDict"}


def extract_elements(tree: Tree, source: str, file_path: str) -> List[ClassElement]:
    elements: List[ClassElement] = []
    _walk_module(tree.root_node, file_path, elements)
    return elements


def _walk_module(node: Node, file_path: str, elements: List[ClassElement]) -> None:
    for child in node.children:
        if child.type == "class_definition":
            elements.append(_build_class(child, file_path))
        # Recurse to find nested and decorated classes
        _walk_module(child, file_path, elements)


def visibility_from_name(name: str) -> Visibility:
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_") and not name.startswith("__"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _build_class(node: Node, file_path: str) -> ClassElement:
    name = _node_text(node.child_by_field_name("name")) or "<anonymous>"
    start_line, end_line = _line_span(node)
    methods = _extract_class_methods(node, name)
    attributes = _extract_class_attributes(node, name)
    bases = _extract_superclasses(node)

    return ClassElement(
        name=name,
        kind="class",
        file_path=file_path,
        line_start=start_line,
        line_end=end_line,
        methods=methods,
        attributes=attributes,
        extends=_primary_base(bases),
        metadata={"bases": bases},
    )


def _iter_body_functions(class_node: Node) -> Iterator[Tuple[Node, List[str]]]:
    body = class_node.child_by_field_name("body")
    if not body:
        return
    for child in body.named_children:
        if child.type in {"function_definition", "async_function_definition"}:
            yield child, []
        elif child.type == "decorated_definition":
            definition = child.child_by_field_name("definition")
            if definition is not None and definition.type in {"function_definition", "async_function_definition"}:
                decorators = [
                    _node_text(d).lstrip("@").strip()
                    for d in child.named_children
                    if d.type == "decorator"
                ]
                yield definition, decorators


def _extract_class_methods(node: Node, class_name: str) -> List[MemberElement]:
    methods: Dict[str, MemberElement] = {}
    for func, decorators in _iter_body_functions(node):
        name = _node_text(func.child_by_field_name("name"))
        if not name:
            continue
        if name in methods:
            # property setters and redefinitions share the first declaration
            logging.debug(f"Ignoring duplicate method {class_name}.{name}")
            continue
        params = func.child_by_field_name("parameters")
        methods[name] = MemberElement(
            name=name,
            kind="method",
            visibility=visibility_from_name(name),
            signature=_node_text(params) if params else "()",
            is_static=any(d in STATIC_DECORATORS for d in decorators),
            line=func.start_point[0] + 1,
        )
    return list(methods.values())


def _extract_class_attributes(node: Node, class_name: str) -> List[MemberElement]:
    attributes: Dict[str, MemberElement] = {}

    def _add(name_node: Node, is_static: bool) -> None:
        name = _node_text(name_node)
        if name and name not in attributes:
            attributes[name] = MemberElement(
                name=name,
                kind="attribute",
                visibility=visibility_from_name(name),
                is_static=is_static,
                line=name_node.start_point[0] + 1,
            )

    body = node.child_by_field_name("body")
    if not body:
        return []

    for child in body.named_children:
        if child.type != "expression_statement":
            continue
        for assignment in child.named_children:
            if assignment.type != "assignment":
                continue
            for target in _assignment_targets(assignment.child_by_field_name("left")):
                if target.type == "identifier":
                    _add(target, is_static=True)

    for func, _ in _iter_body_functions(node):
        if _node_text(func.child_by_field_name("name")) != "__init__":
            continue
        self_name = _first_parameter(func)
        if not self_name:
            continue
        for assignment in _walk(func.child_by_field_name("body")):
            if assignment.type not in {"assignment", "augmented_assignment"}:
                continue
            for target in _assignment_targets(assignment.child_by_field_name("left")):
                if target.type != "attribute":
                    continue
                obj = target.child_by_field_name("object")
                if obj is not None and obj.type == "identifier" and _node_text(obj) == self_name:
                    attr = target.child_by_field_name("attribute")
                    if attr is not None:
                        _add(attr, is_static=False)

    return list(attributes.values())


def _assignment_targets(node: Optional[Node]) -> List[Node]:
    if node is None:
        return []
    if node.type in {"pattern_list", "tuple_pattern", "list_pattern"}:
        targets: List[Node] = []
        for child in node.named_children:
            targets.extend(_assignment_targets(child))
        return targets
    return [node]


def _first_parameter(func: Node) -> Optional[str]:
    params = func.child_by_field_name("parameters")
    if not params:
        return None
    for child in params.named_children:
        if child.type == "identifier":
            return _node_text(child)
        if child.type in {"typed_parameter", "default_parameter", "typed_default_parameter"}:
            name = child.child_by_field_name("name")
            if name is None:
                name = next((c for c in child.named_children if c.type == "identifier"), None)
            return _node_text(name) or None
        return None
    return None


def _extract_superclasses(node: Node) -> List[str]:
    bases_node = node.child_by_field_name("superclasses")
    if not bases_node:
        return []
    bases: List[str] = []
    for child in bases_node.named_children:
        if child.type in {"identifier", "attribute"}:
            bases.append(_node_text(child))
        elif child.type == "subscript":
            # Generic[T] / Base[int]
            bases.append(_node_text(child.child_by_field_name("value")))
    return [b for b in bases if b]


def _primary_base(bases: List[str]) -> Optional[str]:
    """First base that is not a typing or abc marker such as Generic[T] or ABC."""
    for base in bases:
        if base.rsplit(".", 1)[-1] not in TYPING_BASES:
            return base
    return None


def _line_span(node: Node) -> Tuple[int, int]:
    return node.start_point[0] + 1, node.end_point[0] + 1


def _node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _walk(node: Optional[Node]) -> Iterator[Node]:
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))

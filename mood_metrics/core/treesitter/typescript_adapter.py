"""
Tree-sitter adapter for TypeScript/TSX source.

Produces ClassElement objects with their declared methods and properties.
Constructors, get/set accessors and overload signatures are not methods;
every field declaration is a property, whatever its initializer.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node, Tree

from ..models import ClassElement, MemberElement, Visibility

CLASS_NODE_TYPES = {"class_declaration", "abstract_class_declaration"}
METHOD_NODE_TYPES = {"method_definition", "abstract_method_signature"}
FIELD_NODE_TYPES = {"public_field_definition"}
ACCESSOR_TOKENS = {"get", "set"}


def extract_elements(tree: Tree, source: str, file_path: str) -> List[ClassElement]:
    elements: List[ClassElement] = []
    _walk(tree.root_node, file_path, elements)
    return elements


def _walk(node: Node, file_path: str, elements: List[ClassElement]) -> None:
    for child in node.children:
        if child.type in CLASS_NODE_TYPES:
            elements.append(_build_class(child, file_path))
            # Classes declared inside method bodies are classes too
            _walk(child, file_path, elements)
        elif child.type in {"interface_declaration", "enum_declaration", "type_alias_declaration"}:
            continue
        else:
            _walk(child, file_path, elements)


def _build_class(node: Node, file_path: str) -> ClassElement:
    name = _node_text(node.child_by_field_name("name")) or "<anonymous>"
    start_line, end_line = _line_span(node)
    methods, attributes = _extract_members(node)
    extends, implements = _extract_heritage(node)

    return ClassElement(
        name=name,
        kind="class",
        file_path=file_path,
        line_start=start_line,
        line_end=end_line,
        methods=methods,
        attributes=attributes,
        extends=extends,
        metadata={
            "typescript_kind": node.type,
            "is_abstract": node.type == "abstract_class_declaration",
            "implements": implements,
        },
    )


def _extract_members(node: Node) -> Tuple[List[MemberElement], List[MemberElement]]:
    body = node.child_by_field_name("body")
    methods: Dict[str, MemberElement] = {}
    attributes: Dict[str, MemberElement] = {}
    if not body:
        return [], []

    class_name = _node_text(node.child_by_field_name("name"))
    for child in body.named_children:
        if child.type in METHOD_NODE_TYPES:
            member = _build_method(child)
            target = methods
        elif child.type in FIELD_NODE_TYPES:
            member = _build_field(child)
            target = attributes
        else:
            continue
        if member is None:
            continue
        if member.name in target:
            logging.debug(f"Ignoring duplicate member {class_name}.{member.name} at line {member.line}")
            continue
        target[member.name] = member
    return list(methods.values()), list(attributes.values())


def _build_method(node: Node) -> Optional[MemberElement]:
    tokens = _modifier_tokens(node)
    if tokens & ACCESSOR_TOKENS:
        return None
    name_node = node.child_by_field_name("name")
    name = _node_text(name_node)
    if not name or name == "constructor":
        return None
    params = node.child_by_field_name("parameters")
    return MemberElement(
        name=name,
        kind="method",
        visibility=_visibility(node, name_node),
        signature=_node_text(params) if params else "()",
        is_static="static" in tokens,
        line=node.start_point[0] + 1,
    )


def _build_field(node: Node) -> Optional[MemberElement]:
    name_node = node.child_by_field_name("name") or node.child_by_field_name("property")
    name = _node_text(name_node)
    if not name:
        return None
    return MemberElement(
        name=name,
        kind="attribute",
        visibility=_visibility(node, name_node),
        is_static="static" in _modifier_tokens(node),
        line=node.start_point[0] + 1,
    )


def _visibility(node: Node, name_node: Optional[Node]) -> Visibility:
    if name_node is not None and name_node.type == "private_property_identifier":
        return Visibility.PRIVATE
    for child in node.children:
        if child.type == "accessibility_modifier":
            return Visibility.parse(_node_text(child))
    return Visibility.PUBLIC


def _modifier_tokens(node: Node) -> set:
    """Anonymous keyword tokens that precede the member name."""
    tokens = set()
    for child in node.children:
        if child.is_named and child.type not in {"accessibility_modifier", "override_modifier", "decorator"}:
            break
        if not child.is_named:
            tokens.add(child.type)
    return tokens


def _extract_heritage(node: Node) -> Tuple[Optional[str], List[str]]:
    extends: Optional[str] = None
    implements: List[str] = []
    for heritage in node.children:
        if heritage.type != "class_heritage":
            continue
        for clause in heritage.named_children:
            if clause.type == "extends_clause" and extends is None:
                target = clause.child_by_field_name("value")
                if target is None and clause.named_children:
                    target = clause.named_children[0]
                extends = _node_text(target) or None
            elif clause.type == "implements_clause":
                implements.extend(_node_text(item) for item in clause.named_children)
    return extends, implements


def _line_span(node: Node) -> Tuple[int, int]:
    return node.start_point[0] + 1, node.end_point[0] + 1


def _node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")

"""
Declarative class-set loader.

Reads a YAML or JSON document describing classes directly, for class sets
that do not come from source code:

    classes:
      - name: Root
        methods:
          - a
          - {name: b, visibility: private}
        attributes: []
      - name: Child
        extends: Root
        methods: [a, c]

A member given as a plain string is a public member with that name.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import SchemaError
from .models import ClassElement, MemberElement, Visibility

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


class MemberSchema(BaseModel):
    name: str
    visibility: str = "public"
    signature: Optional[str] = None
    static: bool = False

    @field_validator("visibility")
    @classmethod
    def _check_visibility(cls, value: str) -> str:
        value = value.lower()
        if value not in {"public", "private", "protected"}:
            raise ValueError("visibility must be public, private or protected")
        return value


class ClassSchema(BaseModel):
    name: str
    extends: Optional[str] = None
    methods: List[Union[str, MemberSchema]] = Field(default_factory=list)
    attributes: List[Union[str, MemberSchema]] = Field(default_factory=list)


class ClassSetSchema(BaseModel):
    classes: List[ClassSchema] = Field(default_factory=list)


def _member(entry: Union[str, MemberSchema], kind: str) -> MemberElement:
    if isinstance(entry, str):
        return MemberElement(name=entry, kind=kind)
    return MemberElement(
        name=entry.name,
        kind=kind,
        visibility=Visibility.parse(entry.visibility),
        signature=entry.signature,
        is_static=entry.static,
    )


def class_set_from_data(data: Any, source: str = "<data>") -> List[ClassElement]:
    """Validate parsed schema data and build ClassElements in document order."""
    if isinstance(data, list):
        data = {"classes": data}
    try:
        schema = ClassSetSchema.model_validate(data or {})
    except ValidationError as e:
        raise SchemaError(f"Invalid class schema in {source}: {e}") from e

    return [
        ClassElement(
            name=cls.name,
            extends=cls.extends,
            methods=[_member(m, "method") for m in cls.methods],
            attributes=[_member(a, "attribute") for a in cls.attributes],
            kind="class",
            file_path=source,
        )
        for cls in schema.classes
    ]


def _read_document(path: Path) -> Any:
    if path.suffix not in SCHEMA_SUFFIXES:
        raise SchemaError(f"Unsupported schema file type: {path}", hint="Use .yaml, .yml or .json.")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Cannot read schema file {path}: {e}") from e

    try:
        return json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaError(f"Cannot parse schema file {path}: {e}") from e


def load_class_set(path: Path) -> List[ClassElement]:
    """Load a class set from a .yaml/.yml/.json file."""
    classes = class_set_from_data(_read_document(path), str(path))
    logging.info(f"Loaded {len(classes)} classes from {path}")
    return classes


def load_class_sets(directory: Path) -> List[ClassElement]:
    """
    Load and concatenate every schema document below a directory, in path
    order. A document is read when it is a list of classes or a mapping with
    a top-level ``classes`` key; anything else is skipped.
    """
    classes: List[ClassElement] = []
    for path in sorted(p for p in directory.rglob("*") if p.is_file() and p.suffix in SCHEMA_SUFFIXES):
        data = _read_document(path)
        if not isinstance(data, list) and not (isinstance(data, dict) and "classes" in data):
            logging.debug(f"Skipping {path}: not a class list and no 'classes' key")
            continue
        found = class_set_from_data(data, str(path))
        logging.info(f"Loaded {len(found)} classes from {path}")
        classes.extend(found)
    return classes

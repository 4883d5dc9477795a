"""Typed view of the DDL declaration trees produced by the external parser.

WHY: The DDL parser emits a generic, deeply-nested tree where every name
hides behind ``nameSpaceItem.parseTreeItem1.name.value`` and declaration
kinds are only distinguishable by a class tag. The normalizer should not
care about that nesting, so this module turns one tree dump into a closed
set of small, typed declaration variants.

HOW: The parser's trees are serialized to JSON (one tree object or a list
of trees per file). Each tree is validated with jsonschema against
tree_schema.json, then every top-level element body is mapped by its
``kind`` tag onto ClassDeclaration, ProtocolDeclaration, or
OtherDeclaration. The original dict is kept on the DeclarationTree so a
tree without protocols can be dumped verbatim for offline inspection.

RULES:
- Declaration is a closed union: ClassDeclaration | ProtocolDeclaration |
  OtherDeclaration. Unknown kinds become OtherDeclaration, never an error
- Missing or null names are read as "" (the normalizer decides what an
  empty name means)
- Parameter direction is kept as the raw integer flag (integral floats
  are converted to int); classification belongs to the normalizer
- A dump that does not match the schema raises TreeFormatError
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema

from ddl_docgen.core.errors import TreeFormatError

_SCHEMA_PATH = Path(__file__).resolve().parent / "tree_schema.json"

CLASS_DECLARATION_KIND = "DDLClassDeclaration"
PROTOCOL_DECLARATION_KIND = "DDLProtocolDeclaration"
RETURN_VALUE_KIND = "DDLReturnValue"


_CACHED_SCHEMA: Dict[str, Any] | None = None


def _get_schema() -> Dict[str, Any]:
    """Load and cache the declaration tree schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


# ---------------------------------------------------------------------------
# Declaration variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TreeParameter:
    """One entry of a method's parameter list, as the parser wrote it."""

    name: str
    type_use: str
    direction: int
    is_return_value: bool = False


@dataclass(frozen=True)
class TreeMethod:
    name: str
    parameters: List[TreeParameter] = field(default_factory=list)


@dataclass(frozen=True)
class TreeMember:
    name: str
    type_use: str


@dataclass(frozen=True)
class ClassDeclaration:
    """A class-like declaration: a named structure with ordered members."""

    name: str
    parent_name: str
    members: List[TreeMember] = field(default_factory=list)


@dataclass(frozen=True)
class ProtocolDeclaration:
    """A protocol-like declaration: an optionally named list of methods."""

    name: str
    methods: List[TreeMethod] = field(default_factory=list)


@dataclass(frozen=True)
class OtherDeclaration:
    """Any element the documentation does not cover (kept for completeness)."""

    kind: str


Declaration = Union[ClassDeclaration, ProtocolDeclaration, OtherDeclaration]


@dataclass
class DeclarationTree:
    """One parsed DDL tree.

    Attributes:
        elements: Top-level declarations of the root namespace, in source order.
        raw: The dump this tree was built from, kept for the non-protocol
             side artifact.
    """

    elements: List[Declaration]
    raw: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Dict → variant mapping
# ---------------------------------------------------------------------------


def _value(name_value: Dict[str, Any] | None) -> str:
    if not name_value:
        return ""
    return name_value.get("value") or ""


def _declared_name(declaration: Dict[str, Any] | None) -> str:
    """Read ``nameSpaceItem.parseTreeItem1.name.value`` with "" for gaps."""
    if not declaration:
        return ""
    item = declaration.get("nameSpaceItem") or {}
    tree_item = item.get("parseTreeItem1") or {}
    return _value(tree_item.get("name"))


def _type_use(body: Dict[str, Any]) -> str:
    return _value(body["declarationUse"].get("name"))


def _class_from_body(body: Dict[str, Any]) -> ClassDeclaration:
    members = [
        TreeMember(
            name=_declared_name(element["body"]),
            type_use=_type_use(element["body"]),
        )
        for element in body["classMembers"]["elements"]
    ]
    return ClassDeclaration(
        name=_declared_name(body["typeDeclaration"]["declaration"]),
        parent_name=_value(body.get("parentClassName")),
        members=members,
    )


def _parameter_from_body(body: Dict[str, Any]) -> TreeParameter:
    return TreeParameter(
        name=_declared_name(body["variable"]),
        type_use=_type_use(body),
        # jsonschema accepts integral floats such as 1.0 as integers
        direction=int(body.get("type", 0)),
        is_return_value=body.get("kind") == RETURN_VALUE_KIND,
    )


def _protocol_from_body(body: Dict[str, Any]) -> ProtocolDeclaration:
    methods = []
    for element in body["methods"]["elements"]:
        method = element["body"]
        methods.append(TreeMethod(
            name=_declared_name(method["methodDeclaration"]["declaration"]),
            parameters=[
                _parameter_from_body(parameter["body"])
                for parameter in method["parameters"]["elements"]
            ],
        ))
    return ProtocolDeclaration(
        name=_declared_name(body.get("declaration")),
        methods=methods,
    )


def _declaration_from_body(body: Dict[str, Any] | None) -> Declaration:
    kind = (body or {}).get("kind", "")
    if kind == CLASS_DECLARATION_KIND:
        return _class_from_body(body)
    if kind == PROTOCOL_DECLARATION_KIND:
        return _protocol_from_body(body)
    return OtherDeclaration(kind=kind)


def tree_from_dict(data: Dict[str, Any]) -> DeclarationTree:
    """Validate one tree dump and build its typed view.

    Args:
        data: A single tree object as serialized from the parser.

    Returns:
        DeclarationTree with one variant per root namespace element.

    Raises:
        TreeFormatError: If the dump does not match tree_schema.json.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        path = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise TreeFormatError(
            "Invalid declaration tree at {}: {}".format(path, exc.message)
        ) from exc

    elements = [
        _declaration_from_body(element.get("body"))
        for element in data["rootNamespace"]["elements"]
    ]
    return DeclarationTree(elements=elements, raw=data)


def load_trees(path: str | Path) -> List[DeclarationTree]:
    """Load every tree from a JSON dump file.

    RULES:
    - The file holds either one tree object or a list of tree objects
    - Trees are returned in file order
    - Non-UTF-8 bytes, invalid JSON, or an invalid tree raise TreeFormatError
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise TreeFormatError("{} is not UTF-8 text: {}".format(path, exc)) from exc
    except json.JSONDecodeError as exc:
        raise TreeFormatError("{} is not valid JSON: {}".format(path, exc)) from exc

    if isinstance(data, list):
        return [tree_from_dict(item) for item in data]
    return [tree_from_dict(data)]


def dump_tree(tree: DeclarationTree) -> str:
    """Serialize a tree back to pretty-printed JSON for offline inspection."""
    return json.dumps(tree.raw, indent=4)

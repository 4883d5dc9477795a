"""Type resolution: raw DDL type tokens → canonical, cross-linked display types.

WHY: Parameter and member types arrive as raw grammar tokens such as
``uint32``, ``qvector<qvector<byte>>``, or the name of a structure declared
in the same tree. Readers of the documentation expect the wiki's canonical
names (``Uint32``, ``List<List<Uint8>>``) with links to either the common
type reference or the structure's own section.

HOW: A small recursive-descent parser turns the token into a
TypeExpression (head name + arguments). Each node is then resolved:
  1. Common-type canonicalization: exact match in COMMON_TYPE_NAMES
  2. Containers: every list spelling becomes "List<T>", every map
     spelling "Map<K, V>", with arguments resolved recursively
  3. Local structures: a canonical name declared in the current tree
     links to its "Types" section; this beats any common type of the
     same name
  4. Known-type links: canonical names found in COMMON_TYPE_LINKS
HTML-sensitive characters are escaped by DisplayType.to_markdown().

RULES:
- Resolution never fails: malformed syntax, wrong argument counts, and
  unknown generic heads fall back to the whole raw token as plain text
- Results are not cached; the structure set differs between trees
- A structure shadows a common type when it matches the canonical name,
  not the raw token ("datetime" stays DateTime even beside a "datetime"
  structure)
- Structure links use the anchors the page assigns (see
  ProtocolDocument.structure_anchors); a plain name set falls back to
  the bare heading anchor
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from ddl_docgen.config import (
    LIST_CONTAINERS,
    LIST_DISPLAY_NAME,
    MAP_CONTAINERS,
    MAP_DISPLAY_NAME,
    canonical_type_name,
    common_type_link,
)
from ddl_docgen.core.ir import DisplayType, heading_anchor

logger = logging.getLogger(__name__)

_OPEN, _CLOSE, _SEPARATOR = "<", ">", ","
_SYMBOLS = frozenset({_OPEN, _CLOSE, _SEPARATOR})


class TypeSyntaxError(ValueError):
    """A type token does not follow the container grammar."""


@dataclass(frozen=True)
class TypeExpression:
    """Parsed form of a type token: ``name<arguments...>``."""

    name: str
    arguments: Tuple["TypeExpression", ...] = ()


def _tokenize(raw_type: str) -> List[str]:
    """Split a type token into names and the symbols ``<``, ``>``, ``,``."""
    tokens: List[str] = []
    current: List[str] = []
    for char in raw_type:
        if char in _SYMBOLS:
            name = "".join(current).strip()
            if name:
                tokens.append(name)
            tokens.append(char)
            current = []
        else:
            current.append(char)
    name = "".join(current).strip()
    if name:
        tokens.append(name)
    return tokens


class _TypeParser:
    """Recursive-descent parser for ``type := NAME ['<' type (',' type)* '>']``."""

    def __init__(self, raw_type: str) -> None:
        self._raw_type = raw_type
        self._tokens = _tokenize(raw_type)
        self._pos = 0

    def parse(self) -> TypeExpression:
        expression = self._parse_type()
        if self._pos != len(self._tokens):
            raise TypeSyntaxError(
                "Unexpected '{}' in type '{}'".format(self._tokens[self._pos], self._raw_type)
            )
        return expression

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _parse_type(self) -> TypeExpression:
        name = self._peek()
        if name is None or name in _SYMBOLS:
            raise TypeSyntaxError("Expected a type name in '{}'".format(self._raw_type))
        self._pos += 1

        if self._peek() != _OPEN:
            return TypeExpression(name=name)

        self._pos += 1
        arguments = [self._parse_type()]
        while self._peek() == _SEPARATOR:
            self._pos += 1
            arguments.append(self._parse_type())

        if self._peek() != _CLOSE:
            raise TypeSyntaxError("Unclosed '<' in type '{}'".format(self._raw_type))
        self._pos += 1
        return TypeExpression(name=name, arguments=tuple(arguments))


def parse_type(raw_type: str) -> TypeExpression:
    """Parse a raw type token.

    Raises:
        TypeSyntaxError: If the token is empty or its brackets do not balance.
    """
    return _TypeParser(raw_type).parse()


StructureAnchors = Union[Mapping[str, str], Iterable[str]]


def _structure_anchors(known_structures: StructureAnchors) -> Dict[str, str]:
    """Map each structure name to its section anchor, without the "#"."""
    if isinstance(known_structures, Mapping):
        return dict(known_structures)
    return {name: heading_anchor(name) for name in known_structures}


def _structure_link(name: str, anchor: str) -> DisplayType:
    return DisplayType(name=name, link_target="#{}".format(anchor), local=True)


def _resolve_expression(
    expression: TypeExpression,
    known_structures: Mapping[str, str],
) -> DisplayType | None:
    """Resolve one parsed node, or return None if it cannot be displayed."""
    if not expression.arguments:
        name = canonical_type_name(expression.name)
        if name in known_structures:
            return _structure_link(name, known_structures[name])
        return DisplayType(name=name, link_target=common_type_link(name))

    if expression.name in LIST_CONTAINERS:
        display_name, arity = LIST_DISPLAY_NAME, 1
    elif expression.name in MAP_CONTAINERS:
        display_name, arity = MAP_DISPLAY_NAME, 2
    else:
        return None

    if len(expression.arguments) != arity:
        return None

    arguments = []
    for argument in expression.arguments:
        resolved = _resolve_expression(argument, known_structures)
        if resolved is None:
            return None
        arguments.append(resolved)

    return DisplayType(
        name=display_name,
        link_target=common_type_link(display_name),
        arguments=tuple(arguments),
    )


def resolve_type(raw_type: str, known_structures: StructureAnchors = ()) -> DisplayType:
    """Resolve a raw type token into a display type.

    Args:
        raw_type: The uninterpreted type token from the declaration tree.
        known_structures: Names of the structures declared in the same tree,
            or a mapping from those names to their section anchors.

    Returns:
        DisplayType. Unresolvable tokens come back as plain, unlinked text.
    """
    structures = _structure_anchors(known_structures)
    try:
        resolved = _resolve_expression(parse_type(raw_type), structures)
    except TypeSyntaxError as exc:
        logger.debug("Leaving type as plain text: %s", exc)
        resolved = None
    except RecursionError:
        logger.debug("Type nested too deeply, leaving as plain text: %.80s", raw_type)
        resolved = None

    if resolved is None:
        return DisplayType(name=raw_type)
    return resolved


class TypeResolver:
    """Type resolution bound to the structure set of one tree.

    WHY: Formatters resolve many types per document, always against the
    same structures. Binding the anchors once keeps call sites short.
    """

    def __init__(self, known_structures: StructureAnchors = ()) -> None:
        self.known_structures = _structure_anchors(known_structures)

    def resolve(self, raw_type: str) -> DisplayType:
        return resolve_type(raw_type, self.known_structures)

    def to_markdown(self, raw_type: str) -> str:
        return self.resolve(raw_type).to_markdown()

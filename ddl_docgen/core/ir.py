"""Intermediate representation dataclasses for protocol documentation.

WHY: The parser's declaration tree is generic and deeply nested, while the
documentation needs protocols, methods, parameters, and structures in a
flat, predictable shape. The IR is that shape: every formatter consumes
the same model, decoupling tree normalization from rendering.

HOW: The normalizer fills these dataclasses from one DeclarationTree:
  ParameterDefinition: one request or response parameter (raw type kept)
  MethodDefinition: ordinal, name, request and response parameters
  ProtocolDefinition: display name, identifier, ordered methods
  StructureMember: one structure field (raw type kept)
  StructureDefinition: name, parent, ordered members
  ProtocolDocument: one protocol plus the structures of its tree
DisplayType is the Type Resolver's output; it is derived on demand and
never stored in the model.

RULES:
- Ordinals are 1-based and dense, in declaration order
- Return values sit at index 0 of response_parameters
- raw_type is the uninterpreted token from the tree; resolution happens
  at render time against the tree's own structure set
- parent_name is never empty; it defaults to "Structure"
- No sorting anywhere: list order is input order
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ddl_docgen.config import BASE_STRUCTURE, UNKNOWN_PROTOCOL_ID

# Characters GitHub drops when it turns a heading into an anchor.
_ANCHOR_STRIP_RE = re.compile(r"[^\w\- ]")


def heading_anchor(heading: str) -> str:
    """Anchor GitHub generates for a Markdown heading, without the "#"."""
    return _ANCHOR_STRIP_RE.sub("", heading.strip().lower()).replace(" ", "-")


# Fixed section headings of a protocol page, in page order per method.
REQUEST_HEADING = "Request"
RESPONSE_HEADING = "Response"
TYPES_HEADING = "Types"


class HeadingSlugger:
    """Assigns heading anchors in page order the way GitHub does.

    The first heading with a given anchor keeps it; later ones get "-1",
    "-2", ... appended, skipping anchors already taken on the page.
    """

    def __init__(self) -> None:
        self._occurrences: Dict[str, int] = {}

    def slug(self, heading: str) -> str:
        base = heading_anchor(heading)
        anchor = base
        while anchor in self._occurrences:
            self._occurrences[base] += 1
            anchor = "{}-{}".format(base, self._occurrences[base])
        self._occurrences[anchor] = 0
        return anchor


@dataclass(frozen=True)
class ParameterDefinition:
    name: str
    raw_type: str


@dataclass
class MethodDefinition:
    """A single RPC method of a protocol.

    RULES:
    - ordinal: position in the protocol's method list (1-based), never an
      identifier read from the tree
    - request_parameters / response_parameters: input order, except a
      return value which is always response_parameters[0]
    """

    ordinal: int
    name: str
    request_parameters: List[ParameterDefinition] = field(default_factory=list)
    response_parameters: List[ParameterDefinition] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        """Section anchor for this method, e.g. ``"3-getname"``."""
        return heading_anchor(self.heading)

    @property
    def heading(self) -> str:
        return "({}) {}".format(self.ordinal, self.name)


@dataclass
class ProtocolDefinition:
    """A documented protocol with its disambiguated display name.

    RULES:
    - name is unique within one documentation run
    - id is always the "Unknown ID" sentinel; trees do not carry one
    """

    name: str
    methods: List[MethodDefinition] = field(default_factory=list)
    id: str = UNKNOWN_PROTOCOL_ID


@dataclass(frozen=True)
class StructureMember:
    name: str
    raw_type: str


@dataclass
class StructureDefinition:
    """A class-like declaration documented under "Types"."""

    name: str
    parent_name: str = BASE_STRUCTURE
    members: List[StructureMember] = field(default_factory=list)

    @property
    def has_explicit_parent(self) -> bool:
        return self.parent_name != BASE_STRUCTURE


@dataclass
class ProtocolDocument:
    """Everything a formatter needs to produce one protocol's documentation.

    Attributes:
        protocol: The protocol, already carrying its disambiguated name.
        structures: All structures found in the protocol's tree, in
                    declaration order. They form the symbol set the Type
                    Resolver consults for local links.
    """

    protocol: ProtocolDefinition
    structures: List[StructureDefinition] = field(default_factory=list)

    @property
    def structure_names(self) -> frozenset:
        return frozenset(structure.name for structure in self.structures)

    @property
    def structure_anchors(self) -> Dict[str, str]:
        """Section anchor of each structure on the rendered page.

        Every heading above a structure is counted, so a structure named
        "Request" or "Types", or one repeating an earlier structure name,
        gets the de-duplicated anchor GitHub gives it. A repeated name
        links to its first section.
        """
        if not self.structures:
            return {}

        slugger = HeadingSlugger()
        slugger.slug("NEX-Protocols > {} ({})".format(self.protocol.name, self.protocol.id))
        for method in self.protocol.methods:
            slugger.slug(method.heading)
            slugger.slug(REQUEST_HEADING)
            slugger.slug(RESPONSE_HEADING)
        slugger.slug(TYPES_HEADING)

        anchors: Dict[str, str] = {}
        for structure in self.structures:
            anchors.setdefault(structure.name, slugger.slug(structure.name))
        return anchors


@dataclass(frozen=True)
class DisplayType:
    """A resolved, displayable type reference.

    WHY: A type such as ``qvector<MyStruct>`` has to render as
    ``List<MyStruct>`` with both ``List`` and ``MyStruct`` linked, so the
    resolver's output keeps the head name, its link, and the resolved
    container arguments separately.

    RULES:
    - name: canonical head name ("List", "Uint32", "MyStruct", or the raw
      token when nothing matched)
    - link_target: URL or "#anchor", None for plain text
    - arguments: resolved container arguments, empty for non-containers
    - local: True when the link points at a structure in the same document
    """

    name: str
    link_target: Optional[str] = None
    arguments: Tuple["DisplayType", ...] = ()
    local: bool = False

    @property
    def text(self) -> str:
        """Plain display string, e.g. ``"List<List<Uint8>>"``."""
        if not self.arguments:
            return self.name
        return "{}<{}>".format(
            self.name, ", ".join(argument.text for argument in self.arguments)
        )

    def to_markdown(self) -> str:
        """Entity-escaped display string with Markdown links."""
        head = html.escape(self.name, quote=False)
        if self.link_target:
            head = "[{}]({})".format(head, self.link_target)
        if not self.arguments:
            return head
        return "{}&lt;{}&gt;".format(
            head, ", ".join(argument.to_markdown() for argument in self.arguments)
        )

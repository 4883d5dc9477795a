"""Declaration tree normalization into the documentation IR.

WHY: A DDL tree mixes structures, protocols, and declarations the
documentation ignores, and spreads each method's parameters over one list
whose direction is encoded as bit flags. Formatters need ordered,
pre-classified methods and structures instead. This module is the bridge
between the typed declaration tree and the IR.

HOW: One pass over the root namespace. Each element is dispatched on its
declaration variant: class-like declarations become StructureDefinitions,
protocol-like declarations become PendingProtocols whose methods carry
ordinals and classified parameters, anything else is skipped. Names are
not disambiguated here; that needs run-wide state (see disambiguator.py).

RULES:
- Structures: empty parent name → "Structure"; member types kept verbatim
- Methods: ordinals 1..N in source order, duplicates included
- Parameter direction is a bit set: bit 0 → request, bit 1 → response,
  both bits → both sequences
- Neither bit + return value tag → prepended to the response sequence
- Neither bit otherwise → StructuralViolation (the whole tree is abandoned)
- A tree without protocol declarations is valid; is_protocol_tree is False
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ddl_docgen.config import BASE_STRUCTURE
from ddl_docgen.core.errors import StructuralViolation
from ddl_docgen.core.ir import (
    MethodDefinition,
    ParameterDefinition,
    StructureDefinition,
    StructureMember,
)
from ddl_docgen.core.tree import (
    ClassDeclaration,
    DeclarationTree,
    OtherDeclaration,
    ProtocolDeclaration,
    TreeMethod,
)

logger = logging.getLogger(__name__)

# Parameter direction bits as written by the DDL parser.
DIRECTION_REQUEST = 0x1
DIRECTION_RESPONSE = 0x2


@dataclass
class PendingProtocol:
    """A protocol whose display name has not been assigned yet.

    candidate_name is whatever the tree declared, possibly "".
    """

    candidate_name: str
    methods: List[MethodDefinition] = field(default_factory=list)


@dataclass
class NormalizedTree:
    """Result of normalizing one declaration tree."""

    protocols: List[PendingProtocol] = field(default_factory=list)
    structures: List[StructureDefinition] = field(default_factory=list)

    @property
    def is_protocol_tree(self) -> bool:
        return bool(self.protocols)


def _normalize_structure(declaration: ClassDeclaration) -> StructureDefinition:
    return StructureDefinition(
        name=declaration.name,
        parent_name=declaration.parent_name or BASE_STRUCTURE,
        members=[
            StructureMember(name=member.name, raw_type=member.type_use)
            for member in declaration.members
        ],
    )


def _normalize_method(method: TreeMethod, ordinal: int) -> MethodDefinition:
    """Classify a method's parameters into request and response sequences.

    Raises:
        StructuralViolation: If a parameter sets neither direction bit and
            is not the method's return value.
    """
    request: List[ParameterDefinition] = []
    response: List[ParameterDefinition] = []

    for parameter in method.parameters:
        definition = ParameterDefinition(name=parameter.name, raw_type=parameter.type_use)

        if parameter.direction & (DIRECTION_REQUEST | DIRECTION_RESPONSE):
            if parameter.direction & DIRECTION_REQUEST:
                request.append(definition)
            if parameter.direction & DIRECTION_RESPONSE:
                response.append(definition)
        elif parameter.is_return_value:
            # Return values always come first
            response.insert(0, definition)
        else:
            raise StructuralViolation(
                "Parameter '{}' of method '{}' has unrecognized direction {}".format(
                    parameter.name, method.name, parameter.direction
                )
            )

    return MethodDefinition(
        ordinal=ordinal,
        name=method.name,
        request_parameters=request,
        response_parameters=response,
    )


def _normalize_protocol(declaration: ProtocolDeclaration) -> PendingProtocol:
    return PendingProtocol(
        candidate_name=declaration.name,
        methods=[
            _normalize_method(method, ordinal)
            for ordinal, method in enumerate(declaration.methods, start=1)
        ],
    )


def normalize_tree(tree: DeclarationTree) -> NormalizedTree:
    """Walk one declaration tree and build its protocols and structures.

    Args:
        tree: A typed declaration tree from core.tree.

    Returns:
        NormalizedTree with protocols and structures in declaration order.

    Raises:
        StructuralViolation: If any parameter direction cannot be classified.
    """
    result = NormalizedTree()

    for element in tree.elements:
        if isinstance(element, ClassDeclaration):
            result.structures.append(_normalize_structure(element))
        elif isinstance(element, ProtocolDeclaration):
            result.protocols.append(_normalize_protocol(element))
        elif isinstance(element, OtherDeclaration):
            continue
        else:
            raise TypeError("Unhandled declaration variant: {!r}".format(element))

    logger.debug(
        "Normalized tree: %d protocol(s), %d structure(s)",
        len(result.protocols),
        len(result.structures),
    )
    return result

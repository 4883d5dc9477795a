"""One documentation run: trees in, protocol documents and side artifacts out.

WHY: Protocol name disambiguation and the numbering of non-protocol trees
span every tree handled in one invocation, whether the trees come from one
dump file or many, from the CLI or from an HTTP request. This module owns
that run-wide state so neither lives at module level.

HOW: DocumentationRun wraps a ProtocolNameRegistry and a counter.
process_tree() normalizes a tree, then either names each protocol and
pairs it with the tree's structures (one ProtocolDocument per protocol) or,
for a tree without protocols, produces a NonProtocolArtifact holding the
raw tree dump.

RULES:
- StructuralViolation propagates; the caller decides whether to continue
- A tree without protocols is reported (UnknownIdentifier is logged),
  never raised to the caller
- Non-protocol artifacts are keyed "non-protocol-tree-{n}", n from 0
- Documents keep protocol order within a tree; runs keep tree order
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from ddl_docgen.core.disambiguator import ProtocolNameRegistry
from ddl_docgen.core.errors import NonProtocolTree
from ddl_docgen.core.ir import ProtocolDefinition, ProtocolDocument
from ddl_docgen.core.normalizer import NormalizedTree, normalize_tree
from ddl_docgen.core.tree import DeclarationTree, dump_tree

logger = logging.getLogger(__name__)

NON_PROTOCOL_KEY = "non-protocol-tree-{}"


@dataclass
class NonProtocolArtifact:
    """Raw dump of a tree that declares no protocols, for offline inspection."""

    key: str
    content: str


@dataclass
class TreeResult:
    """Outcome of processing one tree: documents, or a side artifact."""

    documents: List[ProtocolDocument] = field(default_factory=list)
    non_protocol: Optional[NonProtocolArtifact] = None

    @property
    def is_protocol_tree(self) -> bool:
        return self.non_protocol is None


def build_documents(
    normalized: NormalizedTree,
    registry: ProtocolNameRegistry,
) -> List[ProtocolDocument]:
    """Name every pending protocol and pair it with the tree's structures.

    Raises:
        NonProtocolTree: If the tree has no protocol declarations.
    """
    if not normalized.is_protocol_tree:
        raise NonProtocolTree(
            "Tree declares no protocols ({} structure(s))".format(len(normalized.structures))
        )

    documents = []
    for pending in normalized.protocols:
        protocol = ProtocolDefinition(
            name=registry.assign(pending.candidate_name),
            methods=pending.methods,
        )
        documents.append(ProtocolDocument(protocol=protocol, structures=normalized.structures))
    return documents


class DocumentationRun:
    """Run-scoped state and the per-tree pipeline.

    Create one per invocation; reusing a run across invocations carries
    disambiguation state over.
    """

    def __init__(self, registry: Optional[ProtocolNameRegistry] = None) -> None:
        self.registry = registry if registry is not None else ProtocolNameRegistry()
        self._non_protocol_count = 0
        self._lock = threading.Lock()

    def _next_non_protocol_key(self) -> str:
        with self._lock:
            key = NON_PROTOCOL_KEY.format(self._non_protocol_count)
            self._non_protocol_count += 1
        return key

    def process_tree(self, tree: DeclarationTree) -> TreeResult:
        """Normalize one tree and build its documents.

        Raises:
            StructuralViolation: If a parameter direction cannot be classified.
        """
        normalized = normalize_tree(tree)
        try:
            documents = build_documents(normalized, self.registry)
        except NonProtocolTree as exc:
            key = self._next_non_protocol_key()
            logger.warning("%s; saving raw tree as '%s'", exc, key)
            return TreeResult(non_protocol=NonProtocolArtifact(key=key, content=dump_tree(tree)))

        for document in documents:
            logger.info(
                "Documented protocol '%s' (%d method(s))",
                document.protocol.name,
                len(document.protocol.methods),
            )
        return TreeResult(documents=documents)

    def process_trees(self, trees: List[DeclarationTree]) -> List[TreeResult]:
        return [self.process_tree(tree) for tree in trees]

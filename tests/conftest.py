"""Shared test fixtures for the ddl_docgen test suite.

WHY: Most test modules need the same representative tree: a protocol with
request, response, bidirectional, and return-value parameters, plus
structures with and without parents and members. Centralizing it here
keeps every module testing against the same input.

HOW: Pytest fixtures provide the raw tree dump (as the parser would write
it), the typed DeclarationTree, and a ready ProtocolDocument built from it.

RULES:
- The sample dump matches tree_schema.json
- The sample document is built with a fresh DocumentationRun, so its
  protocol keeps its declared name "Friends"
"""

import copy
from typing import Any, Dict

import pytest

from ddl_docgen.core.run import DocumentationRun
from ddl_docgen.core.tree import tree_from_dict

from tree_builders import member, method, other, parameter, protocol, structure, tree

REQUEST, RESPONSE, BOTH = 1, 2, 3


SAMPLE_TREE: Dict[str, Any] = tree(
    other(),
    structure("FriendInfo", [
        member("pid", "uint32"),
        member("name", "string"),
        member("presence", "NintendoPresence"),
    ]),
    structure("NintendoPresence", [
        member("changedFlags", "uint32"),
        member("applicationData", "qvector<qvector<byte>>"),
    ], parent="Data"),
    structure("EmptyNotice", []),
    protocol("Friends", [
        method("GetFriendList", [
            parameter("pid", "uint32", REQUEST),
            parameter("friends", "qvector<FriendInfo>", RESPONSE),
            parameter("result", "qresult", 0, return_value=True),
        ]),
        method("UpdatePresence", [
            parameter("presence", "NintendoPresence", REQUEST),
            parameter("token", "buffer", BOTH),
        ]),
        method("Ping", []),
    ]),
)


@pytest.fixture
def sample_tree_dict():
    """The sample tree dump as the parser would serialize it."""
    return copy.deepcopy(SAMPLE_TREE)


@pytest.fixture
def sample_tree(sample_tree_dict):
    """The sample dump as a typed DeclarationTree."""
    return tree_from_dict(sample_tree_dict)


@pytest.fixture
def sample_document(sample_tree):
    """The "Friends" ProtocolDocument built from the sample tree."""
    result = DocumentationRun().process_tree(sample_tree)
    assert len(result.documents) == 1
    return result.documents[0]

"""Exception types raised by the documentation engine.

WHY: Callers need to tell apart a tree that violates the parser's output
contract (stop processing it) from a tree that merely lacks identifying
information (report it and carry on).

RULES:
- StructuralViolation aborts the current tree and is never retried
- UnknownIdentifier is non-fatal; callers log it and substitute or divert
- TreeFormatError means the input dump itself is malformed
"""

from __future__ import annotations


class DocGenError(Exception):
    """Base class for all ddl_docgen errors."""


class StructuralViolation(DocGenError, ValueError):
    """The declaration tree breaks the parser's output contract.

    Raised when a parameter's direction cannot be classified. The tree
    being processed is abandoned; other trees in the run are unaffected.
    """


class UnknownIdentifier(DocGenError):
    """A protocol could not be identified by name."""


class NonProtocolTree(UnknownIdentifier):
    """The tree contains no protocol declarations at all."""


class TreeFormatError(DocGenError, ValueError):
    """A tree dump does not match the declaration tree schema."""

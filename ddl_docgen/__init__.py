"""DDL Protocol Documentation Generator: DDL trees to NEX-Protocols wiki pages.

WHY: Game binaries embed DDL declaration trees describing their NEX RPC
protocols. Those trees are deeply nested and full of raw grammar tokens;
nobody can read them as documentation. This package turns them into one
reference page per protocol with methods, parameters, and structures,
and with every type resolved to the wiki's canonical, linked names.

HOW: Three-stage pipeline: ingest (tree dumps → typed declarations),
normalize (declarations → documentation IR with run-wide protocol
naming), format (pluggable formatters, type resolution at render time).
Each stage is independently testable.

RULES:
- All formatters consume the same ProtocolDocument IR
- Adding a new output format = one new formatter module, no core changes
- The IR is the stable contract between normalization and formatting
"""

__version__ = "0.1.0"

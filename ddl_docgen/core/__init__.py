"""Core normalization, type resolution, and intermediate representation modules.

WHY: The core package contains the stable heart of the generator: the
IR dataclasses and the logic that builds and interprets them. These are
consumed by all formatters and must remain backward-compatible.

HOW: tree.py reads parser dumps into typed declarations, normalizer.py
builds the IR from them, disambiguator.py names protocols across a run,
resolver.py turns raw type tokens into display types, and run.py ties
the steps together for one documentation run.

RULES:
- IR dataclasses are the contract; change with care
- Normalization is format-agnostic; no formatter-specific logic here
- Run-wide state lives on DocumentationRun, never at module level
"""

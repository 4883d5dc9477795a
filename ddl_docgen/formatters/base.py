"""Abstract base formatter and output container.

WHY: Every output format consumes the same ProtocolDocument but produces
different file content. This base class enforces a consistent interface
so the CLI and API layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; every current formatter returns one item
- ``suffix`` starts with a dot, e.g. ``".md"``
- The caller is responsible for prepending the protocol's display name
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ddl_docgen.core.ir import ProtocolDocument


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the protocol name,
                e.g. ``".md"`` → ``"Friends.md"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/markdown"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Markdown'."""

    @abstractmethod
    def format(self, document: ProtocolDocument) -> list[FormatterOutput]:
        """Convert one protocol document into output files.

        Args:
            document: The protocol (with its disambiguated name) and the
                      structures declared in its tree.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string, and MIME type.
        """

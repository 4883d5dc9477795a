"""Markdown protocol page formatter in the NEX-Protocols wiki layout.

WHY: The primary deliverable of the generator: one wiki-ready page per
protocol that lists its methods, documents each method's request and
response, and describes the structures those methods use.

HOW: The page is assembled top to bottom from independent blocks joined
by blank lines:
  title: "## [NEX-Protocols](...) > {name} ({id})"
  method index: "| Method ID | Method Name |" with in-page links
  method blocks: "# ({ordinal}) {name}", then "## Request"/"## Response"
  types: "# Types" with one "## {structure}" block each
Every type cell goes through the TypeResolver bound to the document's
structures, so local structures link into "# Types" and common types link
to the wiki's common type reference.

RULES:
- Block order is fixed; rows keep input order (no sorting)
- Empty request → "This method does not take any parameters"
- Empty response → "This method does not return anything"
- Structure with no members → "This structure does not have any fields"
- Parent line only when the parent is not the "Structure" base
- Structure links use ProtocolDocument.structure_anchors, so a structure
  named like a fixed heading ("Request", "Types") still links to its own
  section
- The "# Types" section is omitted when the tree declared no structures
- Description cells are left empty for hand-written documentation
- Output suffix: ".md", media type: "text/markdown"
"""

from __future__ import annotations

from typing import List

from ddl_docgen.config import PROTOCOLS_PAGE
from ddl_docgen.core.ir import (
    REQUEST_HEADING,
    RESPONSE_HEADING,
    TYPES_HEADING,
    MethodDefinition,
    ParameterDefinition,
    ProtocolDefinition,
    ProtocolDocument,
    StructureDefinition,
)
from ddl_docgen.core.resolver import TypeResolver
from ddl_docgen.formatters.base import BaseFormatter, FormatterOutput

NO_PARAMETERS_NOTICE = "This method does not take any parameters"
NO_RETURN_NOTICE = "This method does not return anything"
NO_FIELDS_NOTICE = "This structure does not have any fields"


def _title(protocol: ProtocolDefinition) -> str:
    return "## [NEX-Protocols]({}) > {} ({})".format(PROTOCOLS_PAGE, protocol.name, protocol.id)


def _method_index(methods: List[MethodDefinition]) -> str:
    rows = ["| Method ID | Method Name |", "| --- | --- |"]
    for method in methods:
        rows.append("| {} | [{}](#{}) |".format(method.ordinal, method.name, method.anchor))
    return "\n".join(rows)


def _parameter_table(
    heading: str,
    parameters: List[ParameterDefinition],
    empty_notice: str,
    resolver: TypeResolver,
) -> str:
    lines = [heading]
    if not parameters:
        lines.append(empty_notice)
        return "\n".join(lines)

    lines.append("| Type | Name | Description |")
    lines.append("| --- | --- | --- |")
    for parameter in parameters:
        lines.append("| {} | {} |  |".format(resolver.to_markdown(parameter.raw_type), parameter.name))
    return "\n".join(lines)


def _method_section(method: MethodDefinition, resolver: TypeResolver) -> str:
    return "\n\n".join([
        "# {}".format(method.heading),
        _parameter_table(
            "## {}".format(REQUEST_HEADING),
            method.request_parameters,
            NO_PARAMETERS_NOTICE,
            resolver,
        ),
        _parameter_table(
            "## {}".format(RESPONSE_HEADING),
            method.response_parameters,
            NO_RETURN_NOTICE,
            resolver,
        ),
    ])


def _structure_section(structure: StructureDefinition, resolver: TypeResolver) -> str:
    lines = ["## {}".format(structure.name)]
    if structure.has_explicit_parent:
        lines.append("This structure inherits from {}".format(
            resolver.to_markdown(structure.parent_name)
        ))
        lines.append("")

    if not structure.members:
        lines.append(NO_FIELDS_NOTICE)
        return "\n".join(lines)

    lines.append("| Type | Name |")
    lines.append("| --- | --- |")
    for member in structure.members:
        lines.append("| {} | {} |".format(resolver.to_markdown(member.raw_type), member.name))
    return "\n".join(lines)


def render_markdown(document: ProtocolDocument) -> str:
    """Render the full Markdown page for one protocol document."""
    resolver = TypeResolver(document.structure_anchors)
    protocol = document.protocol

    blocks = [_title(protocol), _method_index(protocol.methods)]
    blocks.extend(_method_section(method, resolver) for method in protocol.methods)

    if document.structures:
        blocks.append("# {}".format(TYPES_HEADING))
        blocks.extend(_structure_section(structure, resolver) for structure in document.structures)

    return "\n\n".join(blocks) + "\n"


class MarkdownFormatter(BaseFormatter):
    """Formatter that produces one NEX-Protocols wiki page per protocol."""

    @property
    def name(self) -> str:
        return "Markdown"

    def format(self, document: ProtocolDocument) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=".md",
                content=render_markdown(document),
                media_type="text/markdown",
            )
        ]

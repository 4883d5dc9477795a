"""Resolved protocol model as JSON, for tools that post-process documentation.

WHY: Wiki pages are for people. Scripts that diff protocol versions or
generate client stubs want the same information without parsing Markdown:
the method list with ordinals, parameter directions, and every type both
raw and resolved.

HOW: Walks the ProtocolDocument once, resolving every type through the
document's TypeResolver, and serializes the result. The output is
validated with jsonschema against protocol_model_schema.json before
returning.

RULES:
- Each type object carries raw (tree token), text (display string),
  link (URL, "#anchor", or null), and local (links into the same page)
- A structure's parent is null when it is the "Structure" base
- Order follows the model; nothing is sorted
- Output suffix: ".json", media type: "application/json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from ddl_docgen.core.ir import ParameterDefinition, ProtocolDocument, StructureMember
from ddl_docgen.core.resolver import TypeResolver
from ddl_docgen.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "protocol_model_schema.json"

_CACHED_SCHEMA: Dict[str, Any] | None = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _type_dict(raw_type: str, resolver: TypeResolver) -> Dict[str, Any]:
    resolved = resolver.resolve(raw_type)
    return {
        "raw": raw_type,
        "text": resolved.text,
        "link": resolved.link_target,
        "local": resolved.local,
    }


def _fields(
    fields: List[ParameterDefinition] | List[StructureMember],
    resolver: TypeResolver,
) -> List[Dict[str, Any]]:
    return [
        {"name": item.name, "type": _type_dict(item.raw_type, resolver)}
        for item in fields
    ]


def build_model(document: ProtocolDocument) -> Dict[str, Any]:
    """Build the JSON-ready dict for one protocol document."""
    resolver = TypeResolver(document.structure_anchors)
    protocol = document.protocol

    return {
        "protocol": {"name": protocol.name, "id": protocol.id},
        "methods": [
            {
                "ordinal": method.ordinal,
                "name": method.name,
                "anchor": method.anchor,
                "request": _fields(method.request_parameters, resolver),
                "response": _fields(method.response_parameters, resolver),
            }
            for method in protocol.methods
        ],
        "structures": [
            {
                "name": structure.name,
                "parent": (
                    _type_dict(structure.parent_name, resolver)
                    if structure.has_explicit_parent else None
                ),
                "members": _fields(structure.members, resolver),
            }
            for structure in document.structures
        ],
    }


class JSONModelFormatter(BaseFormatter):
    """Formatter that produces the resolved protocol model as JSON."""

    @property
    def name(self) -> str:
        return "JSON Model"

    def format(self, document: ProtocolDocument) -> List[FormatterOutput]:
        """Serialize the resolved model.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to protocol_model_schema.json.
        """
        model = build_model(document)
        jsonschema.validate(instance=model, schema=_get_schema())

        return [
            FormatterOutput(
                suffix=".json",
                content=json.dumps(model, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]

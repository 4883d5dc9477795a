"""Configuration constants, common-type tables, and .env loading.

WHY: Centralizes every value the documentation generator treats as fixed
data: the wiki locations that pages link to, the canonical display names
of DDL primitive types, and the anchors those names link to. Keeping them
as plain data structures (not buried in the resolver) makes the tables
easy to review and extend.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts, sets, and strings. canonical_type_name() and
common_type_link() are the only lookups the resolver performs against
these tables.

RULES:
- COMMON_TYPE_NAMES maps raw DDL tokens → canonical wiki display names
- COMMON_TYPE_LINKS maps canonical display names → wiki anchors
- The tables are static; they are versioned with the package, not configured
- Unmatched tokens pass through unchanged (no fallback label)
- Output directory, default formats, and log level can be overridden via
  environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Wiki locations
# ---------------------------------------------------------------------------

WIKI_BASE_URL = "https://github.com/kinnay/NintendoClients/wiki"
PROTOCOLS_PAGE = "{}/NEX-Protocols".format(WIKI_BASE_URL)
COMMON_TYPES_PAGE = "{}/NEX-Common-Types".format(WIKI_BASE_URL)

BASE_STRUCTURE = "Structure"
"""Parent name given to class declarations that declare no parent."""

UNKNOWN_PROTOCOL_ID = "Unknown ID"
"""The DDL tree never carries a protocol ID; every document shows this."""

# ---------------------------------------------------------------------------
# Common types: raw DDL token → canonical display name
# ---------------------------------------------------------------------------

COMMON_TYPE_NAMES: dict[str, str] = {
    "bool": "Bool",
    "byte": "Uint8",
    "uint8": "Uint8",
    "int8": "Sint8",
    "uint16": "Uint16",
    "int16": "Sint16",
    "uint32": "Uint32",
    "int32": "Sint32",
    "uint64": "Uint64",
    "int64": "Sint64",
    "float": "Float",
    "double": "Double",
    "string": "String",
    "buffer": "Buffer",
    "qBuffer": "qBuffer",
    "datetime": "DateTime",
    "qresult": "Result",
    "stationurl": "StationURL",
    "variant": "Variant",
    "pid": "PID",
    "data": "Data",
    "anydataholder": "AnyDataHolder",
    "resultrange": "ResultRange",
}

# ---------------------------------------------------------------------------
# Common types: canonical display name → wiki reference
# ---------------------------------------------------------------------------

_PRIMITIVE_TYPES_ANCHOR = "{}#primitive-types".format(COMMON_TYPES_PAGE)

COMMON_TYPE_LINKS: dict[str, str] = {
    "Bool": _PRIMITIVE_TYPES_ANCHOR,
    "Uint8": _PRIMITIVE_TYPES_ANCHOR,
    "Sint8": _PRIMITIVE_TYPES_ANCHOR,
    "Uint16": _PRIMITIVE_TYPES_ANCHOR,
    "Sint16": _PRIMITIVE_TYPES_ANCHOR,
    "Uint32": _PRIMITIVE_TYPES_ANCHOR,
    "Sint32": _PRIMITIVE_TYPES_ANCHOR,
    "Uint64": _PRIMITIVE_TYPES_ANCHOR,
    "Sint64": _PRIMITIVE_TYPES_ANCHOR,
    "Float": _PRIMITIVE_TYPES_ANCHOR,
    "Double": _PRIMITIVE_TYPES_ANCHOR,
    "String": "{}#string".format(COMMON_TYPES_PAGE),
    "Buffer": "{}#buffer".format(COMMON_TYPES_PAGE),
    "qBuffer": "{}#qbuffer".format(COMMON_TYPES_PAGE),
    "List": "{}#listt".format(COMMON_TYPES_PAGE),
    "Map": "{}#mapk-v".format(COMMON_TYPES_PAGE),
    "PID": "{}#pid".format(COMMON_TYPES_PAGE),
    "Result": "{}#result".format(COMMON_TYPES_PAGE),
    "DateTime": "{}#datetime".format(COMMON_TYPES_PAGE),
    "StationURL": "{}#stationurl".format(COMMON_TYPES_PAGE),
    "Variant": "{}#variant".format(COMMON_TYPES_PAGE),
    "Data": "{}#data".format(COMMON_TYPES_PAGE),
    "AnyDataHolder": "{}#anydataholder".format(COMMON_TYPES_PAGE),
    "Structure": "{}#structure".format(COMMON_TYPES_PAGE),
    "ResultRange": "{}#resultrange".format(COMMON_TYPES_PAGE),
}

# ---------------------------------------------------------------------------
# Container spellings
# ---------------------------------------------------------------------------

LIST_CONTAINERS: frozenset[str] = frozenset({
    "qvector", "qlist", "std_list", "std_vector", "vector", "list", "List",
})
"""Single-argument container spellings; all display as ``List<T>``."""

MAP_CONTAINERS: frozenset[str] = frozenset({
    "std_map", "qmap", "map", "Map",
})
"""Two-argument container spellings; all display as ``Map<K, V>``."""

LIST_DISPLAY_NAME = "List"
MAP_DISPLAY_NAME = "Map"


def canonical_type_name(raw_type: str) -> str:
    """Map a raw DDL type token to its canonical display name.

    RULES:
    - Exact match only (case-sensitive)
    - Unknown tokens are returned unchanged
    """
    return COMMON_TYPE_NAMES.get(raw_type, raw_type)


def common_type_link(display_name: str) -> str | None:
    """Return the wiki reference for a canonical type name, or None."""
    return COMMON_TYPE_LINKS.get(display_name)


# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR = os.getenv("DDL_DOCGEN_OUTPUT_DIR", "docs")
DEFAULT_FORMATS = os.getenv("DDL_DOCGEN_FORMATS", "markdown")
DEFAULT_LOG_LEVEL = os.getenv("DDL_DOCGEN_LOG_LEVEL", "INFO").upper()

"""Output formatter registry, a pluggable format hub.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["markdown"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags, API requests, etc.)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddl_docgen.formatters.json_model import JSONModelFormatter
from ddl_docgen.formatters.markdown import MarkdownFormatter

if TYPE_CHECKING:
    from ddl_docgen.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "markdown": MarkdownFormatter,
    "json_model": JSONModelFormatter,
}

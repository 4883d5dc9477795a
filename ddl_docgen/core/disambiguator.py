"""Collision-free display names for protocols across a documentation run.

WHY: Output documents are keyed by protocol name. Two trees can declare
the same protocol, and some trees declare a protocol with no name at all;
without renaming, later documents would overwrite earlier ones.

HOW: ProtocolNameRegistry holds two pieces of state: a counter for
unnamed protocols and an occurrence count per candidate name. The caller
owns one registry per documentation run and passes every protocol through
assign() in processing order.

RULES:
- "" or None → "Unknown Protocol - {n}", n starting at 0 and incremented
  on every such assignment
- First sighting of a name → the name unchanged (count 1)
- Later sightings → "{name} ({count})" with count 2, 3, ...
- Same candidate sequence on a fresh registry → same output sequence
- assign() is serialized behind a lock so concurrent callers still see
  the call-order guarantee
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)

UNKNOWN_PROTOCOL_NAME = "Unknown Protocol - {}"


class ProtocolNameRegistry:
    """Run-scoped registry of assigned protocol display names."""

    def __init__(self) -> None:
        self._unknown_count = 0
        self._occurrences: Dict[str, int] = {}
        self._lock = threading.Lock()

    def assign(self, candidate_name: Optional[str]) -> str:
        """Return the display name for the next protocol with this candidate name."""
        with self._lock:
            if not candidate_name:
                name = UNKNOWN_PROTOCOL_NAME.format(self._unknown_count)
                self._unknown_count += 1
                logger.warning("Protocol has no name, documenting it as '%s'", name)
                return name

            count = self._occurrences.get(candidate_name, 0) + 1
            self._occurrences[candidate_name] = count
            if count == 1:
                return candidate_name

            name = "{} ({})".format(candidate_name, count)
            logger.info("Protocol '%s' seen %d times, documenting it as '%s'",
                        candidate_name, count, name)
            return name

    def occurrences(self, candidate_name: str) -> int:
        """How many times a candidate name has been assigned so far."""
        with self._lock:
            return self._occurrences.get(candidate_name, 0)

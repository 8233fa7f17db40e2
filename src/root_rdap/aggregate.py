"""
Aggregate search-results document (``_all.json``).

Collects a trimmed copy of every TLD's RDAP document into one
``domainSearchResults`` response.
"""

import copy
from typing import Any, Optional

from .rdap_assembler import RDAP_CONFORMANCE

AGGREGATE_NAME = "_all"

# Keys that belong to the top-level response, not to each search result
TRIMMED_KEYS = ("notices", "rdapConformance")


class AggregateCollector:
    """Accumulates per-TLD documents in the order they are added."""

    def __init__(self) -> None:
        self._notices: Optional[list] = None
        self._results: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._results)

    def add(self, document: dict[str, Any]) -> None:
        """
        Fold one TLD's document into the aggregate.

        The first document's notices become the aggregate's notices; later
        ones are ignored. The stored copy drops notices and conformance.
        """
        if self._notices is None and "notices" in document:
            self._notices = copy.deepcopy(document["notices"])

        trimmed = {
            key: copy.deepcopy(value)
            for key, value in document.items()
            if key not in TRIMMED_KEYS
        }
        self._results.append(trimmed)

    def document(self) -> dict[str, Any]:
        return {
            "rdapConformance": list(RDAP_CONFORMANCE),
            "notices": copy.deepcopy(self._notices) if self._notices is not None else [],
            "domainSearchResults": copy.deepcopy(self._results),
        }

"""Chainable query engine over parsed log records.

A query starts from a snapshot of the record store and is refined by chaining
operations::

    engine.start().sort("referer").unique("referer").limit(3).export()

``start()`` copies the store's list, so ``limit()`` never removes records from
the store. The records themselves are shared: ``sort()`` writes its
``<key>_occurences`` counter on the store's records too.
"""

import json
from collections import Counter

from loggio.errors import InvalidParameterError, QueryNotStartedError
from loggio.parser import LogRecord

OCCURRENCES_SUFFIX = "_occurences"


def occurrences_field(key: str) -> str:
    """Name of the counter field written by sort(key)."""
    return f"{key}{OCCURRENCES_SUFFIX}"


def _structural_key(record: LogRecord) -> tuple:
    return tuple(sorted(record.items()))


class Query:
    """Working set plus the chainable operations that reshape it."""

    def __init__(self, store: list[LogRecord]):
        self._store = store
        self.results: list[LogRecord] | None = None

    def start(self) -> "Query":
        """Reset the working set to the current contents of the store."""
        self.results = list(self._store)
        return self

    def unique(self, key: str | None = None) -> "Query":
        """Keep the first record of each distinct value of *key*.

        Without *key*, records are compared on their full content. Records
        lacking *key* are never treated as duplicates of each other.
        """
        results = self._check_started("unique")

        kept = []
        seen = set()
        for record in results:
            if key is None:
                marker = _structural_key(record)
            elif key in record:
                marker = record[key]
            else:
                kept.append(record)
                continue
            if marker in seen:
                continue
            seen.add(marker)
            kept.append(record)

        self.results = kept
        return self

    def sort(self, key: str | None = None) -> "Query":
        """Rank records by how often their *key* value occurs, most frequent first.

        Every record gets a ``<key>_occurences`` field holding that count
        (0 when the record lacks *key*). Ties keep their current order.
        """
        results = self._check_started("sort")
        if not key:
            raise InvalidParameterError("Missing 'key' parameter for .sort(key) API method.")

        field = occurrences_field(key)
        counts = Counter(record[key] for record in results if key in record)
        for record in results:
            record[field] = counts[record[key]] if key in record else 0

        self.results = sorted(results, key=lambda record: record[field], reverse=True)
        return self

    def limit(self, max_results: int = 1) -> "Query":
        """Keep only the first *max_results* records."""
        results = self._check_started("limit")
        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            raise InvalidParameterError(
                "Missing 'max' parameter for .limit(max) API method."
            )

        del results[max_results:]
        return self

    def count(self) -> int:
        """Number of records in the working set (not chainable)."""
        return len(self._check_started("count"))

    def export(self) -> list[LogRecord]:
        """The working set itself (not chainable). Mutations are visible to the query."""
        return self._check_started("export")

    def to_json(self, indent: int | None = None) -> str:
        """The working set serialized as a JSON array (not chainable)."""
        return json.dumps(self._check_started("to_json"), indent=indent)

    def _check_started(self, operation: str) -> list[LogRecord]:
        if self.results is None:
            raise QueryNotStartedError(operation)
        return self.results

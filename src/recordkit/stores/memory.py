"""
In-memory record store.

Evaluates ExistenceCriteria against a list of dicts or objects. Handy for
tests and for checking uniqueness inside a batch that has not been persisted yet.
"""
import logging
from typing import Any, Iterable

from .base import ExistenceCriteria, read_field

logger = logging.getLogger(__name__)


def _equals(actual: Any, expected: Any) -> bool:
    # mirror SQL coercion: a 0 column compares equal to the "0" flag
    if actual == expected:
        return True
    return actual is not None and expected is not None and str(actual) == str(expected)


class InMemoryRecordStore:
    """
    Records are kept in insertion order; that is the order matches are returned in.
    """

    def __init__(self, records: Iterable[Any] | None = None):
        self.records: list[Any] = list(records) if records is not None else []

    def add(self, record: Any) -> None:
        self.records.append(record)

    def _matches(self, record: Any, criteria: ExistenceCriteria) -> bool:
        for name, expected in criteria.equals:
            if not _equals(read_field(record, name), expected):
                return False
        # exact str comparison is already case-sensitive
        return _equals(read_field(record, criteria.case_sensitive_column), criteria.case_sensitive_value)

    async def query(self, criteria: ExistenceCriteria) -> list[dict[str, Any]]:
        matches = [
            {criteria.select_field: read_field(record, criteria.select_field)}
            for record in self.records
            if self._matches(record, criteria)
        ]
        logger.debug(
            "store.memory.query",
            extra={"column": criteria.case_sensitive_column, "scanned": len(self.records), "matched": len(matches)},
        )
        return matches

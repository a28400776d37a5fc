"""
Record stores for the existence verifier.

Usage:
    from recordkit.stores import SqlAlchemyRecordStore, InMemoryRecordStore
"""

from .base import ExistenceCriteria, RecordStore, FieldRef, resolve_field_name, read_field
from .memory import InMemoryRecordStore
from .sql import SqlAlchemyRecordStore, case_sensitive_equals

__all__ = [
    "ExistenceCriteria",
    "RecordStore",
    "FieldRef",
    "resolve_field_name",
    "read_field",
    "InMemoryRecordStore",
    "SqlAlchemyRecordStore",
    "case_sensitive_equals",
]

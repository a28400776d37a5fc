"""
recordkit: collection projection helpers and field-value existence checks.

Usage:
    from recordkit import to_map, group_by, FieldExistVerifier, SqlAlchemyRecordStore
"""

from .utils.collection_helpers import is_empty, is_not_empty, empty_list, empty_dict, empty_set
from .utils.projection import to_list, to_distinct_list, to_set, to_map, group_by
from .exceptions import RepositoryError, InvalidArgumentError, SecurityViolationError, InvalidFieldError
from .stores import ExistenceCriteria, RecordStore, InMemoryRecordStore, SqlAlchemyRecordStore
from .verifiers import FieldExistVerifier, DEFAULT_NOT_DELETE_FLAG

__all__ = [
    "is_empty",
    "is_not_empty",
    "empty_list",
    "empty_dict",
    "empty_set",
    "to_list",
    "to_distinct_list",
    "to_set",
    "to_map",
    "group_by",
    "RepositoryError",
    "InvalidArgumentError",
    "SecurityViolationError",
    "InvalidFieldError",
    "ExistenceCriteria",
    "RecordStore",
    "InMemoryRecordStore",
    "SqlAlchemyRecordStore",
    "FieldExistVerifier",
    "DEFAULT_NOT_DELETE_FLAG",
]

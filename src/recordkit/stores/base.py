"""
Record store contract used by the existence verifier.

A store receives an `ExistenceCriteria` (the query intent) and returns the
matching records, each carrying at least the selected field. How the store
executes the query is its own business.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence, TypeVar, runtime_checkable

from sqlalchemy.orm import QueryableAttribute

from recordkit.exceptions.base import InvalidFieldError

E = TypeVar("E")

# A field is referenced by attribute name or by a mapped attribute (e.g. Account.id)
FieldRef = str | QueryableAttribute

_MISSING = object()


@dataclass(frozen=True)
class ExistenceCriteria:
    """
    Query intent for one existence check.

    - select_field: the only field the store needs to return (the primary key)
    - equals: AND-combined equality filters as (field, value) pairs
    - case_sensitive_column: column compared byte-wise against case_sensitive_value,
      overriding any case-insensitive collation of the store. Already validated
      as a safe identifier by the time the criteria exists.
    """
    select_field: str
    case_sensitive_column: str
    case_sensitive_value: str
    equals: tuple[tuple[str, Any], ...] = field(default_factory=tuple)


@runtime_checkable
class RecordStore(Protocol):
    async def query(self, criteria: ExistenceCriteria) -> Sequence[Any]:
        ...


def resolve_field_name(ref: FieldRef) -> str:
    """
    Return the attribute name for a field reference.

    >>> resolve_field_name("id")
    'id'
    >>> resolve_field_name(Account.id)   # mapped attribute
    'id'
    """
    if isinstance(ref, str):
        return ref
    key = getattr(ref, "key", None)
    if not key:
        raise InvalidFieldError(f"Cannot resolve a field name from {ref!r}")
    return key


def read_field(record: Any, name: str) -> Any:
    """
    Read `name` from a mapping (dict) or an object/row (attribute access).

    Raises:
        InvalidFieldError: if the record has no such field.
    """
    if isinstance(record, Mapping):
        value = record.get(name, _MISSING)
    else:
        value = getattr(record, name, _MISSING)
    if value is _MISSING:
        raise InvalidFieldError(f"{type(record).__name__} has no field '{name}'", fields=[name])
    return value

"""
Null/empty helpers for collections.

The empty_* factories always return a fresh container so callers can mutate
what they get back without affecting anyone else.
"""
from typing import Any, Sized


def is_empty(collection: Sized | None) -> bool:
    """True if `collection` is None or has no elements."""
    return collection is None or len(collection) == 0


def is_not_empty(collection: Sized | None) -> bool:
    """True if `collection` is not None and has at least one element."""
    return not is_empty(collection)


def empty_list() -> list[Any]:
    return []


def empty_dict() -> dict[Any, Any]:
    return {}


def empty_set() -> set[Any]:
    return set()


__all__ = [
    "is_empty",
    "is_not_empty",
    "empty_list",
    "empty_dict",
    "empty_set",
]

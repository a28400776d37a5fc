"""
Collection projection helpers.

Turn a collection of records into a list, set, dict or grouping of a derived
field, with an optional filter applied first. Every function returns a fresh
empty container (never None) for None/empty input, and a `filter` of None
means "keep everything".

Usage:
    names = to_list(users, lambda u: u.username)
    active_ids = to_set(users, attrgetter("id"), lambda u: u.is_active)
    by_email = to_map(users, attrgetter("email"))
    by_team = group_by(users, attrgetter("team"))
"""
from typing import Callable, Collection, Hashable, Iterator, TypeVar

from .collection_helpers import is_empty, empty_list, empty_set, empty_dict

D = TypeVar("D")   # element type
F = TypeVar("F")   # projected field type
K = TypeVar("K", bound=Hashable)   # key type
V = TypeVar("V")   # mapped value type

Predicate = Callable[[D], bool]


def _iter_filtered(data: Collection[D], filter: Predicate | None) -> Iterator[D]:
    # None means no filtering, not "filter out everything"
    if filter is None:
        return iter(data)
    return (item for item in data if filter(item))


def to_list(data: Collection[D] | None, field_getter: Callable[[D], F],
            filter: Predicate | None = None) -> list[F]:
    """
    Project each (filtered) element with `field_getter`, preserving input order.
    """
    if is_empty(data):
        return empty_list()
    return [field_getter(item) for item in _iter_filtered(data, filter)]


def to_distinct_list(data: Collection[D] | None, field_getter: Callable[[D], F],
                     filter: Predicate | None = None) -> list[F]:
    """
    Like `to_list`, but drop repeated projected values, keeping the first occurrence.

    Unhashable values (lists, dicts) are compared by equality instead of hashing.
    """
    if is_empty(data):
        return empty_list()

    result: list[F] = []
    seen_hashable: set = set()
    seen_unhashable: list = []
    for item in _iter_filtered(data, filter):
        value = field_getter(item)
        try:
            if value in seen_hashable:
                continue
            seen_hashable.add(value)
        except TypeError:
            if value in seen_unhashable:
                continue
            seen_unhashable.append(value)
        result.append(value)
    return result


def to_set(data: Collection[D] | None, field_getter: Callable[[D], F],
           filter: Predicate | None = None) -> set[F]:
    """
    Project each (filtered) element into a set; iteration order is unspecified.
    """
    if is_empty(data):
        return empty_set()
    return {field_getter(item) for item in _iter_filtered(data, filter)}


def to_map(data: Collection[D] | None, key_getter: Callable[[D], K],
           value_getter: Callable[[D], V] | None = None,
           filter: Predicate | None = None) -> dict[K, V] | dict[K, D]:
    """
    Build a dict keyed by `key_getter`.

    Values are the elements themselves, or `value_getter(element)` when given.
    When two elements produce the same key the later one wins.
    """
    if is_empty(data):
        return empty_dict()

    result: dict = {}
    for item in _iter_filtered(data, filter):
        # plain assignment: later elements overwrite earlier ones (last write wins)
        result[key_getter(item)] = item if value_getter is None else value_getter(item)
    return result


def group_by(data: Collection[D] | None, key_getter: Callable[[D], K],
             filter: Predicate | None = None) -> dict[K, list[D]]:
    """
    Partition (filtered) elements by `key_getter`; each group keeps input order.
    """
    if is_empty(data):
        return empty_dict()

    groups: dict[K, list[D]] = {}
    for item in _iter_filtered(data, filter):
        groups.setdefault(key_getter(item), []).append(item)
    return groups


__all__ = [
    "to_list",
    "to_distinct_list",
    "to_set",
    "to_map",
    "group_by",
]

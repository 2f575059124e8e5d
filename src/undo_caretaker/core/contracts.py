"""Caller-supplied identity, ordering, and snapshot contracts."""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping, Protocol, TypeVar

I = TypeVar("I")
I_contra = TypeVar("I_contra", contravariant=True)


class IdentityPredicate(Protocol[I_contra]):
    """Decides whether ``candidate`` (live entry) and ``target`` are the same record."""

    def __call__(self, candidate: I_contra, target: I_contra) -> bool:
        ...


class Comparator(Protocol[I_contra]):
    """Three-way comparison: negative, zero, or positive."""

    def __call__(self, left: I_contra, right: I_contra) -> int:
        ...


Snapshot = Callable[[I], I]


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def match_by(*fields: str) -> IdentityPredicate[Any]:
    """Build a predicate treating records as equal when ``fields`` agree.

    Works for attribute-style records and mappings alike.
    """

    if not fields:
        raise ValueError("match_by requires at least one field")

    def matches(candidate: Any, target: Any) -> bool:
        return all(_field(candidate, name) == _field(target, name) for name in fields)

    return matches


def compare_by(*fields: str, reverse: bool = False) -> Comparator[Any]:
    """Build a comparator ordering records by ``fields`` in turn."""

    if not fields:
        raise ValueError("compare_by requires at least one field")
    sign = -1 if reverse else 1

    def compare(left: Any, right: Any) -> int:
        for name in fields:
            a, b = _field(left, name), _field(right, name)
            if a < b:
                return -sign
            if a > b:
                return sign
        return 0

    return compare


def deep_snapshot(value: I) -> I:
    """Independent copy of ``value``; nothing is shared with the original."""

    return copy.deepcopy(value)


__all__ = [
    "Comparator",
    "IdentityPredicate",
    "Snapshot",
    "compare_by",
    "deep_snapshot",
    "match_by",
]

"""Sort order for indexed objects and their match records."""

from functools import cmp_to_key
from typing import Any, Callable, Optional, Sequence

from .indexed_object import IndexedObject, Ordering


class MalformedEntityError(ValueError):
    """An indexed object lacks identity data the matcher cannot do without."""


def _compare_str(a: str, b: str) -> int:
    return (a > b) - (a < b)


def default_ordering(a: IndexedObject, b: IndexedObject) -> int:
    """
    Compare two indexed objects by term, then by unique key.

    An object without a term sorts before one with a term.  Objects that tie
    on term are ordered by unique key, which both must have.

    Raises:
        MalformedEntityError: if the terms tie and either unique key is missing
    """
    a_term, b_term = a.term, b.term
    if a_term is not None and b_term is not None:
        i = _compare_str(a_term, b_term)
    elif a_term is not None:
        i = 1
    elif b_term is not None:
        i = -1
    else:
        i = 0

    if i == 0:
        a_key, b_key = a.unique_key, b.unique_key
        if a_key is None or b_key is None:
            raise MalformedEntityError(
                f"Cannot order objects tied on term {a_term!r} without unique keys"
            )
        i = _compare_str(a_key, b_key)
    return i


def resolve_ordering(
    objects: Sequence[IndexedObject],
    ordering: Optional[Ordering] = None,
) -> Ordering:
    """
    Pick the comparison function used to sort indexed objects.

    An explicit ordering wins; otherwise the first object's own ``ordering``
    attribute is used if it has one, and ``default_ordering`` if not.
    """
    if ordering is not None:
        return ordering
    if objects:
        own = getattr(objects[0], "ordering", None)
        if own is not None:
            return own
    return default_ordering


def record_sort_key(ordering: Ordering) -> Callable[[Any], Any]:
    """Build a ``sorted`` key that orders match records by their owning objects."""
    key = cmp_to_key(ordering)
    return lambda record: key(record.indexed_object)

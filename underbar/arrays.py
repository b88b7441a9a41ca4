"""Sequence operations: slicing from either end, de-duplication, zipping,
flattening and set-like combinations of sequences."""

from typing import Any, List, Optional

from .collection import contains, every, filter, map, reduce, some
from .core import NO_VALUE, each, identity, index_of, is_sequence, resolve_collection


def first(sequence, n: Optional[int] = None):
    """First element, or a new list of the first n elements.

    Without n, returns the first element (None for an empty sequence).
    n is clamped: n <= 0 gives [] and n past the end gives every element.
    """
    if n is None:
        taken = first(sequence, 1)
        return taken[0] if taken else None

    picked = []

    def take(value):
        if len(picked) < n:
            picked.append(value)

    each(sequence, take)
    return picked


def last(sequence, n: Optional[int] = None):
    """Last element, or a new list of the last n elements (clamped like first)."""
    view = resolve_collection(sequence)
    if n is None:
        taken = last(view, 1)
        return taken[0] if taken else None

    start = view.size() - n
    picked = []
    position = 0

    def take(value):
        nonlocal position
        if n > 0 and position >= start:
            picked.append(value)
        position += 1

    each(view, take)
    return picked


def uniq(sequence) -> List[Any]:
    """Duplicate-free copy keeping the first occurrence of every value."""
    seen = []

    def visit(value):
        if index_of(seen, value) == -1:
            seen.append(value)

    each(sequence, visit)
    return seen


def zip(*sequences) -> List[tuple]:
    """Group elements by position.

    The result is as long as the longest input; positions past the end of a
    shorter input hold NO_VALUE.
    """
    columns = map(sequences, lambda sequence: map(sequence, identity))
    length = reduce(columns, lambda longest, column: max(longest, len(column)), 0)

    def row(index):
        return tuple(map(columns, lambda column: column[index] if index < len(column) else NO_VALUE))

    return map(range(length), row)


def flatten(nested, shallow: bool = False) -> List[Any]:
    """Flatten nested sequences into one list.

    Strings are kept whole. With shallow=True only one level is removed.
    """
    flat = []

    def collect(value):
        if not is_sequence(value):
            flat.append(value)
        elif shallow:
            each(value, lambda item: flat.append(item))
        else:
            each(value, collect)

    each(nested, collect)
    return flat


def intersection(*sequences) -> List[Any]:
    """Values of the first sequence that appear in every other one."""
    if not sequences:
        return []
    others = map(sequences[1:], resolve_collection)
    return filter(
        uniq(sequences[0]),
        lambda value: every(others, lambda other: contains(other, value))
    )


def difference(sequence, *others) -> List[Any]:
    """Values of sequence that appear in none of the others."""
    excluded = map(others, resolve_collection)
    return filter(
        uniq(sequence),
        lambda value: not some(excluded, lambda other: contains(other, value))
    )

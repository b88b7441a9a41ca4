"""
Traversal core: the only place that looks at collection structure.

Everything else in underbar walks collections through each() (and the
helpers built on it), so sequences and mappings are accepted uniformly.
"""

import inspect
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Iterator, Tuple

from .models import CollectionShape

_TEXT_TYPES = (str, bytes, bytearray)


class _NoValueType:
    """Marker for "no value here", distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "NO_VALUE"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_NoValueType, ())


NO_VALUE = _NoValueType()


def identity(value):
    return value


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without coercion: 1, 1.0 and True are all different values."""
    return a is b or (type(a) is type(b) and a == b)


def is_sequence(value: Any) -> bool:
    """True for list-like values; text is treated as a single value."""
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


class CollectionView:
    """Uniform read-only view over one of the supported collection shapes."""

    shape: CollectionShape

    def __init__(self, source):
        self.source = source

    def size(self) -> int:
        return len(self.source)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}({self.source!r})"


class SequenceView(CollectionView):
    shape = CollectionShape.SEQUENCE

    def items(self):
        source = self.source
        for index in range(len(source)):
            yield index, source[index]


class MappingView(CollectionView):
    shape = CollectionShape.MAPPING

    def items(self):
        source = self.source
        # snapshot keys; keys removed by a callback before their turn are skipped
        for key in list(source.keys()):
            if key in source:
                yield key, source[key]


def resolve_collection(collection) -> CollectionView:
    """Work out the shape of a collection once, at the entry of an operation."""
    if isinstance(collection, CollectionView):
        return collection
    if collection is None:
        return SequenceView(())
    if isinstance(collection, Mapping):
        return MappingView(collection)
    if isinstance(collection, Sequence):
        return SequenceView(collection)
    if isinstance(collection, Iterable):
        # sets, generators and other one-shot iterables
        return SequenceView(tuple(collection))
    raise TypeError(f"Expected a sequence or a mapping, got {type(collection).__name__}")


def _positional_capacity(fn: Callable, max_args: int, min_args: int = 1) -> int:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # no introspectable signature (builtins such as max): assume the minimum
        return min_args

    count = 0
    for param in signature.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return max_args
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return min(count, max_args)


def bind_iterator(fn: Callable, max_args: int = 3, min_args: int = 1) -> Callable:
    """Adapt a callback so it only receives the positional arguments it accepts.

    Iterator callbacks are called as fn(value, key, collection); a callback
    written as ``lambda x: ...`` gets just the value. Callables whose
    signature cannot be read get ``min_args`` arguments.
    """
    capacity = _positional_capacity(fn, max_args, min_args)
    if capacity >= max_args:
        return fn

    def bound(*args):
        return fn(*args[:capacity])

    return bound


def each(collection, iterator: Callable) -> None:
    """Call iterator(value, key, collection) for every element.

    Sequences are walked in index order, mappings in key order.
    """
    view = resolve_collection(collection)
    call = bind_iterator(iterator)
    for key, value in view.items():
        call(value, key, view.source)


def index_of(sequence, target) -> int:
    """Index of the first element strictly equal to target, or -1."""
    found = -1

    def check(value, index):
        nonlocal found
        if found == -1 and strict_equals(value, target):
            found = index

    each(sequence, check)
    return found


def size(collection) -> int:
    return resolve_collection(collection).size()

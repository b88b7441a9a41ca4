"""
Collection operations: functions that work on sequences and mappings alike.

Every function here walks its input with core.each() or with another
operation from this module; none of them iterates a collection directly.
"""

import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .core import NO_VALUE, bind_iterator, each, identity, index_of, resolve_collection, size, strict_equals
from .utils import InvalidArgumentError, MethodLookupError


def property_of(name: str) -> Callable[[Any], Any]:
    """Getter for a named property: a key on mappings, an attribute otherwise."""
    def getter(obj):
        if isinstance(obj, Mapping):
            return obj.get(name)
        return getattr(obj, name, None)
    return getter


def map(collection, transform: Callable = identity) -> List[Any]:
    results = []
    call = bind_iterator(transform)

    def collect(value, key, source):
        results.append(call(value, key, source))

    each(collection, collect)
    return results


def filter(collection, predicate: Callable = identity) -> List[Any]:
    """Elements for which predicate(value, key, collection) is truthy."""
    passed = []
    test = bind_iterator(predicate)

    def keep(value, key, source):
        if test(value, key, source):
            passed.append(value)

    each(collection, keep)
    return passed


def reject(collection, predicate: Callable = identity) -> List[Any]:
    """Elements for which the predicate is falsy, in their original order.

    Works on positions rather than values, so duplicates and index-aware
    predicates are handled exactly.
    """
    view = resolve_collection(collection)
    test = bind_iterator(predicate)
    entries = map(view, lambda value, key: (key, value))
    passing_keys = map(
        filter(entries, lambda entry: test(entry[1], entry[0], view.source)),
        lambda entry: entry[0]
    )
    return filter(view, lambda value, key: index_of(passing_keys, key) == -1)


def pluck(collection, property_name: str) -> List[Any]:
    return map(collection, property_of(property_name))


@dataclass(frozen=True)
class NamedMethod:
    """invoke() target: a method looked up by name on every element"""
    name: str

    def call(self, element, args: Tuple, kwargs: Dict[str, Any]):
        try:
            method = getattr(element, self.name)
        except AttributeError as e:
            raise MethodLookupError(
                f"'{type(element).__name__}' object has no method '{self.name}'"
            ) from e
        return method(*args, **kwargs)


@dataclass(frozen=True)
class CallableValue:
    """invoke() target: a function called with each element as its receiver"""
    function: Callable

    def call(self, element, args: Tuple, kwargs: Dict[str, Any]):
        return self.function(element, *args, **kwargs)


def resolve_invoke_target(method: Union[str, Callable, NamedMethod, CallableValue]):
    if isinstance(method, (NamedMethod, CallableValue)):
        return method
    if isinstance(method, str):
        return NamedMethod(method)
    if callable(method):
        return CallableValue(method)
    raise TypeError(f"invoke() expects a method name or a callable, got {type(method).__name__}")


def invoke(collection, method, *args, **kwargs) -> List[Any]:
    """Call a method on every element and collect the results.

    ``method`` is either a method name, looked up on each element, or a
    function that receives the element as its first argument. Extra
    arguments are passed through to every call.
    """
    target = resolve_invoke_target(method)
    return map(collection, lambda value: target.call(value, args, kwargs))


def reduce(collection, combine: Callable, initial: Any = NO_VALUE) -> Any:
    """Fold a collection from left to right.

    combine is called as combine(memo, value, key, collection). Without an
    initial value the first element seeds the fold; an empty collection with
    no initial value raises InvalidArgumentError.
    """
    step = bind_iterator(combine, max_args=4, min_args=2)
    memo = initial
    seeded = initial is not NO_VALUE

    def fold(value, key, source):
        nonlocal memo, seeded
        if not seeded:
            memo = value
            seeded = True
            return
        memo = step(memo, value, key, source)

    each(collection, fold)
    if not seeded:
        raise InvalidArgumentError("reduce() of an empty collection with no initial value")
    return memo


def contains(collection, target) -> bool:
    return reduce(collection, lambda found, item: found or strict_equals(item, target), False)


def every(collection, predicate: Callable = identity) -> bool:
    """True when the predicate holds for all elements (vacuously for none)."""
    test = bind_iterator(predicate)
    return reduce(
        collection,
        lambda passed, value, key, source: passed and bool(test(value, key, source)),
        True
    )


def some(collection, predicate: Callable = identity) -> bool:
    test = bind_iterator(predicate)
    return not every(collection, lambda value, key, source: not test(value, key, source))


def shuffle(collection, rng: Optional[random.Random] = None) -> List[Any]:
    """New list holding a uniform random permutation (Fisher-Yates).

    Pass a seeded random.Random as ``rng`` for a reproducible order.
    """
    source = rng if rng is not None else random
    shuffled = map(collection, identity)

    def swap(position):
        other = source.randrange(position + 1)
        shuffled[position], shuffled[other] = shuffled[other], shuffled[position]

    each(range(size(shuffled) - 1, 0, -1), swap)
    return shuffled


def _sort_key(entry):
    criteria, position, _ = entry
    # None sorts after every other key; position keeps the sort stable
    return (criteria is None, criteria, position)


def sort_by(collection, criterion: Union[str, Callable] = identity) -> List[Any]:
    """New list ordered by criterion, ascending and stable.

    criterion is either a function of (value, key, collection) or the name
    of a property to read from each element.
    """
    if isinstance(criterion, str):
        criterion = property_of(criterion)
    key_of = bind_iterator(criterion)
    decorated = []

    def decorate(value, key, source):
        decorated.append((key_of(value, key, source), len(decorated), value))

    each(collection, decorate)
    decorated.sort(key=_sort_key)
    return map(decorated, lambda entry: entry[2])

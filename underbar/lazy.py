from typing import Any, Callable, Dict, List, Optional, Tuple

from . import arrays, collection, core, objects


def _tap(value, interceptor):
    interceptor(value)
    return value


def _each(value, iterator):
    core.each(value, iterator)
    return value


# name -> function(value, *args, **kwargs)
_OPERATIONS: Dict[str, Callable] = {
    "each": _each,
    "tap": _tap,
    "index_of": core.index_of,
    "size": core.size,
    "map": collection.map,
    "filter": collection.filter,
    "reject": collection.reject,
    "pluck": collection.pluck,
    "invoke": collection.invoke,
    "reduce": collection.reduce,
    "contains": collection.contains,
    "every": collection.every,
    "some": collection.some,
    "shuffle": collection.shuffle,
    "sort_by": collection.sort_by,
    "first": arrays.first,
    "last": arrays.last,
    "uniq": arrays.uniq,
    "zip": arrays.zip,
    "flatten": arrays.flatten,
    "intersection": arrays.intersection,
    "difference": arrays.difference,
    "extend": objects.extend,
    "defaults": objects.defaults,
}


class Chain:
    """
    A chainable wrapper around a value. Each operation returns a new Chain
    with the operation queued; nothing runs until value() (or iteration)
    realizes the pipeline.
    """
    def __init__(self, source, ops=None):
        self._source = source
        self._ops: List[Tuple[str, tuple, dict]] = ops or []   # sequence of (op_name, args, kwargs)

    # --------- chainable operators (lazy) ----------
    def each(self, iterator):
        """Run iterator over the value for its side effects; the value passes through"""
        return self._with_op("each", iterator)

    def tap(self, interceptor):
        """Call interceptor with the intermediate value; the value passes through"""
        return self._with_op("tap", interceptor)

    def map(self, transform=core.identity):
        return self._with_op("map", transform)

    def filter(self, predicate=core.identity):
        return self._with_op("filter", predicate)

    def reject(self, predicate=core.identity):
        return self._with_op("reject", predicate)

    def pluck(self, property_name):
        return self._with_op("pluck", property_name)

    def invoke(self, method, *args, **kwargs):
        return self._with_op("invoke", method, *args, **kwargs)

    def shuffle(self, rng=None):
        return self._with_op("shuffle", rng)

    def sort_by(self, criterion=core.identity):
        return self._with_op("sort_by", criterion)

    def first(self, n: Optional[int] = None):
        return self._with_op("first", n)

    def last(self, n: Optional[int] = None):
        return self._with_op("last", n)

    def uniq(self):
        return self._with_op("uniq")

    def zip(self, *others):
        """Zip the current value with other sequences"""
        return self._with_op("zip", *others)

    def flatten(self, shallow: bool = False):
        return self._with_op("flatten", shallow)

    def intersection(self, *others):
        return self._with_op("intersection", *others)

    def difference(self, *others):
        return self._with_op("difference", *others)

    def extend(self, *sources):
        return self._with_op("extend", *sources)

    def defaults(self, *sources):
        return self._with_op("defaults", *sources)

    # --------- reducing operators (still chained; unwrap with value()) ----------
    def reduce(self, combine, initial=core.NO_VALUE):
        return self._with_op("reduce", combine, initial)

    def contains(self, target):
        return self._with_op("contains", target)

    def every(self, predicate=core.identity):
        return self._with_op("every", predicate)

    def some(self, predicate=core.identity):
        return self._with_op("some", predicate)

    def index_of(self, target):
        return self._with_op("index_of", target)

    def size(self):
        return self._with_op("size")

    # --------- forcing evaluation ----------
    def value(self) -> Any:
        """Run the queued operations in order and return the plain result"""
        result = self._source
        for op, args, kwargs in self._ops:
            operation = _OPERATIONS.get(op)
            if operation is None:
                raise ValueError(f"Unknown op: {op}")
            result = operation(result, *args, **kwargs)
        return result

    def to_list(self) -> List[Any]:
        return list(self)

    # --------- iterator protocol ----------
    def __iter__(self):
        # mappings yield their values, like every other collection operation
        return iter(collection.map(self.value()))

    def __repr__(self):
        names = [op for op, _, _ in self._ops]
        return f"Chain({self._source!r}, ops={names})"

    # --------- helpers ----------
    def _with_op(self, op, *args, **kwargs):
        return Chain(self._source, self._ops + [(op, args, kwargs)])


def chain(obj) -> Chain:
    return Chain(obj)

"""
underbar - functional helpers for sequences, mappings and functions.

    import underbar as _

    _.chain(people).sort_by("age").pluck("name").first(2).value()
"""

from .arrays import difference, first, flatten, intersection, last, uniq, zip
from .collection import (
    CallableValue,
    NamedMethod,
    contains,
    every,
    filter,
    invoke,
    map,
    pluck,
    reduce,
    reject,
    shuffle,
    some,
    sort_by,
)
from .core import NO_VALUE, each, identity, index_of, size, strict_equals
from .functions import (
    Memoized,
    Once,
    ScheduledCall,
    Throttled,
    defer,
    delay,
    memoize,
    once,
    throttle,
)
from .lazy import Chain, chain
from .models import DelayOptions, ThrottleOptions, UnderbarSettings
from .objects import defaults, extend
from .utils import (
    InvalidArgumentError,
    MethodLookupError,
    UnderbarError,
    configure_logging,
    get_settings,
    load_settings,
)

__version__ = "1.0.0"

__all__ = [
    "NO_VALUE",
    "each",
    "identity",
    "index_of",
    "size",
    "strict_equals",
    "first",
    "last",
    "map",
    "filter",
    "reject",
    "uniq",
    "pluck",
    "invoke",
    "NamedMethod",
    "CallableValue",
    "reduce",
    "contains",
    "every",
    "some",
    "shuffle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
    "extend",
    "defaults",
    "once",
    "memoize",
    "delay",
    "defer",
    "throttle",
    "chain",
    "Once",
    "Memoized",
    "ScheduledCall",
    "Throttled",
    "Chain",
    "DelayOptions",
    "ThrottleOptions",
    "UnderbarSettings",
    "UnderbarError",
    "InvalidArgumentError",
    "MethodLookupError",
    "configure_logging",
    "get_settings",
    "load_settings",
]

"""
Function decorators: once, memoize, delay/defer and throttle.

Each wrapper is a callable object that owns its state explicitly (a small
dataclass or a dict) instead of capturing it in a closure, so the state of
one wrapper is never shared with another.
"""

import functools
import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from .core import NO_VALUE
from .models import DelayOptions, ThrottleOptions
from .utils import InvalidArgumentError, get_settings

logger = logging.getLogger(__name__)


def _build_options(model: Type[BaseModel], **values) -> Any:
    try:
        return model(**values)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid {model.__name__}: {e}") from e


def _describe(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


# --------- once ----------

@dataclass
class OnceState:
    """Invocation record for one Once wrapper."""
    called: bool = False
    result: Any = None


class Once:
    """Calls the wrapped function the first time only, then replays its result."""

    def __init__(self, fn: Callable):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._state = OnceState()

    @property
    def called(self) -> bool:
        return self._state.called

    def __call__(self, *args, **kwargs):
        if not self._state.called:
            # if fn raises, the wrapper stays uncalled
            self._state.result = self._fn(*args, **kwargs)
            self._state.called = True
        return self._state.result

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return functools.partial(self, instance)


def once(fn: Callable) -> Once:
    return Once(fn)


# --------- memoize ----------

class Memoized:
    """Caches results by argument. The cache is unbounded and never evicts.

    Without a hasher the first positional argument is the cache key, so the
    wrapped function should take a single hashable argument. Keys follow
    dict semantics: 1, 1.0 and True share an entry.
    """

    def __init__(self, fn: Callable, hasher: Optional[Callable] = None):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._hasher = hasher
        self._cache: Dict[Any, Any] = {}

    @property
    def cache(self):
        return MappingProxyType(self._cache)

    def _key(self, args: Tuple, kwargs: Dict[str, Any]):
        if self._hasher is not None:
            return self._hasher(*args, **kwargs)
        return args[0] if args else NO_VALUE

    def __call__(self, *args, **kwargs):
        key = self._key(args, kwargs)
        if key in self._cache:
            return self._cache[key]

        logger.debug(f"memoize cache miss for {_describe(self._fn)} key={key!r}")
        result = self._fn(*args, **kwargs)
        self._cache[key] = result
        return result


def memoize(fn: Callable, hasher: Optional[Callable] = None) -> Memoized:
    return Memoized(fn, hasher)


# --------- delay / defer ----------

class ScheduledCall:
    """Handle for a call scheduled by delay().

    The call runs on a timer thread. Its outcome is kept on a Future, so
    result() returns the value (or raises the error) once the call has run.
    """

    def __init__(self, fn: Callable, options: DelayOptions, args: Tuple, kwargs: Dict[str, Any],
                 daemon: bool = True):
        self._fn = fn
        self._args = args
        self._kwargs = kwargs
        self._future: Future = Future()
        self._timer = threading.Timer(options.wait_seconds, self._run)
        self._timer.daemon = daemon
        self.wait_ms = options.wait_ms

    def start(self) -> "ScheduledCall":
        self._timer.start()
        logger.debug(f"Scheduled {_describe(self._fn)} in {self.wait_ms}ms")
        return self

    def _run(self):
        if not self._future.set_running_or_notify_cancel():
            return

        logger.debug(f"Running delayed call {_describe(self._fn)}")
        try:
            result = self._fn(*self._args, **self._kwargs)
        except Exception as e:
            logger.error(f"Delayed call {_describe(self._fn)} failed: {e}", exc_info=True)
            self._future.set_exception(e)
        else:
            self._future.set_result(result)

    def cancel(self) -> bool:
        """Stop the call if it has not started. Returns True if it was stopped."""
        self._timer.cancel()
        cancelled = self._future.cancel()
        if cancelled:
            logger.debug(f"Cancelled delayed call {_describe(self._fn)}")
        return cancelled

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Any:
        return self._future.result(timeout)


def delay(fn: Callable, wait_ms: float, *args, **kwargs) -> ScheduledCall:
    """Call fn(*args, **kwargs) after at least wait_ms milliseconds.

    Returns immediately with a ScheduledCall that can cancel the call or
    wait for its result.
    """
    options = _build_options(DelayOptions, wait_ms=wait_ms)
    return ScheduledCall(fn, options, args, kwargs, daemon=get_settings().daemon_timers).start()


def defer(fn: Callable, *args, **kwargs) -> ScheduledCall:
    return delay(fn, 0, *args, **kwargs)


# --------- throttle ----------

@dataclass
class ThrottleState:
    """Timer state owned by one Throttled wrapper."""
    previous: Optional[float] = None  # clock reading of the last call, None if none yet
    timer: Optional[threading.Timer] = None
    pending_args: Tuple = ()
    pending_kwargs: Dict[str, Any] = field(default_factory=dict)
    result: Any = None
    generation: int = 0  # bumped whenever a scheduled trailing call is superseded


class Throttled:
    """Runs the wrapped function at most once per window.

    A call in a quiet period runs straight away (leading edge). Calls that
    land inside an active window are folded into a single trailing call,
    made with the latest arguments when the window closes; with
    trailing=False they are dropped instead. Every call returns the result
    of the most recent real invocation.
    """

    def __init__(self, fn: Callable, options: ThrottleOptions,
                 clock: Callable[[], float] = time.monotonic, daemon: bool = True):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._options = options
        self._clock = clock
        self._daemon = daemon
        self._state = ThrottleState()
        self._lock = threading.RLock()

    @property
    def options(self) -> ThrottleOptions:
        return self._options

    @property
    def pending(self) -> bool:
        return self._state.timer is not None

    def __call__(self, *args, **kwargs):
        wait = self._options.wait_seconds
        run_now = False

        with self._lock:
            state = self._state
            now = self._clock()
            if state.previous is None and not self._options.leading:
                state.previous = now

            remaining = 0.0 if state.previous is None else wait - (now - state.previous)
            # remaining > wait means the clock went backwards
            if remaining <= 0 or remaining > wait:
                self._cancel_timer()
                state.previous = now
                run_now = True
            elif self._options.trailing:
                state.pending_args, state.pending_kwargs = args, kwargs
                if state.timer is None:
                    state.timer = threading.Timer(remaining, self._fire_trailing, args=(state.generation,))
                    state.timer.daemon = self._daemon
                    state.timer.start()
                    logger.debug(f"Throttled {_describe(self._fn)}: trailing call in {remaining * 1000:.1f}ms")
            else:
                logger.debug(f"Throttled {_describe(self._fn)}: call dropped")

        if run_now:
            result = self._fn(*args, **kwargs)
            with self._lock:
                self._state.result = result
        return self._state.result

    def _fire_trailing(self, generation: int):
        with self._lock:
            state = self._state
            if generation != state.generation:
                # superseded by a leading call or cancel() while waiting on the lock
                return
            state.previous = self._clock() if self._options.leading else None
            state.timer = None
            args, kwargs = state.pending_args, state.pending_kwargs
            state.pending_args, state.pending_kwargs = (), {}

        logger.debug(f"Throttled {_describe(self._fn)}: running trailing call")
        try:
            result = self._fn(*args, **kwargs)
        except Exception as e:
            logger.error(f"Trailing call {_describe(self._fn)} failed: {e}", exc_info=True)
            return
        with self._lock:
            state.result = result

    def _cancel_timer(self):
        state = self._state
        if state.timer is not None:
            state.timer.cancel()
            state.timer = None
        state.generation += 1
        state.pending_args, state.pending_kwargs = (), {}

    def cancel(self):
        """Drop any pending trailing call and start the next window fresh."""
        with self._lock:
            self._cancel_timer()
            self._state.previous = None


def throttle(fn: Callable, wait_ms: float, leading: bool = True, trailing: bool = True) -> Throttled:
    options = _build_options(ThrottleOptions, wait_ms=wait_ms, leading=leading, trailing=trailing)
    return Throttled(fn, options, daemon=get_settings().daemon_timers)

"""
In-process monitoring registry.

The registry owns every Func, tracks root spans that are currently running,
aggregates stats from funcs and chained stat sources, and fans span events
out to trace observers.
"""

import functools
import logging
import threading
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .func import Func
from .span import FinishedSpan, Span

logger = logging.getLogger(__name__)

StatSource = Callable[[], Iterable[Tuple[str, float]]]


class Registry:
    """Thread-safe registry of monitored funcs, live spans and stat sources."""

    def __init__(self):
        self._lock = threading.Lock()
        self._funcs: Dict[Tuple[str, str], Func] = {}
        self._roots: Dict[int, Span] = {}
        self._observers: List = []
        self._sources: List[Tuple[str, StatSource]] = []

    def func(self, scope: str, name: str) -> Func:
        """
        Return the Func for scope and name, creating it on first use.

        Args:
            scope: Grouping name, usually a module path
            name: Function name within the scope

        Returns:
            The registered Func
        """
        key = (scope, name)
        with self._lock:
            func = self._funcs.get(key)
            if func is None:
                func = Func(self, scope, name)
                self._funcs[key] = func
                logger.debug("registered func %s", func.full_name)
        return func

    def task(self, scope: Optional[str] = None, name: Optional[str] = None):
        """
        Decorator that monitors every call of the wrapped callable.

        Scope defaults to the callable's module and name to its qualified
        name.
        """
        def decorator(fn):
            func = self.func(scope or fn.__module__, name or fn.__qualname__)

            @functools.wraps(fn)
            def wrapper(*args, **kwargs):
                with func.span():
                    return fn(*args, **kwargs)

            wrapper.func = func
            return wrapper

        return decorator

    def funcs(self) -> List[Func]:
        """Snapshot of every known func, sorted by full name."""
        with self._lock:
            funcs = list(self._funcs.values())
        return sorted(funcs, key=lambda f: f.full_name)

    def root_spans(self) -> List[Span]:
        """Snapshot of running spans without a parent, in start order."""
        with self._lock:
            return list(self._roots.values())

    def all_spans(self) -> Iterator[Tuple[int, Span]]:
        """Yield (depth, span) for every running span, depth first."""
        for root in self.root_spans():
            yield from root.walk()

    def chain(self, prefix: str, source: StatSource):
        """Add a stat source whose names are reported under prefix."""
        with self._lock:
            self._sources.append((prefix, source))

    def stats(self) -> Iterator[Tuple[str, float]]:
        """Yield (name, value) for every func counter and chained source."""
        for func in self.funcs():
            for key, value in func.stats():
                yield f'{func.full_name}.{key}', value
        with self._lock:
            sources = list(self._sources)
        for prefix, source in sources:
            for key, value in source():
                yield f'{prefix}{key}', value

    def observe_traces(self, observer) -> Callable[[], None]:
        """
        Register an observer notified of every span start and finish.

        Observers implement span_started(span) and
        span_finished(finished_span). Exceptions they raise are logged and
        never reach the monitored code.

        Returns:
            A callable that unregisters the observer
        """
        with self._lock:
            self._observers.append(observer)
        logger.debug("trace observer %r registered", observer)

        def unregister():
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)
            logger.debug("trace observer %r unregistered", observer)

        return unregister

    def _span_started(self, span: Span):
        with self._lock:
            if span.parent is None:
                self._roots[span.id] = span
            observers = list(self._observers)
        for observer in observers:
            try:
                observer.span_started(span)
            except Exception:
                logger.exception("trace observer %r failed on span start", observer)

    def _span_finished(self, span: Span, error: Optional[BaseException], finish: float):
        with self._lock:
            self._roots.pop(span.id, None)
            observers = list(self._observers)
        error_name = type(error).__name__ if error is not None else None
        finished = FinishedSpan(span, error_name, finish)
        for observer in observers:
            try:
                observer.span_finished(finished)
            except Exception:
                logger.exception("trace observer %r failed on span finish", observer)


_default = Registry()


def default_registry() -> Registry:
    """Return the process-wide registry."""
    return _default

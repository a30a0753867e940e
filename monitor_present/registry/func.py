"""
Monitored function entity and its counters.
"""

import copy
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from .span import run_span


class DurationDist:
    """Running count, sum, minimum and maximum of durations in seconds."""

    def __init__(self):
        self.count = 0
        self.total = 0.0
        self.low: Optional[float] = None
        self.high: Optional[float] = None

    def insert(self, value: float):
        self.count += 1
        self.total += value
        if self.low is None or value < self.low:
            self.low = value
        if self.high is None or value > self.high:
            self.high = value

    @property
    def average(self) -> float:
        if not self.count:
            return 0.0
        return self.total / self.count

    def stats(self) -> Iterator[Tuple[str, float]]:
        yield 'count', float(self.count)
        yield 'sum', self.total
        yield 'min', self.low or 0.0
        yield 'avg', self.average
        yield 'max', self.high or 0.0

    def to_dict(self) -> Dict[str, float]:
        return dict(self.stats())


class Func:
    """
    A monitored function, identified by its scope and name.

    Funcs are created through Registry.func() and live for the lifetime of
    the registry. Counters are updated by the spans running on them.
    """

    def __init__(self, registry, scope: str, name: str):
        self.registry = registry
        self.scope = scope
        self.name = name

        self._lock = threading.Lock()
        self.current = 0
        self.highwater = 0
        self.success = 0
        self.errors: Dict[str, int] = {}
        self.success_times = DurationDist()
        self.failure_times = DurationDist()
        self._parents: Set['Func'] = set()
        self._entry = False

    @property
    def full_name(self) -> str:
        return f'{self.scope}.{self.name}'

    def __repr__(self) -> str:
        return f'<Func {self.full_name}>'

    @contextmanager
    def span(self, trace=None):
        """
        Run the enclosed block as a span of this function.

        The span becomes a child of the span active in the current context
        when both share a trace; otherwise it starts a new root span, on a
        fresh trace unless one is given.

        Args:
            trace: Optional Trace to attach the span to

        Yields:
            The live Span
        """
        with run_span(self, trace) as span:
            yield span

    def _started(self, parent: Optional['Func']):
        with self._lock:
            self.current += 1
            if self.current > self.highwater:
                self.highwater = self.current
            if parent is None:
                self._entry = True
            else:
                self._parents.add(parent)

    def _finished(self, duration: float, error: Optional[BaseException]):
        with self._lock:
            self.current -= 1
            if error is None:
                self.success += 1
                self.success_times.insert(duration)
            else:
                error_name = type(error).__name__
                self.errors[error_name] = self.errors.get(error_name, 0) + 1
                self.failure_times.insert(duration)

    def parents(self) -> List['Func']:
        """Return the funcs observed calling this one, sorted by full name."""
        with self._lock:
            parents = list(self._parents)
        return sorted(parents, key=lambda f: f.full_name)

    @property
    def is_entry(self) -> bool:
        """True when this func has run as the root span of a trace."""
        return self._entry

    def snapshot(self) -> Dict[str, Any]:
        """Consistent copy of the counters and duration distributions."""
        with self._lock:
            return {
                'current': self.current,
                'highwater': self.highwater,
                'success': self.success,
                'errors': dict(sorted(self.errors.items())),
                'success_times': copy.copy(self.success_times),
                'failure_times': copy.copy(self.failure_times),
            }

    def stats(self) -> List[Tuple[str, float]]:
        """Return (key, value) pairs describing this func's counters."""
        with self._lock:
            stats = [
                ('current', float(self.current)),
                ('highwater', float(self.highwater)),
                ('success', float(self.success)),
                ('errors', float(sum(self.errors.values()))),
            ]
            for error_name in sorted(self.errors):
                stats.append((f'error {error_name}', float(self.errors[error_name])))
            for key, value in self.success_times.stats():
                stats.append((f'success times {key}', value))
            for key, value in self.failure_times.stats():
                stats.append((f'failure times {key}', value))
        return stats

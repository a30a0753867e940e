"""
Span and trace entities.

The span active in the current thread or task is tracked with a ContextVar,
so nested monitored calls attach themselves to their caller's span.
"""

import itertools
import random
import threading
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

_current_span: ContextVar[Optional['Span']] = ContextVar('monitor_present_span', default=None)
_span_ids = itertools.count(1)

MAX_TRACE_ID = (1 << 64) - 1


def current_span() -> Optional['Span']:
    """Return the span active in the current context, if any."""
    return _current_span.get()


class Trace:
    """A tree of spans sharing one identifier."""

    def __init__(self, trace_id: Optional[int] = None):
        if trace_id is None:
            trace_id = random.getrandbits(63)
        if not 0 <= trace_id <= MAX_TRACE_ID:
            raise ValueError(f"trace id out of unsigned 64 bit range: {trace_id}")
        self.id = trace_id

    def __repr__(self) -> str:
        return f'<Trace {self.id:016x}>'


class Span:
    """One live execution of a Func."""

    def __init__(self, func, trace: Trace, parent: Optional['Span'] = None):
        self.id = next(_span_ids)
        self.func = func
        self.trace = trace
        self.parent = parent
        self.start = time.time()
        self.annotations: List[Tuple[str, str]] = []
        self._lock = threading.Lock()
        self._children: List['Span'] = []

    def __repr__(self) -> str:
        return f'<Span {self.id} {self.func.full_name}>'

    def annotate(self, key: str, value: str):
        with self._lock:
            self.annotations.append((key, str(value)))

    def duration(self) -> float:
        """Elapsed seconds since the span started."""
        return time.time() - self.start

    def children(self) -> List['Span']:
        """Return the live child spans in start order."""
        with self._lock:
            return list(self._children)

    def descends_from(self, ancestor: 'Span') -> bool:
        """True if this span is ancestor itself or runs beneath it."""
        span = self
        while span is not None:
            if span is ancestor:
                return True
            span = span.parent
        return False

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, 'Span']]:
        """Yield (depth, span) for this span and its live descendants."""
        yield depth, self
        for child in self.children():
            yield from child.walk(depth + 1)

    def _add_child(self, child: 'Span'):
        with self._lock:
            self._children.append(child)

    def _remove_child(self, child: 'Span'):
        with self._lock:
            if child in self._children:
                self._children.remove(child)


@dataclass(frozen=True)
class FinishedSpan:
    """Record of a completed span, as collected by trace observers."""
    span: Span
    error: Optional[str]
    finish: float

    @property
    def duration(self) -> float:
        return self.finish - self.span.start


@contextmanager
def run_span(func, trace: Optional[Trace] = None) -> Iterator[Span]:
    """
    Start a span of func, make it current, and finish it on exit.

    Exceptions raised inside the block are recorded on the func's counters
    and re-raised.
    """
    parent = current_span()
    if trace is None:
        trace = parent.trace if parent is not None else Trace()
    if parent is not None and parent.trace is not trace:
        parent = None

    span = Span(func, trace, parent)
    if parent is not None:
        parent._add_child(span)
    func._started(parent.func if parent is not None else None)
    func.registry._span_started(span)

    token = _current_span.set(span)
    error = None
    try:
        yield span
    except Exception as exc:
        error = exc
        raise
    finally:
        _current_span.reset(token)
        finish = time.time()
        if parent is not None:
            parent._remove_child(span)
        func._finished(finish - span.start, error)
        func.registry._span_finished(span, error, finish)

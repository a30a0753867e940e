"""
Trace observer that captures the trace of the next matching span.
"""

import logging
import threading
from typing import Callable, List, Optional

from .span import FinishedSpan, Span

logger = logging.getLogger(__name__)


class SpanCollector:
    """
    Waits for the first span accepted by a matcher, then collects every span
    beneath it that finishes, up to and including the triggering span.

    Spans already running when the trigger starts are never collected, and
    only the first matching span ever triggers.
    """

    def __init__(self, matcher: Callable[[Span], bool]):
        self.matcher = matcher
        self._lock = threading.Lock()
        self._root: Optional[Span] = None
        self._finished: List[FinishedSpan] = []
        self._done = threading.Event()

    def span_started(self, span: Span):
        with self._lock:
            if self._root is not None:
                return
            if not self.matcher(span):
                return
            self._root = span
        logger.debug("trace collection triggered by %r on %r", span, span.trace)

    def span_finished(self, finished: FinishedSpan):
        with self._lock:
            if self._root is None or self._done.is_set():
                return
            if not finished.span.descends_from(self._root):
                return
            self._finished.append(finished)
            if finished.span is self._root:
                self._done.set()
                logger.debug("trace collection done with %d spans", len(self._finished))

    def wait(self, timeout: Optional[float] = None) -> List[FinishedSpan]:
        """
        Block until the triggering span finishes.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            Collected spans in finish order, triggering span last

        Raises:
            TimeoutError: If timeout expires first
        """
        if not self._done.wait(timeout):
            raise TimeoutError(f"no matching span finished within {timeout} seconds")
        with self._lock:
            return list(self._finished)

"""
Producers for trace queries (the trace resource).
"""

import logging
from typing import List, Optional, TextIO

from ..formatters import render_trace_json, render_trace_svg
from ..registry import SpanCollector
from .base import Producer

logger = logging.getLogger(__name__)


class TraceProducer(Producer):
    """
    Waits for the next span accepted by matcher and renders its trace.

    Until the triggering span finishes, the collector observes every span
    the registry starts or finishes.
    """

    def __init__(self, registry, matcher, timeout: Optional[float] = None):
        super().__init__(registry)
        self.matcher = matcher
        self.timeout = timeout

    def collect(self) -> List:
        """
        Observe the registry until a matching span finishes.

        Returns:
            FinishedSpans in finish order, triggering span last

        Raises:
            TimeoutError: If a timeout is set and expires first
        """
        collector = SpanCollector(self.matcher)
        unregister = self.registry.observe_traces(collector)
        try:
            logger.debug("waiting for span matching %r", self.matcher)
            return collector.wait(self.timeout)
        finally:
            unregister()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.matcher!r})'


class TraceJSONProducer(TraceProducer):
    def produce(self, sink: TextIO):
        render_trace_json(self.collect(), sink)


class TraceSVGProducer(TraceProducer):
    def produce(self, sink: TextIO):
        render_trace_svg(self.collect(), sink)

"""
Result producer interface and the buffering decorator.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import TextIO

logger = logging.getLogger(__name__)


class Producer(ABC):
    """
    Deferred, single-use rendering of selected registry data.

    A producer is bound to its registry and parameters when constructed and
    writes its complete representation when produce() is called. Failures
    are raised.
    """

    def __init__(self, registry):
        self.registry = registry

    @abstractmethod
    def produce(self, sink: TextIO):
        """Write the full representation to sink."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class BufferedProducer(Producer):
    """
    Runs the inner producer against an in-memory buffer and commits the
    buffer to the sink only once the inner producer has succeeded.

    If the inner producer raises, nothing is written to the sink. Errors
    raised by the sink while writing or flushing propagate.
    """

    def __init__(self, inner: Producer):
        super().__init__(inner.registry)
        self.inner = inner

    def produce(self, sink: TextIO):
        buf = io.StringIO()
        try:
            self.inner.produce(buf)
        except Exception:
            logger.debug("%r failed, discarding %d buffered chars", self.inner, buf.tell())
            raise
        sink.write(buf.getvalue())
        flush = getattr(sink, 'flush', None)
        if flush is not None:
            flush()

    def __repr__(self) -> str:
        return f'BufferedProducer({self.inner!r})'

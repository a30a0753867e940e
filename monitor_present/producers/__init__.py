"""Result producers: deferred renderers bound to a registry and format."""

from .base import BufferedProducer, Producer
from .funcs_producer import FuncsDotProducer, FuncsJSONProducer, FuncsTextProducer
from .spans_producer import SpansDotProducer, SpansJSONProducer, SpansTextProducer
from .stats_producer import StatsJSONProducer, StatsProducer, StatsTextProducer
from .trace_producer import TraceJSONProducer, TraceProducer, TraceSVGProducer

__all__ = [
    "Producer",
    "BufferedProducer",
    "SpansTextProducer",
    "SpansDotProducer",
    "SpansJSONProducer",
    "FuncsTextProducer",
    "FuncsDotProducer",
    "FuncsJSONProducer",
    "StatsProducer",
    "StatsTextProducer",
    "StatsJSONProducer",
    "TraceProducer",
    "TraceJSONProducer",
    "TraceSVGProducer",
]

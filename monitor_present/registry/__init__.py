"""In-process monitoring registry: funcs, spans, traces and stats."""

from .collector import SpanCollector
from .func import DurationDist, Func
from .registry import Registry, default_registry
from .span import FinishedSpan, Span, Trace, current_span

__all__ = [
    "Registry",
    "default_registry",
    "Func",
    "DurationDist",
    "Span",
    "Trace",
    "FinishedSpan",
    "SpanCollector",
    "current_span",
]

"""Renderers turning selected registry entities into text, DOT, JSON or SVG."""

from .funcs_formatter import render_funcs_dot, render_funcs_json, render_funcs_text
from .spans_formatter import render_spans_dot, render_spans_json, render_spans_text
from .stats_formatter import filter_stats, render_stats_json, render_stats_text
from .time_formatter import format_duration
from .trace_formatter import TraceTree, render_trace_json, render_trace_svg

__all__ = [
    "format_duration",
    "render_spans_text",
    "render_spans_dot",
    "render_spans_json",
    "render_funcs_text",
    "render_funcs_dot",
    "render_funcs_json",
    "filter_stats",
    "render_stats_text",
    "render_stats_json",
    "TraceTree",
    "render_trace_json",
    "render_trace_svg",
]

"""
Renderers for the currently running span trees.
"""

import json
from typing import Any, Dict, Iterable, TextIO, Tuple

from .dot import dot_escape
from .time_formatter import format_duration


def format_trace_id(trace_id: int) -> str:
    return f'{trace_id:016x}'


def span_to_dict(span) -> Dict[str, Any]:
    """Convert a live span and its children to a JSON-ready dictionary."""
    return {
        'id': span.id,
        'func': span.func.full_name,
        'trace_id': format_trace_id(span.trace.id),
        'parent_id': span.parent.id if span.parent is not None else None,
        'start': span.start,
        'elapsed': span.duration(),
        'annotations': [list(pair) for pair in span.annotations],
        'children': [span_to_dict(child) for child in span.children()],
    }


def render_spans_text(spans: Iterable[Tuple[int, Any]], out: TextIO):
    """
    Write one line per running span, indented by depth beneath its root.

    Args:
        spans: (depth, span) pairs depth first, as from Registry.all_spans()
        out: Text sink
    """
    for depth, span in spans:
        if depth == 0:
            out.write(f"[trace {format_trace_id(span.trace.id)}]\n")
        line = f"{'  ' * (depth + 1)}{span.func.full_name} #{span.id} ({format_duration(span.duration())})"
        for key, value in span.annotations:
            line += f" {key}={value}"
        out.write(line + "\n")


def render_spans_dot(spans: Iterable[Tuple[int, Any]], out: TextIO):
    """Write running spans as a graphviz digraph, edges pointing to children."""
    out.write("digraph G {\n")
    out.write("  node [shape=box];\n")
    for _, span in spans:
        label = f"{dot_escape(span.func.full_name)}\\n#{span.id} {format_duration(span.duration())}"
        out.write(f'  s{span.id} [label="{label}"];\n')
        if span.parent is not None:
            out.write(f"  s{span.parent.id} -> s{span.id};\n")
    out.write("}\n")


def render_spans_json(roots: Iterable, out: TextIO):
    """Write running spans as a JSON list of nested root spans."""
    json.dump([span_to_dict(root) for root in roots], out, indent=2)
    out.write("\n")

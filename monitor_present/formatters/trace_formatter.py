"""
Renderers for a collected trace: nested JSON and an SVG timeline.
"""

import json
from typing import Any, Dict, List, Optional, TextIO, Tuple
from xml.sax.saxutils import escape, quoteattr

from .spans_formatter import format_trace_id
from .time_formatter import format_duration

SVG_WIDTH = 1200
SVG_ROW_HEIGHT = 22
SVG_MARGIN = 10
SVG_LABEL_MIN_WIDTH = 40


class TraceTree:
    """Finished spans of one trace arranged beneath the triggering span."""

    def __init__(self, finished: List):
        if not finished:
            raise ValueError("a trace tree needs at least one finished span")
        # the triggering span always finishes last
        self.root = finished[-1]
        self._by_span = {f.span.id: f for f in finished}
        self._children: Dict[int, List] = {}
        for f in finished:
            if f is self.root or f.span.parent is None:
                continue
            self._children.setdefault(f.span.parent.id, []).append(f)
        for children in self._children.values():
            children.sort(key=lambda f: (f.span.start, f.span.id))

    def children(self, finished) -> List:
        return self._children.get(finished.span.id, [])

    def walk(self, finished=None, depth: int = 0):
        """Yield (depth, finished span) in start order, root first."""
        finished = finished if finished is not None else self.root
        yield depth, finished
        for child in self.children(finished):
            yield from self.walk(child, depth + 1)

    @property
    def start(self) -> float:
        return self.root.span.start

    @property
    def duration(self) -> float:
        return self.root.duration

    def node_to_dict(self, finished=None) -> Dict[str, Any]:
        finished = finished if finished is not None else self.root
        span = finished.span
        return {
            'id': span.id,
            'func': span.func.full_name,
            'start': span.start,
            'finish': finished.finish,
            'duration': finished.duration,
            'error': finished.error,
            'annotations': [list(pair) for pair in span.annotations],
            'children': [self.node_to_dict(child) for child in self.children(finished)],
        }


def render_trace_json(finished: List, out: TextIO):
    """
    Write a collected trace as JSON.

    Args:
        finished: FinishedSpans in finish order, triggering span last
        out: Text sink
    """
    tree = TraceTree(finished)
    json.dump({
        'trace_id': format_trace_id(tree.root.span.trace.id),
        'span_count': len(finished),
        'root': tree.node_to_dict(),
    }, out, indent=2)
    out.write("\n")


def _bar_geometry(tree: TraceTree, finished, scale: float) -> Tuple[float, float]:
    x = SVG_MARGIN + (finished.span.start - tree.start) * scale
    width = max(finished.duration * scale, 1.0)
    return x, width


def _bar_class(error: Optional[str]) -> str:
    return 'bar error' if error else 'bar'


def render_trace_svg(finished: List, out: TextIO):
    """
    Write a collected trace as an SVG timeline, one row per span.

    Bars are scaled to the triggering span's duration; failed spans are
    drawn in red.
    """
    tree = TraceTree(finished)
    rows = list(tree.walk())
    height = 2 * SVG_MARGIN + SVG_ROW_HEIGHT * (len(rows) + 1)
    usable = SVG_WIDTH - 2 * SVG_MARGIN
    scale = usable / tree.duration if tree.duration > 0 else 0.0

    out.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    out.write(f'<svg xmlns="http://www.w3.org/2000/svg" width="{SVG_WIDTH}" height="{height}" '
              f'font-family="monospace" font-size="12">\n')
    out.write('<style>.bar{fill:#8fb3de;stroke:#3b6ea5}.error{fill:#e8a0a0;stroke:#a53b3b}</style>\n')

    title = f"trace {format_trace_id(tree.root.span.trace.id)} ({format_duration(tree.duration)})"
    out.write(f'<text x="{SVG_MARGIN}" y="{SVG_MARGIN + 14}">{escape(title)}</text>\n')

    for row, (depth, f) in enumerate(rows, start=1):
        x, width = _bar_geometry(tree, f, scale)
        y = SVG_MARGIN + row * SVG_ROW_HEIGHT
        label = f"{f.span.func.full_name} {format_duration(f.duration)}"
        if f.error:
            label += f" [{f.error}]"
        out.write(f'<g>\n<title>{escape(label)}</title>\n')
        out.write(f'<rect class={quoteattr(_bar_class(f.error))} x="{x:.2f}" y="{y}" '
                  f'width="{width:.2f}" height="{SVG_ROW_HEIGHT - 4}"/>\n')
        text_x = x + 2 if width >= SVG_LABEL_MIN_WIDTH else x + width + 2
        out.write(f'<text x="{text_x:.2f}" y="{y + 14}">{escape(label)}</text>\n</g>\n')

    out.write('</svg>\n')

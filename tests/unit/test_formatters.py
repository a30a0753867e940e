"""
Unit tests for monitor_present.formatters renderers.
"""
import io
import json
import time

import pytest

from monitor_present.formatters import (
    TraceTree,
    filter_stats,
    render_funcs_dot,
    render_funcs_json,
    render_funcs_text,
    render_spans_dot,
    render_spans_json,
    render_spans_text,
    render_stats_json,
    render_stats_text,
    render_trace_json,
    render_trace_svg,
)
from monitor_present.formatters.dot import dot_escape
from monitor_present.registry import FinishedSpan, Span, Trace


def render(fn, *args):
    out = io.StringIO()
    fn(*args, out)
    return out.getvalue()


@pytest.fixture
def finished_trace(registry):
    """A hand-built finished trace: root with two children, one failed."""
    trace = Trace(0x1f)
    root_func = registry.func('svc', 'handle')
    child_func = registry.func('svc', 'step')

    root = Span(root_func, trace)
    root.start = 100.0
    first = Span(child_func, trace, root)
    first.start = 100.1
    second = Span(child_func, trace, root)
    second.start = 100.5

    return [
        FinishedSpan(first, None, 100.3),
        FinishedSpan(second, 'IOError', 100.9),
        FinishedSpan(root, None, 101.0),
    ]


class TestSpansRenderers:
    """Renderers over running spans."""

    def test_text_indents_children(self, live_span, registry):
        root, child = live_span
        text = render(render_spans_text, registry.all_spans())

        lines = text.splitlines()
        assert lines[0] == "[trace 00000000000000ff]"
        assert lines[1].startswith(f"  server.handle #{root.id} (")
        assert lines[1].endswith("user=alice")
        assert lines[2].startswith(f"    server.query #{child.id} (")

    def test_dot_edges(self, live_span, registry):
        root, child = live_span
        dot = render(render_spans_dot, registry.all_spans())

        assert dot.startswith("digraph G {")
        assert f"s{root.id} -> s{child.id};" in dot
        assert dot.rstrip().endswith("}")

    def test_json_nested(self, live_span, registry):
        root, child = live_span
        data = json.loads(render(render_spans_json, registry.root_spans()))

        assert len(data) == 1
        assert data[0]['func'] == 'server.handle'
        assert data[0]['trace_id'] == '00000000000000ff'
        assert data[0]['annotations'] == [['user', 'alice']]
        assert data[0]['children'][0]['id'] == child.id
        assert data[0]['children'][0]['parent_id'] == root.id

    def test_no_spans(self):
        assert render(render_spans_text, []) == ""
        assert json.loads(render(render_spans_json, [])) == []


class TestFuncsRenderers:
    """Renderers over monitored functions."""

    def test_text_blocks(self, populated_registry):
        text = render(render_funcs_text, populated_registry.funcs())

        assert "shop.api.checkout\n  parents: <entry>\n" in text
        assert "shop.billing.charge\n  parents: shop.api.checkout\n" in text
        assert "errors: 1 (ValueError: 1)" in text

    def test_dot_edges(self, populated_registry):
        funcs = populated_registry.funcs()
        dot = render(render_funcs_dot, funcs)

        ids = {f.full_name: f'f{index}' for index, f in enumerate(funcs)}
        assert f"{ids['shop.api.checkout']} -> {ids['shop.inventory.reserve']};" in dot
        assert f"{ids['shop.api.checkout']} -> {ids['shop.billing.charge']};" in dot

    def test_json_fields(self, populated_registry):
        data = json.loads(render(render_funcs_json, populated_registry.funcs()))
        by_name = {f['full_name']: f for f in data}

        charge = by_name['shop.billing.charge']
        assert charge['scope'] == 'shop.billing'
        assert charge['errors'] == {'ValueError': 1}
        assert charge['parents'] == ['shop.api.checkout']
        assert charge['success_times']['count'] == 1.0
        assert by_name['shop.api.checkout']['entry'] is True


class TestStatsRenderers:
    """Renderers over flat stats."""

    STATS = [('b.two', 2.0), ('a.one', 1.0), ('b.three', float('nan'))]

    def test_filter_sorted(self):
        assert [name for name, _ in filter_stats(self.STATS, 'b.')] == ['b.three', 'b.two']
        assert [name for name, _ in filter_stats(self.STATS)] == ['a.one', 'b.three', 'b.two']

    def test_text_lines(self):
        text = render(lambda out: render_stats_text(self.STATS, out, 'a.'))
        assert text == "a.one\t1.0\n"

    def test_json_nan_is_null(self):
        data = json.loads(render(lambda out: render_stats_json(self.STATS, out, 'b.')))
        assert data == {'b.three': None, 'b.two': 2.0}


class TestTraceRenderers:
    """Renderers over a collected trace."""

    def test_tree_shape(self, finished_trace):
        tree = TraceTree(finished_trace)
        assert tree.root is finished_trace[-1]
        assert [f.span.start for _, f in tree.walk()] == [100.0, 100.1, 100.5]
        assert tree.duration == pytest.approx(1.0)

    def test_tree_requires_spans(self):
        with pytest.raises(ValueError):
            TraceTree([])

    def test_json(self, finished_trace):
        data = json.loads(render(render_trace_json, finished_trace))

        assert data['trace_id'] == '000000000000001f'
        assert data['span_count'] == 3
        assert data['root']['func'] == 'svc.handle'
        assert [c['error'] for c in data['root']['children']] == [None, 'IOError']
        assert data['root']['children'][0]['duration'] == pytest.approx(0.2)

    def test_svg(self, finished_trace):
        svg = render(render_trace_svg, finished_trace)

        assert svg.startswith('<?xml')
        assert svg.rstrip().endswith('</svg>')
        assert svg.count('<rect') == 3
        assert "class='bar error'" in svg or 'class="bar error"' in svg
        assert "svc.step" in svg

    def test_svg_escapes_labels(self, registry):
        span = Span(registry.func('<pkg>', 'a&b'), Trace(1))
        span.start = time.time()
        svg = render(render_trace_svg, [FinishedSpan(span, None, span.start + 0.5)])

        assert "&lt;pkg&gt;.a&amp;b" in svg
        assert "<pkg>" not in svg


class TestDotEscape:
    def test_quotes_and_backslashes(self):
        assert dot_escape('say "hi"\\') == 'say \\"hi\\"\\\\'

"""
Renderers for monitored functions and their call relationships.
"""

import json
from typing import Dict, List, TextIO

from ..core.types import FuncSummary
from .dot import dot_escape
from .time_formatter import format_duration


def _format_times(dist) -> str:
    if not dist.count:
        return "none"
    return (f"count {dist.count}, avg {format_duration(dist.average)}, "
            f"min {format_duration(dist.low)}, max {format_duration(dist.high)}")


def _parent_names(func) -> List[str]:
    names = [parent.full_name for parent in func.parents()]
    if func.is_entry:
        names.insert(0, '<entry>')
    return names


def func_ids(funcs: List) -> Dict:
    """Assign short node identifiers to funcs in listing order."""
    return {func: f'f{index}' for index, func in enumerate(funcs)}


def func_to_dict(func, func_id: str) -> FuncSummary:
    snapshot = func.snapshot()
    return {
        'id': func_id,
        'scope': func.scope,
        'name': func.name,
        'full_name': func.full_name,
        'entry': func.is_entry,
        'current': snapshot['current'],
        'highwater': snapshot['highwater'],
        'success': snapshot['success'],
        'errors': snapshot['errors'],
        'success_times': snapshot['success_times'].to_dict(),
        'failure_times': snapshot['failure_times'].to_dict(),
        'parents': [parent.full_name for parent in func.parents()],
    }


def render_funcs_text(funcs: List, out: TextIO):
    """
    Write a block per function with its callers, counters and timings.

    Args:
        funcs: Funcs sorted by full name
        out: Text sink
    """
    for func in funcs:
        snapshot = func.snapshot()
        parents = _parent_names(func)
        out.write(f"{func.full_name}\n")
        out.write(f"  parents: {', '.join(parents) if parents else 'none'}\n")

        line = (f"  current: {snapshot['current']}, highwater: {snapshot['highwater']}, "
                f"success: {snapshot['success']}, errors: {sum(snapshot['errors'].values())}")
        if snapshot['errors']:
            line += " (" + ", ".join(f"{name}: {count}" for name, count in snapshot['errors'].items()) + ")"
        out.write(line + "\n")

        out.write(f"  success times: {_format_times(snapshot['success_times'])}\n")
        out.write(f"  failure times: {_format_times(snapshot['failure_times'])}\n")
        out.write("\n")


def render_funcs_dot(funcs: List, out: TextIO):
    """Write functions as a graphviz digraph, edges from caller to callee."""
    ids = func_ids(funcs)
    out.write("digraph G {\n")
    out.write("  node [shape=box];\n")
    for func in funcs:
        snapshot = func.snapshot()
        label = (f"{dot_escape(func.full_name)}\\n"
                 f"success {snapshot['success']}, errors {sum(snapshot['errors'].values())}")
        out.write(f'  {ids[func]} [label="{label}"];\n')
    for func in funcs:
        for parent in func.parents():
            if parent in ids:
                out.write(f"  {ids[parent]} -> {ids[func]};\n")
    out.write("}\n")


def render_funcs_json(funcs: List, out: TextIO):
    """Write functions as a JSON list."""
    ids = func_ids(funcs)
    json.dump([func_to_dict(func, ids[func]) for func in funcs], out, indent=2)
    out.write("\n")

"""
Renderers for flat (name, value) stats.
"""

import json
import math
from typing import Iterable, List, TextIO, Tuple


def filter_stats(stats: Iterable[Tuple[str, float]], prefix: str = '') -> List[Tuple[str, float]]:
    """
    Keep the stats whose name starts with prefix, sorted by name.

    Args:
        stats: (name, value) pairs
        prefix: Name prefix; empty keeps everything

    Returns:
        Sorted list of matching (name, value) pairs
    """
    return sorted((name, value) for name, value in stats if name.startswith(prefix))


def _json_value(value: float):
    # NaN and infinities have no JSON literal
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def render_stats_text(stats: Iterable[Tuple[str, float]], out: TextIO, prefix: str = ''):
    for name, value in filter_stats(stats, prefix):
        out.write(f"{name}\t{value}\n")


def render_stats_json(stats: Iterable[Tuple[str, float]], out: TextIO, prefix: str = ''):
    json.dump({name: _json_value(value) for name, value in filter_stats(stats, prefix)}, out, indent=2)
    out.write("\n")

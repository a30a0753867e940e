"""
Process runtime stats: threads, memory and garbage collector counters.
"""

import gc
import threading
from typing import Iterator, Tuple

import psutil


def runtime_stats() -> Iterator[Tuple[str, float]]:
    """
    Yield (name, value) pairs describing the running interpreter.

    Not expected to be called directly; register() chains it on a registry.
    """
    yield 'threads', float(threading.active_count())

    memory = psutil.Process().memory_info()
    yield 'memory.rss', float(memory.rss)
    yield 'memory.vms', float(memory.vms)

    for generation, count in enumerate(gc.get_count()):
        yield f'gc.gen{generation}.pending', float(count)
    for generation, stats in enumerate(gc.get_stats()):
        yield f'gc.gen{generation}.collections', float(stats.get('collections', 0))
        yield f'gc.gen{generation}.collected', float(stats.get('collected', 0))
    yield 'gc.objects', float(len(gc.get_objects()))

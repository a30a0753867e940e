"""
Pytest configuration and shared fixtures for monitor_present tests.
"""
import contextlib
import threading
import time

import pytest

from monitor_present import PresentConfig
from monitor_present.registry import Registry, Trace


@pytest.fixture
def registry():
    """Empty registry, isolated from the process-wide default."""
    return Registry()


@pytest.fixture
def populated_registry(registry):
    """Registry with a small call graph that has run once."""
    @registry.task(scope='shop.api', name='checkout')
    def checkout(items):
        for item in items:
            reserve(item)
        return charge(len(items))

    @registry.task(scope='shop.inventory', name='reserve')
    def reserve(item):
        return item

    @registry.task(scope='shop.billing', name='charge')
    def charge(amount):
        if amount > 2:
            raise ValueError("card declined")
        return amount

    checkout(['a', 'b'])
    with pytest.raises(ValueError):
        checkout(['a', 'b', 'c'])
    return registry


@pytest.fixture
def live_span(registry):
    """
    A root span with one child kept running on a background thread.

    Yields (root_span, child_span); both finish when the fixture tears down.
    """
    started = threading.Event()
    release = threading.Event()
    holder = {}

    root_func = registry.func('server', 'handle')
    child_func = registry.func('server', 'query')

    def run():
        with root_func.span(trace=Trace(0xff)) as root:
            root.annotate('user', 'alice')
            with child_func.span() as child:
                holder['spans'] = (root, child)
                started.set()
                release.wait(5)

    thread = threading.Thread(target=run)
    thread.start()
    assert started.wait(5)
    yield holder['spans']
    release.set()
    thread.join(5)


@pytest.fixture
def config():
    """Config for tests: no runtime stats and a short trace timeout."""
    return PresentConfig(register_runtime=False, trace_timeout=5.0)


@pytest.fixture
def busy():
    """
    Returns a context manager that calls fn repeatedly on a background
    thread until the block exits.
    """
    @contextlib.contextmanager
    def run(fn, *args, interval=0.005):
        stop = threading.Event()

        def loop():
            while not stop.is_set():
                fn(*args)
                time.sleep(interval)

        thread = threading.Thread(target=loop, daemon=True)
        thread.start()
        try:
            yield
        finally:
            stop.set()
            thread.join(5)

    return run

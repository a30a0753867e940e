"""
Unit tests for monitor_present.environment package.
"""
from monitor_present import environment
from monitor_present.environment import runtime_stats


class TestRuntimeStats:
    """Tests for the runtime stat source."""

    def test_reports_threads_and_memory(self):
        stats = dict(runtime_stats())

        assert stats['threads'] >= 1
        assert stats['memory.rss'] > 0
        assert stats['memory.vms'] > 0
        assert 'gc.gen0.pending' in stats
        assert 'gc.gen0.collections' in stats
        assert stats['gc.objects'] > 0

    def test_values_are_floats(self):
        assert all(isinstance(value, float) for _, value in runtime_stats())


class TestRegister:
    """Tests for environment.register()."""

    def test_chains_runtime_under_environment_prefix(self, registry):
        environment.register(registry)
        names = [name for name, _ in registry.stats()]

        assert 'environment.runtime.threads' in names
        assert all(name.startswith('environment.runtime.') for name in names)

    def test_register_is_idempotent(self, registry):
        environment.register(registry)
        environment.register(registry)
        names = [name for name, _ in registry.stats()]

        assert names.count('environment.runtime.threads') == 1

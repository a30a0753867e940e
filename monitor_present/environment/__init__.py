"""Process-level stat sources registered once on a registry."""

import logging
import weakref

from .runtime import runtime_stats

logger = logging.getLogger(__name__)

registrations = {
    'runtime': runtime_stats,
}

_registered = weakref.WeakSet()


def register(registry):
    """
    Chain every environment stat source on registry under
    "environment.<name>.".

    Calling it again for the same registry is a no-op.
    """
    if registry in _registered:
        return
    _registered.add(registry)
    for name, source in sorted(registrations.items()):
        registry.chain(f'environment.{name}.', source)
        logger.debug("registered environment stat source %s", name)


__all__ = ["register", "registrations", "runtime_stats"]

"""
Monitor Present - introspection endpoints for an in-process monitoring registry
"""

__version__ = "1.0.0"

from .core import BadRequest, NotFound, PresentConfig, PresentError, from_request, shift
from .registry import Registry, default_registry

__all__ = [
    "from_request",
    "shift",
    "PresentError",
    "BadRequest",
    "NotFound",
    "PresentConfig",
    "Registry",
    "default_registry",
]

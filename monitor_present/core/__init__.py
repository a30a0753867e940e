"""Core components for introspection request routing."""

from .errors import BadRequest, NotFound, PresentError
from .types import APPLICATION_JSON, IMAGE_SVG, TEXT_PLAIN, PresentConfig, Resource
from .dispatcher import ROUTES, Dispatch, from_request, shift

__all__ = [
    "PresentError",
    "BadRequest",
    "NotFound",
    "PresentConfig",
    "Resource",
    "TEXT_PLAIN",
    "APPLICATION_JSON",
    "IMAGE_SVG",
    "ROUTES",
    "Dispatch",
    "from_request",
    "shift",
]

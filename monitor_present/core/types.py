"""
Type definitions for introspection routing.
"""

import os
from enum import Enum
from typing import Dict, List, Optional, TypedDict

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"
IMAGE_SVG = "image/svg+xml; charset=utf-8"


class Resource(str, Enum):
    """First path segment of an introspection request."""
    PS = "ps"
    FUNCS = "funcs"
    STATS = "stats"
    TRACE = "trace"

    @classmethod
    def lookup(cls, segment: str) -> Optional['Resource']:
        try:
            return cls(segment)
        except ValueError:
            return None


class FuncSummary(TypedDict):
    """JSON shape of one monitored function."""
    id: str
    scope: str
    name: str
    full_name: str
    entry: bool
    current: int
    highwater: int
    success: int
    errors: Dict[str, int]
    success_times: Dict[str, float]
    failure_times: Dict[str, float]
    parents: List[str]


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class PresentConfig:
    """Configuration for the introspection web front end."""

    ENV_PREFIX = 'MONITOR_PRESENT_'

    def __init__(
        self,
        host: str = '127.0.0.1',
        port: int = 5001,
        debug: bool = False,
        url_prefix: str = '/mon',
        register_runtime: bool = True,
        trace_timeout: Optional[float] = None
    ):
        """
        Initialize introspection configuration.

        Args:
            host: Interface the development server binds to.
                  Default: 127.0.0.1 (introspection data is process internal)

            port: Port the development server listens on.

            debug: Run Flask in debug mode.

            url_prefix: Mount point of the introspection endpoints.
                        Default: /mon (so /mon/ps, /mon/trace/json, ...)

            register_runtime: If True, the runtime stat source (threads,
                              memory, GC) is chained on the registry once
                              when the application is created.

            trace_timeout: Seconds a trace query waits for a matching span
                           before giving up with 504. None waits until the
                           client goes away.
        """
        self.host = host
        self.port = port
        self.debug = debug
        self.url_prefix = url_prefix
        self.register_runtime = register_runtime
        self.trace_timeout = trace_timeout

    @classmethod
    def from_env(cls, environ=None) -> 'PresentConfig':
        """Build a config from MONITOR_PRESENT_* environment variables."""
        environ = os.environ if environ is None else environ
        config = cls()

        def get(name):
            return environ.get(cls.ENV_PREFIX + name)

        if get('HOST'):
            config.host = get('HOST')
        if get('PORT'):
            config.port = int(get('PORT'))
        if get('DEBUG'):
            config.debug = _env_bool(get('DEBUG'))
        if get('URL_PREFIX') is not None:
            config.url_prefix = get('URL_PREFIX')
        if get('REGISTER_RUNTIME'):
            config.register_runtime = _env_bool(get('REGISTER_RUNTIME'))
        if get('TRACE_TIMEOUT'):
            config.trace_timeout = float(get('TRACE_TIMEOUT'))
        return config

"""
Path dispatcher for introspection requests.

Understood paths:
  * /ps, /ps/text       - running spans as indented text
  * /ps/dot             - running spans as a graphviz digraph
  * /ps/json            - running spans as JSON
  * /funcs, /funcs/text - monitored functions as text
  * /funcs/dot          - monitored functions as a graphviz digraph
  * /funcs/json         - monitored functions as JSON
  * /stats, /stats/text - flat stats, filtered by the 'prefix' parameter
  * /stats/json         - flat stats as JSON, filtered by 'prefix'
  * /trace/svg          - the next matching trace as an SVG timeline
  * /trace/json         - the next matching trace as JSON

Trace paths require at least one of:
  * regex    - the next span on a func whose full name matches the regex
               starts collection, provided the trace_id matches too.
  * trace_id - the next span on the trace with this id (hex) starts
               collection, provided the regex matches too.
Collection lasts until the triggering span finishes. The regex is matched
ahead of time against all known funcs; pass preselect=false to match funcs
that have not run yet. Until a trace completes, every monitored call pays
for a matcher check or two.
"""

import logging
from typing import Dict, NamedTuple, Optional, Tuple, Type

from ..matchers import as_multidict, build_span_matcher, query_value
from ..matchers.params import QueryParams
from ..producers import (
    BufferedProducer,
    FuncsDotProducer,
    FuncsJSONProducer,
    FuncsTextProducer,
    Producer,
    SpansDotProducer,
    SpansJSONProducer,
    SpansTextProducer,
    StatsJSONProducer,
    StatsTextProducer,
    TraceJSONProducer,
    TraceSVGProducer,
)
from .errors import NotFound
from .types import APPLICATION_JSON, IMAGE_SVG, TEXT_PLAIN, Resource

logger = logging.getLogger(__name__)

Route = Tuple[Type[Producer], str]

ROUTES: Dict[Resource, Dict[str, Route]] = {
    Resource.PS: {
        '': (SpansTextProducer, TEXT_PLAIN),
        'text': (SpansTextProducer, TEXT_PLAIN),
        'dot': (SpansDotProducer, TEXT_PLAIN),
        'json': (SpansJSONProducer, APPLICATION_JSON),
    },
    Resource.FUNCS: {
        '': (FuncsTextProducer, TEXT_PLAIN),
        'text': (FuncsTextProducer, TEXT_PLAIN),
        'dot': (FuncsDotProducer, TEXT_PLAIN),
        'json': (FuncsJSONProducer, APPLICATION_JSON),
    },
    Resource.STATS: {
        '': (StatsTextProducer, TEXT_PLAIN),
        'text': (StatsTextProducer, TEXT_PLAIN),
        'json': (StatsJSONProducer, APPLICATION_JSON),
    },
    Resource.TRACE: {
        'svg': (TraceSVGProducer, IMAGE_SVG),
        'json': (TraceJSONProducer, APPLICATION_JSON),
    },
}


class Dispatch(NamedTuple):
    """A buffered producer and the content type of what it writes."""
    producer: Producer
    content_type: str


def shift(path: str) -> Tuple[str, str]:
    """
    Split off the first path segment.

    Leading slashes are dropped; the remainder keeps its leading slash.

    Examples:
        shift("/a/b/c") == ("a", "/b/c")
        shift("a") == ("a", "")
    """
    path = path.lstrip('/')
    split = path.find('/')
    if split == -1:
        return path, ''
    return path[:split], path[split:]


def _producer_options(registry, resource: Resource, query, trace_timeout: Optional[float]) -> Dict:
    if resource is Resource.STATS:
        return {'prefix': query_value(query, 'prefix')}
    if resource is Resource.TRACE:
        # the matcher is validated before the format is looked at
        return {'matcher': build_span_matcher(registry, query), 'timeout': trace_timeout}
    return {}


def from_request(
    registry,
    path: str,
    query: Optional[QueryParams] = None,
    trace_timeout: Optional[float] = None
) -> Dispatch:
    """
    Resolve an introspection path and query parameters to a producer.

    Only the first two path segments are consulted. The returned producer
    is bound to registry and buffers its output, so nothing reaches the
    sink unless rendering succeeds.

    Args:
        registry: Registry to present, usually default_registry()
        path: Request path, e.g. "/funcs/json"
        query: Query parameters (MultiDict or plain mapping)
        trace_timeout: Seconds trace producers wait for a matching span;
                       None waits indefinitely

    Returns:
        Dispatch of (producer, content_type)

    Raises:
        BadRequest: If trace query parameters are missing or malformed
        NotFound: If the path names no known resource and format
    """
    query = as_multidict(query)
    first, rest = shift(path)
    second, _ = shift(rest)

    resource = Resource.lookup(first)
    if resource is not None:
        options = _producer_options(registry, resource, query, trace_timeout)
        route = ROUTES[resource].get(second)
        if route is not None:
            producer_class, content_type = route
            producer = BufferedProducer(producer_class(registry, **options))
            logger.debug("dispatched %s to %r", path, producer)
            return Dispatch(producer, content_type)

    raise NotFound(f"path not found: {path}", path=path)

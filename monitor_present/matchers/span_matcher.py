"""
Span matchers built from trace query parameters.
"""

import logging
from typing import Optional

import re2

from ..core.errors import BadRequest
from .func_matcher import FuncMatcher, PreselectedFuncMatcher, RegexFuncMatcher
from .params import QueryParams, as_multidict, parse_bool, parse_trace_id, query_value

logger = logging.getLogger(__name__)


class SpanMatcher:
    """
    Accepts spans whose function satisfies func_matcher and, when trace_id
    is set, whose trace carries exactly that id.
    """

    def __init__(self, func_matcher: FuncMatcher, trace_id: Optional[int] = None):
        self.func_matcher = func_matcher
        self.trace_id = trace_id

    def __call__(self, span) -> bool:
        if self.trace_id is not None and span.trace.id != self.trace_id:
            return False
        return self.func_matcher(span.func)

    def __repr__(self) -> str:
        if self.trace_id is None:
            return f'SpanMatcher({self.func_matcher!r})'
        return f'SpanMatcher({self.func_matcher!r}, trace_id={self.trace_id:x})'


def build_func_matcher(registry, query: QueryParams) -> FuncMatcher:
    """
    Build the function half of a trace query.

    Without a regex every function matches. With one, the regex is
    preselected against the functions known right now unless
    preselect=false is given, in which case it is evaluated live.

    Raises:
        BadRequest: On an invalid regex, an invalid preselect value, or a
                    preselection that matches no function
    """
    query = as_multidict(query)
    regex = query_value(query, 'regex')
    if not regex:
        return FuncMatcher()

    try:
        pattern = re2.compile(regex)
    except re2.error as e:
        raise BadRequest(f"invalid regex {regex!r}: {e}", param='regex', value=regex) from e
    matcher = RegexFuncMatcher(pattern)

    preselect = True
    preselect_value = query_value(query, 'preselect')
    if preselect_value:
        try:
            preselect = parse_bool(preselect_value)
        except ValueError as e:
            raise BadRequest(
                f"invalid preselect {preselect_value!r}: {e}",
                param='preselect', value=preselect_value) from e

    if not preselect:
        return matcher

    preselected = PreselectedFuncMatcher.preselect(registry, matcher)
    if not len(preselected):
        raise BadRequest("regex preselect matches 0 functions", param='regex', value=regex)
    logger.debug("regex %r preselected %d funcs", regex, len(preselected))
    return preselected


def build_span_matcher(registry, query: QueryParams) -> SpanMatcher:
    """
    Build a span matcher from the regex, trace_id and preselect parameters.

    Args:
        registry: Registry whose functions are scanned for preselection
        query: Request query parameters

    Returns:
        SpanMatcher combining the function and trace id conditions

    Raises:
        BadRequest: If neither regex nor trace_id is given, or either is
                    malformed
    """
    query = as_multidict(query)
    regex = query_value(query, 'regex')
    trace_id_value = query_value(query, 'trace_id')
    if not regex and not trace_id_value:
        raise BadRequest("at least one of 'regex' or 'trace_id' query parameters required")

    func_matcher = build_func_matcher(registry, query)

    trace_id = None
    if trace_id_value:
        try:
            trace_id = parse_trace_id(trace_id_value)
        except ValueError as e:
            raise BadRequest(
                f"trace_id expected to be hex unsigned 64 bit number: {trace_id_value!r}",
                param='trace_id', value=trace_id_value) from e

    return SpanMatcher(func_matcher, trace_id)

"""Predicates selecting which spans a trace query captures."""

from .func_matcher import FuncMatcher, PreselectedFuncMatcher, RegexFuncMatcher
from .params import as_multidict, parse_bool, parse_trace_id, query_value
from .span_matcher import SpanMatcher, build_func_matcher, build_span_matcher

__all__ = [
    "FuncMatcher",
    "RegexFuncMatcher",
    "PreselectedFuncMatcher",
    "SpanMatcher",
    "build_func_matcher",
    "build_span_matcher",
    "as_multidict",
    "query_value",
    "parse_bool",
    "parse_trace_id",
]

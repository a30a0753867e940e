"""
Query parameter access and value parsing.
"""

import re
from typing import Mapping, Optional, Union

from werkzeug.datastructures import MultiDict

from ..registry.span import MAX_TRACE_ID

QueryParams = Union[MultiDict, Mapping]

TRUE_VALUES = frozenset(['1', 't', 'T', 'TRUE', 'true', 'True'])
FALSE_VALUES = frozenset(['0', 'f', 'F', 'FALSE', 'false', 'False'])

_hex_pattern = re.compile(r'[0-9a-fA-F]+')


def as_multidict(query: Optional[QueryParams]) -> MultiDict:
    """
    Normalize query parameters to a MultiDict.

    Plain mappings may hold single strings or lists of values; lists keep
    every value and lookups return the first.
    """
    if isinstance(query, MultiDict):
        return query
    return MultiDict(query or {})


def query_value(query: MultiDict, key: str) -> str:
    """Return the first value for key, or an empty string when absent."""
    return query.get(key, '') or ''


def parse_bool(value: str) -> bool:
    """
    Parse a boolean query value.

    Raises:
        ValueError: If value is not one of the accepted spellings
    """
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"invalid syntax for boolean: {value!r}")


def parse_trace_id(value: str) -> int:
    """
    Parse a hex encoded unsigned 64 bit trace id.

    Only hex digits are accepted: no sign, no 0x prefix, no separators.

    Raises:
        ValueError: If value is not hex or exceeds 64 bits
    """
    if not _hex_pattern.fullmatch(value):
        raise ValueError(f"invalid syntax for hex integer: {value!r}")
    trace_id = int(value, 16)
    if trace_id > MAX_TRACE_ID:
        raise ValueError(f"value out of range: {value!r}")
    return trace_id

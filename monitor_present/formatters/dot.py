"""
Graphviz helpers.
"""


def dot_escape(value: str) -> str:
    """Escape a string for use inside a double-quoted DOT attribute."""
    return value.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')

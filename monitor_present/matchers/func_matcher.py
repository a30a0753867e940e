"""
Predicates over monitored functions.
"""

from typing import FrozenSet, Iterable


class FuncMatcher:
    """Matches every function."""

    def __call__(self, func) -> bool:
        return True

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class RegexFuncMatcher(FuncMatcher):
    """
    Searches a compiled RE2 pattern in each function's full name.

    Evaluated live, so functions registered after the matcher was built are
    matched as soon as they run.
    """

    def __init__(self, pattern):
        self.pattern = pattern

    def __call__(self, func) -> bool:
        return self.pattern.search(func.full_name) is not None

    def __repr__(self) -> str:
        return f'RegexFuncMatcher({self.pattern.pattern!r})'


class PreselectedFuncMatcher(FuncMatcher):
    """Membership in a fixed set of functions chosen up front."""

    def __init__(self, funcs: Iterable):
        self.funcs: FrozenSet = frozenset(funcs)

    def __call__(self, func) -> bool:
        return func in self.funcs

    def __len__(self) -> int:
        return len(self.funcs)

    def __repr__(self) -> str:
        return f'PreselectedFuncMatcher({len(self.funcs)} funcs)'

    @classmethod
    def preselect(cls, registry, matcher: FuncMatcher) -> 'PreselectedFuncMatcher':
        """
        Snapshot the functions currently known to registry that matcher
        accepts.

        Functions registered while the scan runs may or may not be included;
        functions registered afterwards never are.
        """
        return cls(func for func in registry.funcs() if matcher(func))

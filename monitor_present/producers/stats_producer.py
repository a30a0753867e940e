"""
Producers for flat registry stats (the stats resource).
"""

from typing import TextIO

from ..formatters import render_stats_json, render_stats_text
from .base import Producer


class StatsProducer(Producer):
    """Base for stats producers; only names starting with prefix are kept."""

    def __init__(self, registry, prefix: str = ''):
        super().__init__(registry)
        self.prefix = prefix

    def __repr__(self) -> str:
        return f'{type(self).__name__}(prefix={self.prefix!r})'


class StatsTextProducer(StatsProducer):
    def produce(self, sink: TextIO):
        render_stats_text(self.registry.stats(), sink, self.prefix)


class StatsJSONProducer(StatsProducer):
    def produce(self, sink: TextIO):
        render_stats_json(self.registry.stats(), sink, self.prefix)

"""
Producers for the running span trees (the ps resource).
"""

from typing import TextIO

from ..formatters import render_spans_dot, render_spans_json, render_spans_text
from .base import Producer


class SpansTextProducer(Producer):
    def produce(self, sink: TextIO):
        render_spans_text(self.registry.all_spans(), sink)


class SpansDotProducer(Producer):
    def produce(self, sink: TextIO):
        render_spans_dot(self.registry.all_spans(), sink)


class SpansJSONProducer(Producer):
    def produce(self, sink: TextIO):
        render_spans_json(self.registry.root_spans(), sink)

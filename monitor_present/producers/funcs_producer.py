"""
Producers for monitored functions (the funcs resource).
"""

from typing import TextIO

from ..formatters import render_funcs_dot, render_funcs_json, render_funcs_text
from .base import Producer


class FuncsTextProducer(Producer):
    def produce(self, sink: TextIO):
        render_funcs_text(self.registry.funcs(), sink)


class FuncsDotProducer(Producer):
    def produce(self, sink: TextIO):
        render_funcs_dot(self.registry.funcs(), sink)


class FuncsJSONProducer(Producer):
    def produce(self, sink: TextIO):
        render_funcs_json(self.registry.funcs(), sink)

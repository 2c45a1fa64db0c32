"""Diagnostic recording of executed HTTP calls."""

from ._debug import DebugCollector, DiagnosticSink
from ._models import HttpStatement

__all__ = [
    "DebugCollector",
    "DiagnosticSink",
    "HttpStatement",
]

"""Fluent HTTP request builder over httpx with typed envelope decoding."""

from ._config import Config
from ._request_builder import HttpRequestBuilder
from ._utils import RequestSpec, build_url
from .models import (
    BodyReadError,
    Envelope,
    HttpBuilderError,
    HttpResponse,
    InvalidURLError,
    NetworkError,
    RequestConstructionError,
    ServerError,
    UnmarshalError,
)
from .tracing import DebugCollector, DiagnosticSink, HttpStatement

__all__ = [
    "BodyReadError",
    "Config",
    "DebugCollector",
    "DiagnosticSink",
    "Envelope",
    "HttpBuilderError",
    "HttpRequestBuilder",
    "HttpResponse",
    "HttpStatement",
    "InvalidURLError",
    "NetworkError",
    "RequestConstructionError",
    "RequestSpec",
    "ServerError",
    "UnmarshalError",
    "build_url",
]

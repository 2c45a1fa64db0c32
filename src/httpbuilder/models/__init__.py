from .errors import (
    BodyReadError,
    HttpBuilderError,
    InvalidURLError,
    NetworkError,
    RequestConstructionError,
    ServerError,
    UnmarshalError,
)
from .response import Envelope, HttpResponse

__all__ = [
    "BodyReadError",
    "Envelope",
    "HttpBuilderError",
    "HttpResponse",
    "InvalidURLError",
    "NetworkError",
    "RequestConstructionError",
    "ServerError",
    "UnmarshalError",
]

from ._duration import format_duration
from ._encoding import encode_json, encode_xml
from ._request_spec import RequestSpec
from ._transport import (
    AsyncLoggingTransport,
    LoggingTransport,
    log_request,
    log_response,
)
from ._url import build_url

__all__ = [
    "AsyncLoggingTransport",
    "LoggingTransport",
    "RequestSpec",
    "build_url",
    "encode_json",
    "encode_xml",
    "format_duration",
    "log_request",
    "log_response",
]

class HttpBuilderError(Exception):
    """Base class for every error raised while building or executing a request."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidURLError(HttpBuilderError):
    """Raised when the base URL, or the URL merged with query parameters, cannot be parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"invalid url '{url}': {reason}")


class RequestConstructionError(HttpBuilderError):
    """Raised when the outbound request object cannot be built.

    Typical causes are a method that is not a valid HTTP token or headers
    that cannot be encoded.
    """

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"cannot build request {method} {url}: {reason}")


class NetworkError(HttpBuilderError):
    """Raised on transport-level failures: DNS, connection, timeout or an expired deadline.

    The request is never retried; the caller decides whether to try again.
    """

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"http {method} {url} failed: {reason}")


class BodyReadError(NetworkError):
    """Raised when the response headers arrived but reading the body failed."""


class UnmarshalError(HttpBuilderError):
    """Raised when the response body does not decode into the expected envelope.

    Only raised with strict decoding enabled.
    """

    def __init__(self, url: str, status_code: int, reason: str):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"cannot decode response from {url} ({status_code}): {reason}")


class ServerError(HttpBuilderError):
    """Raised when the server answered with a 5xx status code."""

    def __init__(self, method: str, url: str, status_code: int):
        self.method = method
        self.url = url
        self.status_code = status_code
        super().__init__(f"http {method} {url} -> {status_code}")

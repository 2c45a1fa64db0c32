import re
import time
from datetime import datetime, timedelta, timezone
from logging import getLogger
from typing import Any, Generic, Mapping, Optional, Tuple, Type, TypeVar, Union

import httpx
from pydantic import ValidationError

from ._config import Config
from ._utils import (
    AsyncLoggingTransport,
    LoggingTransport,
    RequestSpec,
    build_url,
    encode_json,
    encode_xml,
    format_duration,
    log_request,
    log_response,
)
from ._utils._transport import RequestHook, ResponseHook
from ._utils.constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_XML,
    DEBUG_CATEGORY_HTTP,
    METHOD_DELETE,
    METHOD_GET,
    METHOD_PATCH,
    METHOD_POST,
    METHOD_PUT,
)
from .models import (
    BodyReadError,
    Envelope,
    HttpResponse,
    InvalidURLError,
    NetworkError,
    RequestConstructionError,
    ServerError,
    UnmarshalError,
)
from .tracing import DiagnosticSink, HttpStatement

T = TypeVar("T")

# RFC 9110 token characters
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class HttpRequestBuilder(Generic[T]):
    """Fluent builder that configures, sends and decodes a single HTTP request.

    Configuration calls only mutate builder state; nothing touches the network
    until :meth:`do` or :meth:`get_result` (or their async variants) is called.
    Each execution performs exactly one round trip and never retries.

    The response body is expected to be a JSON envelope of the form
    ``{"success": bool, "data": T}``; ``data_type`` selects ``T``.

    Examples:
        ```python
        from httpbuilder import HttpRequestBuilder

        response = (
            HttpRequestBuilder.get("https://api.example.com/v1/items", data_type=Item)
            .set_query_params({"page": "1"})
            .set_timeout(5)
            .get_result()
        )
        if response.result.success:
            print(response.result.data)
        ```

    A builder is not safe for concurrent executions: the captured response and
    the execution time are overwritten in place.
    """

    def __init__(
        self,
        method: str,
        url: str,
        *,
        data_type: Type[T] = Any,  # type: ignore[assignment]
        config: Optional[Config] = None,
        recorder: Optional[DiagnosticSink] = None,
        deadline: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._logger = getLogger(__name__)
        config = config or Config()

        self._spec = RequestSpec(
            method=method,
            url=url,
            timeout=config.timeout,
            strict_decoding=config.strict_decoding,
        )
        self._data_type = data_type
        self._recorder = recorder
        self._deadline = deadline
        self._transport = transport
        self._async_transport = async_transport
        self._on_request: Optional[RequestHook] = None
        self._on_response: Optional[ResponseHook] = None
        if config.log_transport:
            self.enable_transport_logging()

        self._response: Optional[HttpResponse[T]] = None
        self._started_at: Optional[datetime] = None
        self.exec_time = timedelta(0)

    @classmethod
    def get(cls, url: str, **kwargs: Any) -> "HttpRequestBuilder[Any]":
        return cls(METHOD_GET, url, **kwargs)

    @classmethod
    def post(cls, url: str, **kwargs: Any) -> "HttpRequestBuilder[Any]":
        return cls(METHOD_POST, url, **kwargs)

    @classmethod
    def put(cls, url: str, **kwargs: Any) -> "HttpRequestBuilder[Any]":
        return cls(METHOD_PUT, url, **kwargs)

    @classmethod
    def patch(cls, url: str, **kwargs: Any) -> "HttpRequestBuilder[Any]":
        return cls(METHOD_PATCH, url, **kwargs)

    @classmethod
    def delete(cls, url: str, **kwargs: Any) -> "HttpRequestBuilder[Any]":
        return cls(METHOD_DELETE, url, **kwargs)

    @property
    def spec(self) -> RequestSpec:
        return self._spec

    @property
    def response(self) -> Optional[HttpResponse[T]]:
        """Response captured by the last execution, even if it ended in an error."""
        return self._response

    def set_headers(
        self, headers: Optional[Mapping[str, str]]
    ) -> "HttpRequestBuilder[T]":
        self._spec.headers = dict(headers) if headers is not None else {}
        return self

    def set_query_params(
        self, params: Optional[Mapping[str, str]]
    ) -> "HttpRequestBuilder[T]":
        self._spec.params = dict(params) if params is not None else {}
        return self

    def set_timeout(self, timeout: Union[int, float, None]) -> "HttpRequestBuilder[T]":
        """Override the request timeout in seconds.

        The value is handed to httpx as is; ``None`` disables the timeout.
        """
        self._spec.timeout = timeout
        return self

    def set_strict_decoding(self, strict: bool) -> "HttpRequestBuilder[T]":
        """Choose whether a body that does not decode into the envelope aborts the call."""
        self._spec.strict_decoding = strict
        return self

    def set_deadline(self, deadline: Optional[float]) -> "HttpRequestBuilder[T]":
        """Bound the call by an absolute ``time.monotonic()`` deadline."""
        self._deadline = deadline
        return self

    def set_recorder(
        self, recorder: Optional[DiagnosticSink]
    ) -> "HttpRequestBuilder[T]":
        self._recorder = recorder
        return self

    def set_transport_hooks(
        self,
        on_request: Optional[RequestHook] = None,
        on_response: Optional[ResponseHook] = None,
    ) -> "HttpRequestBuilder[T]":
        self._on_request = on_request
        self._on_response = on_response
        return self

    def enable_transport_logging(self) -> "HttpRequestBuilder[T]":
        return self.set_transport_hooks(log_request, log_response)

    def set_json_body(self, value: Any) -> "HttpRequestBuilder[T]":
        """Encode ``value`` as JSON and use it as the request body.

        If encoding fails the error is logged and the body is left unchanged.
        """
        try:
            content = encode_json(value)
        except (TypeError, ValueError) as e:
            self._logger.error(f"Failed to encode JSON body: {e}")
            return self

        self._spec.set_body(content, CONTENT_TYPE_JSON)
        return self

    def set_xml_body(
        self, value: Any, root_tag: Optional[str] = None
    ) -> "HttpRequestBuilder[T]":
        """Encode ``value`` as XML and use it as the request body.

        If encoding fails the error is logged and the body is left unchanged.
        """
        try:
            content = encode_xml(value, root_tag=root_tag)
        except (TypeError, ValueError) as e:
            self._logger.error(f"Failed to encode XML body: {e}")
            return self

        self._spec.set_body(content, CONTENT_TYPE_XML)
        return self

    def do(self) -> HttpResponse[T]:
        """Send the request and capture the raw response without decoding it.

        Raises:
            InvalidURLError: If the URL cannot be parsed.
            RequestConstructionError: If the request cannot be built.
            NetworkError: On transport failures or an expired deadline.
            BodyReadError: If the response body cannot be read.
        """
        started = time.perf_counter()
        self._started_at = datetime.now(timezone.utc)
        try:
            return self._do()
        finally:
            self.exec_time = timedelta(seconds=time.perf_counter() - started)

    async def do_async(self) -> HttpResponse[T]:
        """Asynchronously send the request; see :meth:`do`."""
        started = time.perf_counter()
        self._started_at = datetime.now(timezone.utc)
        try:
            return await self._do_async()
        finally:
            self.exec_time = timedelta(seconds=time.perf_counter() - started)

    def get_result(self) -> HttpResponse[T]:
        """Send the request, decode the envelope and classify the status code.

        4xx responses are returned as regular results for the caller to
        interpret.

        Raises:
            UnmarshalError: If strict decoding is on and the body is not a valid envelope.
            ServerError: If the status code is 500 or above.
        """
        return self._classify(self.do())

    async def get_result_async(self) -> HttpResponse[T]:
        """Asynchronously send, decode and classify; see :meth:`get_result`."""
        return self._classify(await self.do_async())

    def _do(self) -> HttpResponse[T]:
        self._spec.ensure_headers()
        timeout, expired = self._resolve_timeout()
        transport = LoggingTransport(
            self._transport,
            on_request=self._on_request,
            on_response=self._on_response,
        )

        with httpx.Client(transport=transport, timeout=timeout) as client:
            request = self._build_request(client)
            result = self._start_response(request, expired)

            try:
                response = client.send(request, stream=True)
            except httpx.RequestError as e:
                raise self._network_error(NetworkError, result, e) from e

            try:
                body = response.read()
            except (httpx.RequestError, httpx.StreamError) as e:
                raise self._network_error(BodyReadError, result, e) from e
            finally:
                response.close()

        return self._capture(result, response, body)

    async def _do_async(self) -> HttpResponse[T]:
        self._spec.ensure_headers()
        timeout, expired = self._resolve_timeout()
        transport = AsyncLoggingTransport(
            self._async_transport,
            on_request=self._on_request,
            on_response=self._on_response,
        )

        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            request = self._build_request(client)
            result = self._start_response(request, expired)

            try:
                response = await client.send(request, stream=True)
            except httpx.RequestError as e:
                raise self._network_error(NetworkError, result, e) from e

            try:
                body = await response.aread()
            except (httpx.RequestError, httpx.StreamError) as e:
                raise self._network_error(BodyReadError, result, e) from e
            finally:
                await response.aclose()

        return self._capture(result, response, body)

    def _resolve_timeout(self) -> Tuple[Union[int, float, None], bool]:
        timeout = self._spec.timeout
        if self._deadline is None:
            return timeout, False

        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            return timeout, True
        if timeout is None:
            return remaining, False
        return min(timeout, remaining), False

    def _build_request(
        self, client: Union[httpx.Client, httpx.AsyncClient]
    ) -> httpx.Request:
        method = self._spec.method
        final_url = build_url(self._spec.url, self._spec.params)

        if not _METHOD_TOKEN.fullmatch(method or ""):
            raise RequestConstructionError(
                method, final_url, f"invalid method {method!r}"
            )

        try:
            return client.build_request(
                method,
                final_url,
                content=self._spec.content,
                headers=self._spec.headers,
            )
        except httpx.InvalidURL as e:
            raise InvalidURLError(final_url, str(e)) from e
        except (TypeError, ValueError) as e:
            raise RequestConstructionError(method, final_url, str(e)) from e

    def _start_response(
        self, request: httpx.Request, expired: bool
    ) -> HttpResponse[T]:
        url = str(request.url)
        result: HttpResponse[T] = HttpResponse[self._data_type](  # type: ignore[name-defined]
            url=url, method=request.method
        )
        self._response = result
        self._logger.debug(f"Request: {request.method} {url}")

        if expired:
            raise NetworkError(request.method, url, "deadline exceeded")
        return result

    @staticmethod
    def _network_error(
        error_type: Type[NetworkError], result: HttpResponse[T], error: Exception
    ) -> NetworkError:
        reason = str(error) or type(error).__name__
        return error_type(result.method, result.url, reason)

    @staticmethod
    def _capture(
        result: HttpResponse[T], response: httpx.Response, body: bytes
    ) -> HttpResponse[T]:
        result.status = f"{response.status_code} {response.reason_phrase}".strip()
        result.status_code = response.status_code
        result.headers = dict(response.headers)
        result.body = body
        return result

    def _classify(self, response: HttpResponse[T]) -> HttpResponse[T]:
        response.result = self._decode(response)
        self._record_debug_info(response)

        if response.status_code >= 500:
            raise ServerError(response.method, response.url, response.status_code)

        return response

    def _decode(self, response: HttpResponse[T]) -> Envelope[T]:
        envelope_type = Envelope[self._data_type]  # type: ignore[name-defined]
        try:
            return envelope_type.model_validate_json(response.body)
        except ValidationError as e:
            # 5xx is reported as a server error whatever the body looks like
            if self._spec.strict_decoding and response.status_code < 500:
                raise UnmarshalError(
                    response.url, response.status_code, str(e)
                ) from e
            self._logger.debug(
                f"Response from {response.url} is not a valid envelope, "
                f"using an empty one: {e}"
            )
            return envelope_type()

    def _record_debug_info(self, response: HttpResponse[T]) -> None:
        if self._recorder is None:
            return

        timeout = self._spec.timeout
        statement = HttpStatement(
            started_at=self._started_at,
            time=format_duration(self.exec_time),
            status=response.status_code,
            timeout=(
                format_duration(timedelta(seconds=timeout))
                if timeout is not None
                else ""
            ),
            method=response.method,
            url=response.url,
            headers=dict(self._spec.headers),
            query_params=dict(self._spec.params),
            body=(self._spec.content or b"").decode("utf-8", errors="replace"),
            duration=self.exec_time,
        )

        self._recorder.cat(DEBUG_CATEGORY_HTTP)
        self._recorder.add_statement(DEBUG_CATEGORY_HTTP, self.exec_time, [statement])
        self._recorder.calculate_total_time()

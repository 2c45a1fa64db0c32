from typing import Optional

import httpx
import pytest
from pydantic import BaseModel
from pytest_httpx import HTTPXMock

from httpbuilder import (
    BodyReadError,
    HttpRequestBuilder,
    NetworkError,
    ServerError,
    UnmarshalError,
)


class Item(BaseModel):
    id: int
    name: Optional[str] = None


class FailingAsyncStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        yield b"{"
        raise httpx.ReadError("connection reset by peer")


class TestGetResultAsync:
    @pytest.mark.anyio
    async def test_get_with_query_decodes_envelope(
        self, httpx_mock: HTTPXMock, items_url: str
    ):
        httpx_mock.add_response(
            url=f"{items_url}?page=1",
            status_code=200,
            json={"success": True, "data": {"id": 1}},
        )

        response = (
            await HttpRequestBuilder.get(items_url, data_type=Item)
            .set_query_params({"page": "1"})
            .get_result_async()
        )

        sent_request = httpx_mock.get_request()
        if sent_request is None:
            raise Exception("No request was sent")

        assert sent_request.url == f"{items_url}?page=1"
        assert response.status_code == 200
        assert response.result.success is True
        assert response.result.data == Item(id=1)

    @pytest.mark.anyio
    async def test_client_error_is_returned_as_data(
        self, httpx_mock: HTTPXMock, items_url: str
    ):
        httpx_mock.add_response(status_code=404, json={"success": False, "data": None})

        response = (
            await HttpRequestBuilder.post(items_url, data_type=Item)
            .set_json_body({"name": "test"})
            .get_result_async()
        )

        assert response.status_code == 404
        assert response.result.success is False

    @pytest.mark.anyio
    async def test_server_error_is_raised(self, httpx_mock: HTTPXMock, items_url: str):
        httpx_mock.add_response(status_code=503)

        with pytest.raises(ServerError, match="GET .* -> 503"):
            await HttpRequestBuilder.get(items_url).get_result_async()

    @pytest.mark.anyio
    async def test_strict_mode_rejects_non_json(
        self, httpx_mock: HTTPXMock, items_url: str
    ):
        httpx_mock.add_response(status_code=200, content=b"plain text")

        with pytest.raises(UnmarshalError):
            await HttpRequestBuilder.get(items_url).get_result_async()

    @pytest.mark.anyio
    async def test_network_error(self, httpx_mock: HTTPXMock, items_url: str):
        httpx_mock.add_exception(httpx.ConnectTimeout("timed out"))

        with pytest.raises(NetworkError):
            await HttpRequestBuilder.get(items_url).do_async()

    @pytest.mark.anyio
    async def test_body_read_failure(self, items_url: str):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, stream=FailingAsyncStream())
        )

        with pytest.raises(BodyReadError):
            await HttpRequestBuilder.get(
                items_url, async_transport=transport
            ).do_async()

    @pytest.mark.anyio
    async def test_diagnostics_are_recorded(
        self, httpx_mock: HTTPXMock, items_url: str, collector
    ):
        httpx_mock.add_response(status_code=200, json={"success": True, "data": None})

        builder = HttpRequestBuilder.get(items_url, recorder=collector)
        await builder.get_result_async()

        assert len(collector.statements("http")) == 1
        assert collector.total_time == builder.exec_time

"""Tests for the transport executor."""

import asyncio

import httpx
import pytest

from gql_pyclient.core.errors import ReadError, TransportError
from gql_pyclient.core.transport import RawResponse, TransportExecutor

URL = "https://api.example.com/graphql"


def make_request() -> httpx.Request:
    return httpx.Request("POST", URL, content=b'{"query": "{ a }"}')


class TrackingStream(httpx.AsyncByteStream):
    """Response stream that records whether it was closed."""

    def __init__(self, chunks, fail_after=None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    async def __aiter__(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise httpx.ReadError("connection reset mid-body")
            yield chunk

    async def aclose(self):
        self.closed = True


class SlowStream(TrackingStream):
    def __init__(self, chunks):
        super().__init__(chunks)
        self.reading = asyncio.Event()

    async def __aiter__(self):
        self.reading.set()
        yield b'{"data":'
        await asyncio.sleep(10)
        yield b"{}}"


class TestExecute:
    """Tests for TransportExecutor.execute."""

    @pytest.mark.asyncio
    async def test_returns_body_and_status(self):
        def handler(request):
            return httpx.Response(207, content=b'{"data": {"x": 1}}')

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await TransportExecutor(client).execute(make_request())

        assert response == RawResponse(body=b'{"data": {"x": 1}}', status_code=207)
        assert response.text == '{"data": {"x": 1}}'

    @pytest.mark.asyncio
    async def test_non_2xx_is_not_an_error(self):
        def handler(request):
            return httpx.Response(500, content=b"oops")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await TransportExecutor(client).execute(make_request())
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_connect_error_becomes_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="request failed") as exc_info:
                await TransportExecutor(client).execute(make_request())
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_httpx_timeout_becomes_transport_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError):
                await TransportExecutor(client).execute(make_request())

    @pytest.mark.asyncio
    async def test_deadline_aborts_slow_server(self):
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200, content=b"{}")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="deadline") as exc_info:
                await TransportExecutor(client).execute(make_request(), timeout=0.05)
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_deadline_during_body_read_closes_response(self):
        stream = SlowStream([])

        def handler(request):
            return httpx.Response(200, stream=stream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError):
                await TransportExecutor(client).execute(make_request(), timeout=0.05)
        assert stream.closed

    @pytest.mark.asyncio
    async def test_partial_read_becomes_read_error(self):
        stream = TrackingStream([b'{"data":', b"{}}"], fail_after=1)

        def handler(request):
            return httpx.Response(200, stream=stream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ReadError, match="failed to read response body"):
                await TransportExecutor(client).execute(make_request())
        assert stream.closed

    @pytest.mark.asyncio
    async def test_successful_read_closes_response(self):
        stream = TrackingStream([b'{"data":', b"{}}"])

        def handler(request):
            return httpx.Response(200, stream=stream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await TransportExecutor(client).execute(make_request())
        assert response.body == b'{"data":{}}'
        assert stream.closed

    @pytest.mark.asyncio
    async def test_cancel_during_body_read_closes_response(self):
        stream = SlowStream([])

        def handler(request):
            return httpx.Response(200, stream=stream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            task = asyncio.create_task(TransportExecutor(client).execute(make_request()))
            await stream.reading.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
        assert stream.closed

    @pytest.mark.asyncio
    async def test_error_text_names_exception_type(self):
        """Test httpx errors with an empty message still say what happened."""
        def handler(request):
            raise httpx.ReadTimeout("", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="request failed: ReadTimeout"):
                await TransportExecutor(client).execute(make_request())

    @pytest.mark.asyncio
    async def test_read_error_text_names_exception_type(self):
        stream = TrackingStream([b"{", b"}"], fail_after=1)

        def handler(request):
            return httpx.Response(200, stream=stream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ReadError, match="failed to read response body: ReadError"):
                await TransportExecutor(client).execute(make_request())

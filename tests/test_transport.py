# tests/test_transport.py
"""Test the aiohttp transport against a local aiohttp server"""

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as LocalServer

from saavn_client.api.client import SaavnClient
from saavn_client.api.transport import AiohttpTransport, check_envelope
from saavn_client.core.config import ClientConfig
from saavn_client.core.exceptions import ApiError, ErrorKind, NetworkError


async def echo(request):
    return web.json_response({
        "query": dict(request.query),
        "user_agent": request.headers.get("User-Agent"),
    })


async def json_as_html(request):
    return web.Response(text='{"results": []}', content_type="text/html")


async def maintenance_page(request):
    return web.Response(text="<html>Down for maintenance</html>", content_type="text/html")


async def invalid_utf8(request):
    return web.Response(body=b'{"results": ["\xff\xfe"]}', content_type="application/json", charset="utf-8")


async def empty(request):
    return web.Response(body=b"")


async def server_error(request):
    return web.json_response({"oops": True}, status=500)


async def slow(request):
    await asyncio.sleep(0.5)
    return web.json_response({"late": True})


def make_app():
    app = web.Application()
    app.router.add_get("/echo", echo)
    app.router.add_get("/html", json_as_html)
    app.router.add_get("/maintenance", maintenance_page)
    app.router.add_get("/invalid-utf8", invalid_utf8)
    app.router.add_get("/empty", empty)
    app.router.add_get("/error", server_error)
    app.router.add_get("/slow", slow)
    return app


PARAMS = {"__call": "search.getResults", "q": "believer"}
HEADERS = {"User-Agent": "saavn-tests"}


class TestAiohttpTransport:
    """Test wire behaviour of the default transport"""

    @pytest.mark.asyncio
    async def test_sends_params_and_headers(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                response = await transport(str(server.make_url("/echo")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert response.ok is True
        assert response.status == 200
        assert response.data["query"] == PARAMS
        assert response.data["user_agent"] == "saavn-tests"

    @pytest.mark.asyncio
    async def test_json_labelled_as_html(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                response = await transport(str(server.make_url("/html")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert response.data == {"results": []}

    @pytest.mark.asyncio
    async def test_empty_body_is_null(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                response = await transport(str(server.make_url("/empty")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert response.data is None
        assert check_envelope(response).ok is False

    @pytest.mark.asyncio
    async def test_error_status_is_not_ok(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                response = await transport(str(server.make_url("/error")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert response.ok is False
        assert response.status == 500
        assert response.data == {"oops": True}

    @pytest.mark.asyncio
    async def test_non_json_body_is_api_error(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                with pytest.raises(ApiError) as exc_info:
                    await transport(str(server.make_url("/maintenance")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_utf8_body_is_api_error(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                with pytest.raises(ApiError) as exc_info:
                    await transport(str(server.make_url("/invalid-utf8")), PARAMS, HEADERS, 5)
            finally:
                await transport.close()

        assert exc_info.value.kind is ErrorKind.API
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    @pytest.mark.asyncio
    async def test_per_call_timeout(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            try:
                with pytest.raises(NetworkError) as exc_info:
                    await transport(str(server.make_url("/slow")), PARAMS, HEADERS, 0.05)
            finally:
                await transport.close()

        assert exc_info.value.context["timeout"] == 0.05
        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self):
        async with LocalServer(make_app()) as server:
            url = str(server.make_url("/echo"))

        transport = AiohttpTransport()
        try:
            with pytest.raises(NetworkError) as exc_info:
                await transport(url, PARAMS, HEADERS, 5)
        finally:
            await transport.close()

        assert isinstance(exc_info.value.cause, aiohttp.ClientError)

    @pytest.mark.asyncio
    async def test_rate_limit_spaces_requests(self):
        transport = AiohttpTransport(rate_limit=1, rate_period=0.2)
        loop = asyncio.get_running_loop()
        async with LocalServer(make_app()) as server:
            url = str(server.make_url("/echo"))
            try:
                started = loop.time()
                for _ in range(3):
                    await transport(url, PARAMS, HEADERS, 5)
                elapsed = loop.time() - started
            finally:
                await transport.close()

        assert elapsed >= 0.35

    @pytest.mark.asyncio
    async def test_owned_session_is_closed(self):
        transport = AiohttpTransport()
        async with LocalServer(make_app()) as server:
            await transport(str(server.make_url("/echo")), PARAMS, HEADERS, 5)
            session = transport._session
            await transport.close()

        assert session.closed

    @pytest.mark.asyncio
    async def test_borrowed_session_is_left_open(self):
        async with aiohttp.ClientSession() as session:
            transport = AiohttpTransport(session=session)
            async with LocalServer(make_app()) as server:
                await transport(str(server.make_url("/echo")), PARAMS, HEADERS, 5)
            await transport.close()

            assert not session.closed


class TestClientOverHttp:
    """Test SaavnClient with its default transport"""

    @pytest.mark.asyncio
    async def test_invalid_utf8_search_is_api_failure(self):
        async with LocalServer(make_app()) as server:
            config = ClientConfig(base_url=str(server.make_url("/invalid-utf8")))
            async with SaavnClient(config) as client:
                result = await client.search_songs("believer")

        assert result.success is False
        assert result.code == "API"

    @pytest.mark.asyncio
    async def test_search_over_http(self):
        async with LocalServer(make_app()) as server:
            config = ClientConfig(base_url=str(server.make_url("/html")))
            async with SaavnClient(config) as client:
                result = await client.search_songs("believer", page=0)

        assert result.success
        assert result.data.total == 0
        assert result.data.page == 0
